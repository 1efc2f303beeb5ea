"""Base protocol for per-rule fixers."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from accesshtml.config import AccessHTMLConfig
from accesshtml.models import Issue


@runtime_checkable
class Fixer(Protocol):
    """Interface that every per-rule fixer must implement.

    Each fixer addresses a single accessibility concern (lang, alt, roles,
    etc.).  ``analyze`` reports issues without changing anything; ``fix``
    returns the full rewritten document, or the input unchanged.  Applying
    ``fix`` to its own output must not change it again.
    """

    name: str  # short rule name used for selection, e.g. "lang"
    config: AccessHTMLConfig

    def analyze(self, content: str) -> list[Issue]:
        ...

    def fix(self, content: str) -> str:
        """Return *content* with this rule's fixes applied.

        Unexpected exceptions are allowed to propagate; the pipeline records
        them as an error result for the file.
        """
        ...
