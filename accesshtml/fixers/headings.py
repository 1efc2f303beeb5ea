"""HeadingsAnalyzer: reports heading outline problems.

Heading structure needs editorial judgement, so :meth:`fix` never changes the
document.
"""

from __future__ import annotations

import logging

from accesshtml.config import AccessHTMLConfig
from accesshtml.models import Issue, IssueKind, Severity
from accesshtml.pipeline import register_fixer
from accesshtml.scanning.tags import Element, accessible_text, find_elements

logger = logging.getLogger(__name__)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


def heading_level(element: Element) -> int:
    return int(element.tag.name[1])


@register_fixer
class HeadingsAnalyzer:
    name = "headings"

    def __init__(self, config: AccessHTMLConfig) -> None:
        self.config = config

    def analyze(self, content: str) -> list[Issue]:
        headings = find_elements(content, *HEADING_TAGS)
        if not headings:
            return [Issue(self.name, IssueKind.NO_HEADINGS, Severity.INFO, "Page has no headings")]

        issues: list[Issue] = []
        levels = [heading_level(h) for h in headings]
        h1_count = levels.count(1)
        if h1_count == 0:
            issues.append(Issue(self.name, IssueKind.MISSING_H1, Severity.ERROR, "Page has no h1 heading"))
        elif levels[0] != 1:
            issues.append(Issue(
                self.name, IssueKind.MISSING_H1, Severity.WARNING,
                f"First heading is h{levels[0]}, expected h1",
            ))
        if h1_count > 1:
            issues.append(Issue(
                self.name, IssueKind.MULTIPLE_H1, Severity.WARNING,
                f"Found {h1_count} h1 headings, should have only one",
            ))

        for previous, current in zip(levels, levels[1:]):
            if current > previous + 1:
                issues.append(Issue(
                    self.name, IssueKind.SKIPPED_HEADING_LEVEL, Severity.WARNING,
                    f"Heading level skipped: h{previous} → h{current}",
                    detail=f"h{previous}-h{current}",
                ))

        for heading in headings:
            if not accessible_text(heading.inner):
                issues.append(Issue(
                    self.name, IssueKind.EMPTY_HEADING, Severity.ERROR,
                    f"<{heading.tag.name}> heading is empty",
                ))
        return issues

    def fix(self, content: str) -> str:
        return content
