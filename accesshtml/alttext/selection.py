"""Word selection policies for vocabulary lookups."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class WordSelector(Protocol):
    """Picks one word from an ordered candidate list."""

    def select(self, words: Sequence[str]) -> str | None:
        ...


class FirstWord:
    def select(self, words: Sequence[str]) -> str | None:
        return words[0] if words else None


class ShortestWord:
    def select(self, words: Sequence[str]) -> str | None:
        # min() keeps the earliest word on ties
        return min(words, key=len) if words else None


class RandomWord:
    """Uniform random choice; pass *seed* for a reproducible sequence."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def select(self, words: Sequence[str]) -> str | None:
        return self._rng.choice(list(words)) if words else None


def make_selector(name: str, seed: int | None = None) -> WordSelector:
    if name == "first":
        return FirstWord()
    if name == "shortest":
        return ShortestWord()
    if name == "random":
        return RandomWord(seed)
    raise ValueError(f"Unknown word selection policy: {name!r}")
