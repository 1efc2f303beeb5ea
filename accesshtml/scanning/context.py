"""Context analysis around a matched tag.

Ancestry and siblings are approximated from a bounded text window by counting
open and close tags, so results may be wrong for unbalanced markup.
"""

from __future__ import annotations

import re

from accesshtml.scanning.tags import (
    TagMatch,
    close_tag_pattern,
    iter_tags,
    open_tag_pattern,
    strip_tags,
)

DEFAULT_RADIUS = 1000

_HEADING_RE = re.compile(r"<h([1-6])(?=[\s>])[^>]*>(.*?)</h\1\s*>", re.IGNORECASE | re.DOTALL)
_NUMERIC_RE = re.compile(r"^\d+$")
_PUNCT_RE = re.compile(r"^[^\w]+$")


class ContextAnalyzer:
    """Answers structural questions about a tag from the text around it."""

    def __init__(self, content: str, radius: int = DEFAULT_RADIUS) -> None:
        self.content = content
        self.radius = radius

    def _lower_bound(self, match: TagMatch) -> int:
        return max(0, match.start - self.radius)

    def _upper_bound(self, match: TagMatch) -> int:
        return min(len(self.content), match.end + self.radius)

    def window(self, match: TagMatch) -> str:
        return self.content[self._lower_bound(match):self._upper_bound(match)]

    def before(self, match: TagMatch) -> str:
        return self.content[self._lower_bound(match):match.start]

    def after(self, match: TagMatch) -> str:
        return self.content[match.end:self._upper_bound(match)]

    def enclosing(self, match: TagMatch, tag: str) -> TagMatch | None:
        """Nearest unclosed *tag* opened before *match*, if any.

        Inside means the preceding window holds more opening than closing
        tags of that kind.
        """
        lo = self._lower_bound(match)
        opens = list(iter_tags(self.content, tag, start=lo, end=match.start))
        if not opens:
            return None
        closes = list(close_tag_pattern(tag).finditer(self.content, lo, match.start))
        if len(opens) - len(closes) <= 0:
            return None

        events = [(t.start, 1, t) for t in opens] + [(c.start(), -1, None) for c in closes]
        stack: list[TagMatch] = []
        for _, delta, tag_match in sorted(events, key=lambda e: e[0]):
            if delta > 0:
                stack.append(tag_match)
            elif stack:
                stack.pop()
        return stack[-1] if stack else opens[-1]

    def is_inside(self, match: TagMatch, tag: str) -> bool:
        return self.enclosing(match, tag) is not None

    def element_text(self, opener: TagMatch) -> str:
        """Text content of the element opened by *opener*, up to its close tag."""
        close = close_tag_pattern(opener.name).search(
            self.content, opener.end, min(len(self.content), opener.end + 2 * self.radius)
        )
        end = close.start() if close else min(len(self.content), opener.end + self.radius)
        return strip_tags(self.content[opener.end:end])

    def following_sibling(self, match: TagMatch, tag: str) -> str | None:
        """Text of the next *tag* element within the forward window."""
        hi = self._upper_bound(match)
        opener = open_tag_pattern(tag).search(self.content, match.end, hi)
        if opener is None:
            return None
        close = close_tag_pattern(tag).search(self.content, opener.end(), hi)
        if close is None:
            return None
        text = strip_tags(self.content[opener.end():close.start()])
        return text or None

    def preceding_heading(self, match: TagMatch) -> str | None:
        """Text of the closest heading that ends before *match*."""
        found: str | None = None
        for m in _HEADING_RE.finditer(self.content, self._lower_bound(match), match.start):
            text = strip_tags(m.group(2))
            if text:
                found = text
        return found

    def meaningful_words(self, match: TagMatch, limit: int | None = None) -> list[str]:
        """Words from the surrounding window, minus short, numeric and punctuation tokens."""
        text = strip_tags(self.window(match))
        words = [
            w for w in text.split()
            if len(w) > 2 and not _NUMERIC_RE.match(w) and not _PUNCT_RE.match(w)
        ]
        return words[:limit] if limit is not None else words
