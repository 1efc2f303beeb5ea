"""Regex-based tag and attribute scanning over raw HTML text.

Nothing here builds a tree.  Tags are located with bounded, non-overlapping
pattern searches and attributes are read from the matched tag text only.
Quote characters inside unquoted or unbalanced attribute values are not
specially handled.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from functools import lru_cache

_ATTR_RE = re.compile(
    r"""([^\s"'<>/=]+)          # name
        (?:\s*=\s*
          (?:"([^"]*)"           # double-quoted
            |'([^']*)'           # single-quoted
            |([^\s"'=<>`]+)      # unquoted
          )
        )?""",
    re.VERBOSE,
)
_ANY_TAG_RE = re.compile(r"<([a-zA-Z][\w:-]*)(?=[\s/>])[^>]*>")
_TAG_STRIP_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")


@dataclass
class TagMatch:
    """One opening tag located in a document."""

    name: str  # lower-cased element name
    start: int
    end: int  # offset just past the closing '>'
    text: str
    attributes: dict[str, str | None] = field(default_factory=dict)

    def get(self, name: str) -> str | None:
        return self.attributes.get(name.lower())

    def has(self, name: str) -> bool:
        return name.lower() in self.attributes

    @property
    def self_closing(self) -> bool:
        return self.text.rstrip(">").rstrip().endswith("/")


@dataclass
class Element:
    """An opening tag plus the inner content up to its close tag."""

    tag: TagMatch
    inner: str
    end: int  # offset just past the close tag, or tag.end when unclosed
    closed: bool = True

    @property
    def start(self) -> int:
        return self.tag.start

    @property
    def inner_start(self) -> int:
        return self.tag.end

    @property
    def text(self) -> str:
        return strip_tags(self.inner)


@lru_cache(maxsize=64)
def _open_tag_re(names: tuple[str, ...]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(n) for n in names)
    return re.compile(rf"<({alternation})(?=[\s/>])[^>]*>", re.IGNORECASE)


@lru_cache(maxsize=64)
def _close_tag_re(names: tuple[str, ...]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(n) for n in names)
    return re.compile(rf"</({alternation})\s*>", re.IGNORECASE)


def open_tag_pattern(*names: str) -> re.Pattern[str]:
    return _open_tag_re(tuple(n.lower() for n in names))


def close_tag_pattern(*names: str) -> re.Pattern[str]:
    return _close_tag_re(tuple(n.lower() for n in names))


def iter_tags(content: str, *names: str, start: int = 0, end: int | None = None) -> Iterator[TagMatch]:
    """Yield opening tags of the given element names in document order."""
    pattern = open_tag_pattern(*names)
    stop = len(content) if end is None else end
    for m in pattern.finditer(content, start, stop):
        text = m.group(0)
        yield TagMatch(
            name=m.group(1).lower(),
            start=m.start(),
            end=m.end(),
            text=text,
            attributes=parse_attributes(text),
        )


def find_tags(content: str, *names: str) -> list[TagMatch]:
    return list(iter_tags(content, *names))


def iter_any_tags(content: str) -> Iterator[TagMatch]:
    """Yield every opening tag regardless of element name."""
    for m in _ANY_TAG_RE.finditer(content):
        text = m.group(0)
        yield TagMatch(
            name=m.group(1).lower(),
            start=m.start(),
            end=m.end(),
            text=text,
            attributes=parse_attributes(text),
        )


def find_elements(content: str, *names: str) -> list[Element]:
    """Locate elements and their inner content.

    The first close tag of the same name ends the element, so nested elements
    of the same kind are not paired correctly.  Use :func:`find_matching_close`
    where depth matters.
    """
    elements: list[Element] = []
    for tag in iter_tags(content, *names):
        close = close_tag_pattern(tag.name).search(content, tag.end)
        if close is None:
            elements.append(Element(tag=tag, inner="", end=tag.end, closed=False))
        else:
            elements.append(Element(tag=tag, inner=content[tag.end:close.start()], end=close.end()))
    return elements


def find_matching_close(content: str, name: str, pos: int) -> re.Match[str] | None:
    """Find the close tag balancing an opening tag that ends at *pos*."""
    opener = open_tag_pattern(name)
    closer = close_tag_pattern(name)
    depth = 1
    cursor = pos
    while True:
        close = closer.search(content, cursor)
        if close is None:
            return None
        for _ in opener.finditer(content, cursor, close.start()):
            depth += 1
        depth -= 1
        if depth == 0:
            return close
        cursor = close.end()


def iter_attributes(tag_text: str) -> Iterator[tuple[str, str | None, int, int]]:
    """Yield ``(name, value, start, end)`` for every attribute occurrence.

    *value* is None for a boolean attribute.  Offsets are relative to
    *tag_text*.  Duplicate attributes are all reported.
    """
    head = re.match(r"<\s*[^\s/>]+", tag_text)
    offset = head.end() if head else 0
    body_end = len(tag_text) - 1 if tag_text.endswith(">") else len(tag_text)
    for m in _ATTR_RE.finditer(tag_text, offset, body_end):
        if m.group(2) is not None:
            value: str | None = m.group(2)
        elif m.group(3) is not None:
            value = m.group(3)
        else:
            value = m.group(4)
        yield m.group(1).lower(), value, m.start(), m.end()


def parse_attributes(tag_text: str) -> dict[str, str | None]:
    """Name to value mapping; the first occurrence of a name wins."""
    attrs: dict[str, str | None] = {}
    for name, value, _, _ in iter_attributes(tag_text):
        attrs.setdefault(name, value)
    return attrs


def has_attribute(tag_text: str, name: str) -> bool:
    return name.lower() in parse_attributes(tag_text)


def get_attribute(tag_text: str, name: str) -> str | None:
    """Value of *name*; None when absent or boolean, ``""`` when empty."""
    return parse_attributes(tag_text).get(name.lower())


def count_attribute(tag_text: str, name: str) -> int:
    target = name.lower()
    return sum(1 for n, _, _, _ in iter_attributes(tag_text) if n == target)


def escape_attribute(value: str) -> str:
    return value.replace('"', "&quot;")


def set_attribute(tag_text: str, name: str, value: str) -> str:
    """Set *name* to *value*, replacing the first occurrence or appending."""
    rendered = f'{name}="{escape_attribute(value)}"'
    target = name.lower()
    for attr_name, _, start, end in iter_attributes(tag_text):
        if attr_name == target:
            return tag_text[:start] + rendered + tag_text[end:]
    return _append_attribute(tag_text, rendered)


def _append_attribute(tag_text: str, rendered: str) -> str:
    m = re.search(r"\s*/?>$", tag_text)
    if m is None:
        return f"{tag_text} {rendered}"
    closing = m.group(0).strip()
    if closing == "/>":
        return f"{tag_text[:m.start()]} {rendered} />"
    return f"{tag_text[:m.start()]} {rendered}>"


def remove_attribute(tag_text: str, name: str, *, keep_first: bool = False) -> str:
    """Remove occurrences of *name*; with *keep_first*, only the duplicates."""
    target = name.lower()
    spans = [(s, e) for n, _, s, e in iter_attributes(tag_text) if n == target]
    if keep_first:
        spans = spans[1:]
    result = tag_text
    for start, end in reversed(spans):
        # eat the whitespace separating the attribute from what precedes it
        while start > 0 and result[start - 1].isspace():
            start -= 1
        result = result[:start] + result[end:]
    return result


def remove_attribute_where(tag_text: str, name: str, predicate) -> str:
    """Remove every occurrence of *name* whose value satisfies *predicate*."""
    target = name.lower()
    spans = [(s, e) for n, v, s, e in iter_attributes(tag_text) if n == target and predicate(v)]
    result = tag_text
    for start, end in reversed(spans):
        while start > 0 and result[start - 1].isspace():
            start -= 1
        result = result[:start] + result[end:]
    return result


def strip_tags(fragment: str) -> str:
    """Drop markup, decode entities and collapse whitespace."""
    text = _TAG_STRIP_RE.sub(" ", fragment)
    text = html.unescape(text)
    return _WS_RE.sub(" ", text).strip()


def accessible_text(fragment: str) -> str:
    """Visible text plus the alt/aria-label of nested elements."""
    parts = [strip_tags(fragment)]
    for tag in iter_any_tags(fragment):
        for attr in ("alt", "aria-label"):
            value = tag.get(attr)
            if value and value.strip():
                parts.append(value.strip())
    return " ".join(p for p in parts if p).strip()


def title_hints(fragment: str) -> list[str]:
    """Texts of nested SVG ``<title>`` elements and ``title`` attributes."""
    hints = [el.text for el in find_elements(fragment, "title") if el.text]
    for tag in iter_any_tags(fragment):
        value = tag.get("title")
        if value and value.strip():
            hints.append(value.strip())
    return hints


def replace_spans(content: str, replacements: Iterable[tuple[int, int, str]]) -> str:
    """Apply non-overlapping ``(start, end, text)`` replacements."""
    ordered = sorted(replacements, key=lambda r: r[0])
    out: list[str] = []
    cursor = 0
    for start, end, text in ordered:
        out.append(content[cursor:start])
        out.append(text)
        cursor = end
    out.append(content[cursor:])
    return "".join(out)
