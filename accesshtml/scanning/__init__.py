"""Text scanners: tag/attribute matching and context analysis."""

from accesshtml.scanning.context import ContextAnalyzer
from accesshtml.scanning.tags import Element, TagMatch, find_elements, find_tags

__all__ = ["ContextAnalyzer", "Element", "TagMatch", "find_elements", "find_tags"]
