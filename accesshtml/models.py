"""Shared data models used across the AccessHTML rule engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class Severity(str, enum.Enum):
    """Severity level for accessibility issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueKind(str, enum.Enum):
    """Enumerated issue kinds, grouped by the rule that reports them."""

    # lang
    MISSING_LANG = "MISSING_LANG"
    EMPTY_LANG = "EMPTY_LANG"
    # alt
    MISSING_ALT = "MISSING_ALT"
    EMPTY_ALT = "EMPTY_ALT"
    ALT_TOO_LONG = "ALT_TOO_LONG"
    ALT_TOO_SHORT = "ALT_TOO_SHORT"
    REDUNDANT_WORDS = "REDUNDANT_WORDS"
    FILENAME_IN_ALT = "FILENAME_IN_ALT"
    GENERIC_ALT = "GENERIC_ALT"
    MISSING_DATA_DESCRIPTION = "MISSING_DATA_DESCRIPTION"
    INCONSISTENT_LABELS = "INCONSISTENT_LABELS"
    REDUNDANT_TITLE = "REDUNDANT_TITLE"
    FUNCTIONAL_MISSING_ALT = "FUNCTIONAL_MISSING_ALT"
    LOGO_MISSING_CONTEXT = "LOGO_MISSING_CONTEXT"
    # role
    INVALID_ROLE = "INVALID_ROLE"
    DUPLICATE_ROLE = "DUPLICATE_ROLE"
    REDUNDANT_ROLE = "REDUNDANT_ROLE"
    # aria
    MALFORMED_ARIA_LABEL = "MALFORMED_ARIA_LABEL"
    EMPTY_ARIA_LABEL = "EMPTY_ARIA_LABEL"
    DUPLICATE_ARIA_LABEL = "DUPLICATE_ARIA_LABEL"
    MISSING_LABEL = "MISSING_LABEL"
    # forms
    MISSING_FORM_LABEL = "MISSING_FORM_LABEL"
    # interactive controls
    EMPTY_BUTTON = "EMPTY_BUTTON"
    EMPTY_LINK = "EMPTY_LINK"
    NESTED_INTERACTIVE = "NESTED_INTERACTIVE"
    # landmarks
    MISSING_MAIN = "MISSING_MAIN"
    MULTIPLE_MAIN = "MULTIPLE_MAIN"
    # headings
    NO_HEADINGS = "NO_HEADINGS"
    MISSING_H1 = "MISSING_H1"
    MULTIPLE_H1 = "MULTIPLE_H1"
    SKIPPED_HEADING_LEVEL = "SKIPPED_HEADING_LEVEL"
    EMPTY_HEADING = "EMPTY_HEADING"
    # description lists
    EMPTY_DL = "EMPTY_DL"
    MISSING_DT = "MISSING_DT"
    MISSING_DD = "MISSING_DD"
    INVALID_DL_CHILD = "INVALID_DL_CHILD"
    EMPTY_DT = "EMPTY_DT"
    EMPTY_DD = "EMPTY_DD"
    INSUFFICIENT_DD = "INSUFFICIENT_DD"
    # meta
    MISSING_CHARSET = "MISSING_CHARSET"
    NON_UTF8_CHARSET = "NON_UTF8_CHARSET"
    MISSING_VIEWPORT = "MISSING_VIEWPORT"
    MISSING_DESCRIPTION = "MISSING_DESCRIPTION"
    DESCRIPTION_LENGTH = "DESCRIPTION_LENGTH"
    MISSING_TITLE = "MISSING_TITLE"
    EMPTY_TITLE = "EMPTY_TITLE"
    TITLE_LENGTH = "TITLE_LENGTH"
    META_TYPO = "META_TYPO"
    # gtm
    GTM_NOT_INSTALLED = "GTM_NOT_INSTALLED"
    GTM_INCOMPLETE = "GTM_INCOMPLETE"
    GTM_ID_MISMATCH = "GTM_ID_MISMATCH"
    GTM_SCRIPT_NOT_IN_HEAD = "GTM_SCRIPT_NOT_IN_HEAD"
    GTM_NOSCRIPT_MISPLACED = "GTM_NOSCRIPT_MISPLACED"


@dataclass
class Issue:
    """A single accessibility issue found during analysis."""

    rule: str
    kind: IssueKind
    severity: Severity
    message: str
    detail: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "rule": self.rule,
            "kind": self.kind.value,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.detail is not None:
            data["detail"] = self.detail
        return data


class FixStatus(str, enum.Enum):
    """Outcome of running one fixer over one file."""

    FIXED = "fixed"
    NO_CHANGE = "no-change"
    ERROR = "error"


@dataclass
class FixResult:
    """Result from running a single fixer over a single file."""

    file: Path
    status: FixStatus
    issues: list[Issue] = field(default_factory=list)
    error: str | None = None

    @property
    def issue_count(self) -> int:
        return len(self.issues)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"file": str(self.file), "status": self.status.value}
        if self.status is FixStatus.ERROR:
            data["error"] = self.error
        else:
            data["issues"] = self.issue_count
        return data


@dataclass
class RunSummary:
    """Aggregate counts across the per-file results of one fixer run."""

    results: list[FixResult] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.results)

    @property
    def fixed_count(self) -> int:
        return sum(1 for r in self.results if r.status is FixStatus.FIXED)

    @property
    def unchanged_count(self) -> int:
        return sum(1 for r in self.results if r.status is FixStatus.NO_CHANGE)

    @property
    def error_count(self) -> int:
        return sum(1 for r in self.results if r.status is FixStatus.ERROR)

    @property
    def total_issues(self) -> int:
        return sum(r.issue_count for r in self.results)

    def to_dict(self) -> dict[str, int]:
        return {
            "totalFiles": self.total_files,
            "fixed": self.fixed_count,
            "noChange": self.unchanged_count,
            "errors": self.error_count,
            "totalIssues": self.total_issues,
        }


class ImageType(str, enum.Enum):
    """Classification of an image by the role it plays on the page."""

    DECORATIVE = "decorative"
    LOGO = "logo"
    FUNCTIONAL_ICON = "functional-icon"
    DATA_VISUALIZATION = "data-visualization"
    COMPLEX = "complex"
    CONTENT = "content"
    INFORMATIVE = "informative"


@dataclass
class AltTextAnalysis:
    """Everything known about one ``<img>`` before alt text is generated."""

    image_type: ImageType
    src: str = ""
    alt: str | None = None  # None when the attribute is absent
    title: str = ""
    aria_label: str = ""
    role: str = ""
    context: str = ""
    parent_link: str | None = None  # raw opening <a> tag text
    link_text: str | None = None
    parent_figure: bool = False
    parent_button: bool = False
    figcaption: str | None = None
    nearby_heading: str | None = None
    surrounding_text: str = ""
    issues: list[Issue] = field(default_factory=list)


@dataclass
class BrokenLink:
    """One local reference that does not resolve to a file on disk."""

    type: str  # e.g. "Broken link", "Missing CSS"
    url: str
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "url": self.url, "reason": self.reason}


@dataclass
class LinkCheckResult:
    """Broken references found in one HTML file."""

    file: Path
    links: list[BrokenLink] = field(default_factory=list)
    error: str | None = None

    @property
    def broken_links(self) -> int:
        return len(self.links)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "file": str(self.file),
            "brokenLinks": self.broken_links,
            "links": [link.to_dict() for link in self.links],
        }
        if self.error is not None:
            data["status"] = FixStatus.ERROR.value
            data["error"] = self.error
        return data


@dataclass
class MetaCheckResult:
    """Meta tag findings for one HTML file."""

    file: Path
    issues: list[Issue] = field(default_factory=list)
    meta: dict[str, str] = field(default_factory=dict)
    error: str | None = None

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.WARNING)

    def to_dict(self) -> dict[str, Any]:
        if self.error is not None:
            return {"file": str(self.file), "status": FixStatus.ERROR.value, "error": self.error}
        return {
            "file": str(self.file),
            "issues": self.error_count,
            "warnings": self.warning_count,
            "meta": dict(self.meta),
        }


@dataclass
class GtmCheckResult:
    """Google Tag Manager installation findings for one HTML file."""

    file: Path
    gtm_id: str | None = None
    has_head_script: bool = False
    has_body_noscript: bool = False
    issues: list[Issue] = field(default_factory=list)
    error: str | None = None

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.WARNING)

    def to_dict(self) -> dict[str, Any]:
        if self.error is not None:
            return {"file": str(self.file), "status": FixStatus.ERROR.value, "error": self.error}
        return {
            "file": str(self.file),
            "gtmId": self.gtm_id,
            "hasHeadScript": self.has_head_script,
            "hasBodyNoscript": self.has_body_noscript,
            "issues": self.error_count,
            "warnings": self.warning_count,
        }


@dataclass
class UnusedFile:
    """A project file that no HTML document references."""

    path: str  # root-relative, forward slashes
    absolute_path: Path
    size: int

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "absolutePath": str(self.absolute_path), "size": self.size}


@dataclass
class UnusedFilesResult:
    """Unused css/js/html files found under a scan root."""

    unused_css: list[UnusedFile] = field(default_factory=list)
    unused_js: list[UnusedFile] = field(default_factory=list)
    unused_html: list[UnusedFile] = field(default_factory=list)

    @property
    def total_unused(self) -> int:
        return len(self.unused_css) + len(self.unused_js) + len(self.unused_html)

    @property
    def total_size(self) -> int:
        return sum(f.size for f in (*self.unused_css, *self.unused_js, *self.unused_html))

    def to_dict(self) -> dict[str, Any]:
        return {
            "unusedCSS": [f.to_dict() for f in self.unused_css],
            "unusedJS": [f.to_dict() for f in self.unused_js],
            "unusedHTML": [f.to_dict() for f in self.unused_html],
            "totalUnused": self.total_unused,
        }


@dataclass
class LargeFile:
    """A file whose size exceeds the threshold for its category."""

    path: str
    size: int
    category: str
    threshold: int
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "size": self.size,
            "category": self.category,
            "threshold": self.threshold,
            "suggestions": list(self.suggestions),
        }


@dataclass
class FileSizeReport:
    """Per-category size totals plus the list of oversized files."""

    total_files: int = 0
    total_size: int = 0
    categories: dict[str, int] = field(default_factory=dict)  # category -> bytes
    large_files: list[LargeFile] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "totalSize": self.total_size,
            "categories": dict(self.categories),
            "largeFiles": [f.to_dict() for f in self.large_files],
        }
