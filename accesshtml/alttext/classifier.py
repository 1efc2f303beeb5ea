"""Image classification and alt text quality checks."""

from __future__ import annotations

import logging
import re
from pathlib import PurePosixPath

from accesshtml.config import AltTextConfig
from accesshtml.models import AltTextAnalysis, ImageType, Issue, IssueKind, Severity
from accesshtml.scanning.context import ContextAnalyzer
from accesshtml.scanning.tags import TagMatch, iter_tags

logger = logging.getLogger(__name__)

RULE = "alt"
MIN_ALT_LENGTH = 3

_DECORATIVE = ("decoration", "border", "spacer", "divider", "background", "texture", "pattern")
_DATA_VIZ = ("chart", "graph", "plot", "diagram", "infographic", "グラフ", "図表", "チャート")
_COMPLEX = ("flowchart", "timeline", "map", "blueprint", "schematic", "フローチャート", "地図", "設計図")
_LOGO = ("logo", "brand", "ロゴ", "ブランド")
_ICON = ("icon", "btn", "button", "アイコン", "ボタン")
_CONTENT = ("article", "content", "story", "news", "記事", "コンテンツ", "ニュース")

_REDUNDANT = ("image", "picture", "photo", "graphic", "img", "画像", "写真", "イメージ", "図", "図表")
_GENERIC = ("click here", "read more", "learn more", "see more", "ここをクリック", "詳細", "もっと見る")
_DATA_KEYWORDS = ("increase", "decrease", "trend", "percent", "%", "増加", "減少", "トレンド", "パーセント")


def contains_keyword(text: str, keywords: tuple[str, ...]) -> bool:
    """Case-insensitive keyword test; ASCII words must match on word boundaries."""
    lowered = text.lower()
    for keyword in keywords:
        kw = keyword.lower()
        if kw.isascii() and kw.replace(" ", "").isalpha():
            if re.search(rf"(?<![a-z]){re.escape(kw)}", lowered):
                return True
        elif kw in lowered:
            return True
    return False


def _src_has(src: str, keywords: tuple[str, ...]) -> bool:
    lowered = src.lower()
    return any(k.lower() in lowered for k in keywords)


def filename_stem(src: str) -> str:
    """``/img/hero-banner.v2.png?x=1`` -> ``hero-banner``."""
    path = src.split("?", 1)[0].split("#", 1)[0]
    name = PurePosixPath(path).name
    return name.split(".", 1)[0]


def classify_image(tag: TagMatch, analysis: AltTextAnalysis) -> ImageType:
    src = analysis.src
    context = analysis.context.lower()

    if _src_has(src, _DECORATIVE):
        return ImageType.DECORATIVE
    if _src_has(src, _DATA_VIZ) or contains_keyword(context, _DATA_VIZ):
        return ImageType.DATA_VISUALIZATION
    if _src_has(src, _COMPLEX) or contains_keyword(context, _COMPLEX):
        return ImageType.COMPLEX
    if _src_has(src, _LOGO) or contains_keyword(context, _LOGO):
        return ImageType.LOGO
    # Only the image's own interactive ancestry counts as a click target.
    clickable = analysis.parent_link is not None or analysis.parent_button or tag.has("onclick")
    if _src_has(src, _ICON) or clickable:
        return ImageType.FUNCTIONAL_ICON
    if contains_keyword(context, _CONTENT):
        return ImageType.CONTENT
    return ImageType.INFORMATIVE


def analyze_image(tag: TagMatch, context: ContextAnalyzer) -> AltTextAnalysis:
    """Build the analysis record for one ``<img>`` tag."""
    parent_link = context.enclosing(tag, "a")
    analysis = AltTextAnalysis(
        image_type=ImageType.INFORMATIVE,
        src=tag.get("src") or "",
        alt=(tag.get("alt") or "") if tag.has("alt") else None,
        title=tag.get("title") or "",
        aria_label=tag.get("aria-label") or "",
        role=tag.get("role") or "",
        context=context.window(tag),
        parent_link=parent_link.text if parent_link else None,
        link_text=(context.element_text(parent_link) or None) if parent_link else None,
        parent_figure=context.is_inside(tag, "figure"),
        parent_button=context.is_inside(tag, "button"),
        figcaption=context.following_sibling(tag, "figcaption"),
        nearby_heading=context.preceding_heading(tag),
        surrounding_text=" ".join(context.meaningful_words(tag, limit=8)),
    )
    analysis.image_type = classify_image(tag, analysis)
    logger.debug("Classified %s as %s", analysis.src or "<no src>", analysis.image_type.value)
    return analysis


def check_alt_quality(analysis: AltTextAnalysis, config: AltTextConfig) -> list[Issue]:
    """Quality issues for one analyzed image.

    With ``config.strict`` every warning is reported as an error.
    """
    issues: list[Issue] = []
    alt = analysis.alt

    if alt is None:
        issues.append(_issue(IssueKind.MISSING_ALT, Severity.ERROR, f"Image {analysis.src or '(no src)'} has no alt attribute"))
        return _apply_strict(issues, config)

    if alt == "":
        if analysis.image_type is ImageType.DECORATIVE:
            return issues
        issues.append(_issue(IssueKind.EMPTY_ALT, Severity.ERROR, f"Image {analysis.src or '(no src)'} has empty alt text but conveys content"))

    if len(alt) > config.max_length:
        issues.append(_issue(
            IssueKind.ALT_TOO_LONG, Severity.WARNING,
            f"Alt text is too long ({len(alt)} chars, limit {config.max_length})",
        ))
    if alt and len(alt) < MIN_ALT_LENGTH and analysis.image_type is not ImageType.DECORATIVE:
        issues.append(_issue(IssueKind.ALT_TOO_SHORT, Severity.WARNING, f"Alt text is too short ({len(alt)} chars)"))

    issues.extend(_check_content(analysis))
    issues.extend(_check_consistency(analysis))
    issues.extend(_check_type_requirements(analysis))
    return _apply_strict(issues, config)


def analyze_alt_attributes(content: str, config: AltTextConfig) -> list[tuple[TagMatch, AltTextAnalysis]]:
    """Analyze every ``<img>`` in *content*; issues are attached to each analysis."""
    context = ContextAnalyzer(content, config.context_radius)
    analyzed: list[tuple[TagMatch, AltTextAnalysis]] = []
    for tag in iter_tags(content, "img"):
        analysis = analyze_image(tag, context)
        analysis.issues = check_alt_quality(analysis, config)
        analyzed.append((tag, analysis))
    return analyzed


def _check_content(analysis: AltTextAnalysis) -> list[Issue]:
    alt = analysis.alt or ""
    if not alt:
        return []
    issues: list[Issue] = []
    lowered = alt.lower()

    redundant = next((w for w in _REDUNDANT if w in lowered), None)
    if redundant:
        issues.append(_issue(IssueKind.REDUNDANT_WORDS, Severity.WARNING, f'Alt text contains redundant word "{redundant}"'))

    stem = filename_stem(analysis.src).lower()
    if stem and stem in lowered:
        issues.append(_issue(IssueKind.FILENAME_IN_ALT, Severity.WARNING, "Alt text repeats the file name"))

    generic = next((g for g in _GENERIC if g in lowered), None)
    if generic:
        issues.append(_issue(IssueKind.GENERIC_ALT, Severity.ERROR, f'Alt text is too generic: "{generic}"'))

    if analysis.image_type is ImageType.DATA_VISUALIZATION and not any(k in lowered for k in _DATA_KEYWORDS):
        issues.append(_issue(
            IssueKind.MISSING_DATA_DESCRIPTION, Severity.ERROR,
            "Chart alt text does not describe the data or trend",
        ))
    return issues


def _check_consistency(analysis: AltTextAnalysis) -> list[Issue]:
    issues: list[Issue] = []
    alt = analysis.alt
    if alt and analysis.aria_label and alt != analysis.aria_label:
        issues.append(_issue(IssueKind.INCONSISTENT_LABELS, Severity.WARNING, "Alt text and aria-label differ"))
    if alt and analysis.title and alt == analysis.title:
        issues.append(_issue(IssueKind.REDUNDANT_TITLE, Severity.INFO, "Title attribute duplicates the alt text"))
    return issues


def _check_type_requirements(analysis: AltTextAnalysis) -> list[Issue]:
    alt = analysis.alt
    if analysis.image_type is ImageType.FUNCTIONAL_ICON and analysis.parent_link and not alt:
        return [_issue(
            IssueKind.FUNCTIONAL_MISSING_ALT, Severity.ERROR,
            "Icon inside a link needs alt text describing the action",
        )]
    if analysis.image_type is ImageType.LOGO and alt and not contains_keyword(alt, ("logo", "ロゴ")):
        return [_issue(IssueKind.LOGO_MISSING_CONTEXT, Severity.WARNING, 'Logo alt text should mention "logo"')]
    return []


def _issue(kind: IssueKind, severity: Severity, message: str) -> Issue:
    return Issue(rule=RULE, kind=kind, severity=severity, message=message)


def _apply_strict(issues: list[Issue], config: AltTextConfig) -> list[Issue]:
    if config.strict:
        for issue in issues:
            if issue.severity == Severity.WARNING:
                issue.severity = Severity.ERROR
    return issues
