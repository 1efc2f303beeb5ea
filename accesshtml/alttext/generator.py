"""Alt text generation.

Enhanced mode tries a sequence of strategies chosen by the configured
creativity level and the image classification.  The first candidate that
passes validation is refined and returned.  Basic mode maps keywords in the
image ``src`` to a fixed word.  Both modes end in a fallback chain that always
yields a valid value.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from accesshtml.alttext import vocabulary as vocab
from accesshtml.alttext.classifier import contains_keyword, filename_stem
from accesshtml.alttext.selection import FirstWord, WordSelector, make_selector
from accesshtml.config import AltTextConfig
from accesshtml.models import AltTextAnalysis, ImageType
from accesshtml.scanning.tags import strip_tags

logger = logging.getLogger(__name__)

MIN_LENGTH = 2

_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?\s*%?")
_DESCRIPTIVE_RE = re.compile(
    r"\b(beautiful|amazing|professional|modern|elegant)\b|(美しい|素晴らしい|プロフェッショナル|モダン|エレガント)",
    re.IGNORECASE,
)
_BRAND_PATTERNS = (
    re.compile(r"company[^>]*>([^<]+)", re.IGNORECASE),
    re.compile(r"brand[^>]*>([^<]+)", re.IGNORECASE),
    re.compile(r"<title[^>]*>([^<]+)", re.IGNORECASE),
    re.compile(r"""alt\s*=\s*["']([^"']*logo[^"']*)["']""", re.IGNORECASE),
)

_CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("person", ("person", "people", "man", "woman", "人物", "人")),
    ("nature", ("nature", "landscape", "自然", "風景")),
    ("building", ("building", "architecture", "建物", "建築")),
    ("food", ("food", "restaurant", "食べ物", "料理")),
    ("technology", ("tech", "computer", "device", "技術", "コンピューター")),
)
_CONTEXT_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("business", ("business", "company", "corporate", "ビジネス", "企業", "会社")),
    ("education", ("education", "learning", "school", "教育", "学習", "学校")),
    ("technology", ("technology", "tech", "digital", "技術", "テクノロジー", "デジタル")),
    ("lifestyle", ("lifestyle", "personal", "daily", "ライフスタイル", "個人", "日常")),
)
_ACTION_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("showing", ("show", "display", "present", "表示", "示す")),
    ("working", ("work", "operate", "use", "作業", "操作", "使用")),
    ("enjoying", ("enjoy", "experience", "taste", "楽しむ", "体験", "味わう")),
    ("creating", ("create", "build", "develop", "作成", "構築", "開発")),
)
_POSITIVE = ("success", "happy", "great", "excellent", "成功", "素晴らしい", "優秀")
_DYNAMIC = ("action", "energy", "dynamic", "power", "アクション", "エネルギー", "ダイナミック")
_INCREASING = ("increase", "rise", "up", "増加", "上昇", "向上")
_DECREASING = ("decrease", "fall", "down", "減少", "下降", "低下")


def _first_match(text: str, table: tuple[tuple[str, tuple[str, ...]], ...]) -> str | None:
    for name, keywords in table:
        if contains_keyword(text, keywords):
            return name
    return None


class AltTextGenerator:
    """Produces alt text for images in one configured language."""

    def __init__(
        self,
        config: AltTextConfig | None = None,
        language: str = "ja",
        selector: WordSelector | None = None,
    ) -> None:
        self.config = config or AltTextConfig()
        self.language = language
        self.lang_key = vocab.resolve_language(language)
        self.phrases = vocab.phrases(language)
        self.selector = selector or make_selector(self.config.selection, self.config.seed)
        self._first = FirstWord()

    # -- public API ---------------------------------------------------------

    def generate(self, analysis: AltTextAnalysis) -> str:
        """Multi-strategy generation for one analyzed image."""
        for strategy in self.select_strategies(analysis):
            candidate = strategy(analysis)
            if candidate and self.validate(candidate):
                refined = self.refine(candidate)
                if self.validate(refined):
                    logger.debug("Alt text from %s: %r", strategy.__name__, refined)
                    return refined
        return self.fallback(analysis.src)

    def basic(self, src: str) -> str:
        """Keyword lookup on *src*, falling back when the keyword word is unusable."""
        lowered = src.lower()
        for keywords, word in vocab.BASIC_KEYWORDS[self.lang_key]:
            if any(k in lowered for k in keywords):
                if self.validate(word):
                    return word
                break
        return self.fallback(src)

    def fallback(self, src: str) -> str:
        """Filename-derived text, or the language's safe default word."""
        cleaned = re.sub(r"[-_]+", " ", filename_stem(src)).strip()
        if cleaned:
            if self.lang_key == "ja":
                candidate = re.sub(r"\b\w", lambda m: m.group(0).upper(), cleaned)
            else:
                candidate = cleaned[0].upper() + cleaned[1:]
            candidate = self.refine(candidate)
            if self.validate(candidate):
                return candidate
        return vocab.SAFE_DEFAULT.get(self.lang_key, vocab.SAFE_DEFAULT[vocab.FALLBACK_LANGUAGE])

    def validate(self, text: str | None) -> bool:
        if not text or not isinstance(text, str):
            return False
        trimmed = text.strip()
        if len(trimmed) < MIN_LENGTH or len(trimmed) > self.config.max_length:
            return False
        lowered = trimmed.lower()
        if any(word in lowered for word in vocab.FORBIDDEN_WORDS):
            return False
        return not any(marker in lowered for marker in vocab.PLACEHOLDER_MARKERS)

    def refine(self, text: str) -> str:
        refined = re.sub(r"[<>]", "", text.strip())
        refined = re.sub(r"\s+", " ", refined).strip()
        if len(refined) > self.config.max_length:
            refined = refined[: self.config.max_length - 3] + "..."
        if refined and not vocab.is_unspaced(self.language):
            refined = refined[0].upper() + refined[1:]
        return refined

    def select_strategies(self, analysis: AltTextAnalysis) -> list[Callable[[AltTextAnalysis], str | None]]:
        strategies = [
            self.contextual,
            self.semantic,
            self.emotional,
            self.action_based,
            self.brand_aware,
            self.technical,
        ]
        creativity = self.config.creativity
        if creativity == "conservative":
            return strategies[:2]
        if creativity == "creative":
            return strategies
        if analysis.image_type is ImageType.DECORATIVE:
            return strategies[:1]
        if analysis.image_type is ImageType.DATA_VISUALIZATION:
            return [strategies[0], strategies[5]]
        return strategies[:4]

    # -- strategies ---------------------------------------------------------

    def contextual(self, analysis: AltTextAnalysis) -> str | None:
        """Figure caption, then parent link text, then heading, then prose."""
        if analysis.figcaption:
            word = self.selector.select(self._type_words(analysis))
            if word:
                return self.phrases.caption.format(word=word, caption=analysis.figcaption)
            return analysis.figcaption
        if analysis.link_text:
            return self.phrases.link.format(text=analysis.link_text)
        word = self._first.select(self._type_words(analysis))
        if analysis.nearby_heading:
            if word:
                return self.phrases.heading.format(heading=analysis.nearby_heading, word=word)
            return analysis.nearby_heading
        key_words = " ".join(analysis.surrounding_text.split()[:3])
        if key_words:
            if word:
                return self.phrases.text.format(text=key_words, word=word)
            return key_words
        return None

    def semantic(self, analysis: AltTextAnalysis) -> str | None:
        """Subject category and descriptive words detected in src and context."""
        text = f"{analysis.src} {strip_tags(analysis.context)}"
        if not text.strip():
            return None
        category = _first_match(text, _CATEGORY_KEYWORDS) or "object"
        subject = self.selector.select(vocab.words(self.language, "types", category))
        if not subject:
            return None

        descriptive = _DESCRIPTIVE_RE.search(analysis.context)
        if descriptive:
            subject = self._join([descriptive.group(0), subject])

        if self.config.include_brand_context:
            context_type = _first_match(text, _CONTEXT_KEYWORDS)
            context_word = self._first.select(vocab.words(self.language, "contexts", context_type or ""))
            if context_word:
                return self.phrases.context_prefix.format(context=context_word, subject=subject)
        return subject

    def emotional(self, analysis: AltTextAnalysis) -> str | None:
        """Tone adjective prefixed to the basic type word; opt-in."""
        if not self.config.include_emotions:
            return None
        text = strip_tags(analysis.context)
        if contains_keyword(text, _POSITIVE):
            tone = "positive"
        elif contains_keyword(text, _DYNAMIC):
            tone = "dynamic"
        else:
            tone = "neutral"
        emotion = self.selector.select(vocab.words(self.language, "emotions", tone))
        base = self._base_word(analysis)
        if not emotion or not base:
            return None
        return self.phrases.emotion.format(emotion=emotion, base=base)

    def action_based(self, analysis: AltTextAnalysis) -> str | None:
        action_type = _first_match(strip_tags(analysis.context), _ACTION_KEYWORDS)
        if action_type is None:
            return None
        action = self.selector.select(vocab.words(self.language, "actions", action_type))
        subject = self._base_word(analysis)
        if not action or not subject:
            return None
        return self.phrases.action.format(subject=subject, action=action)

    def brand_aware(self, analysis: AltTextAnalysis) -> str | None:
        if not self.config.include_brand_context:
            return None
        brand = None
        for pattern in _BRAND_PATTERNS:
            m = pattern.search(analysis.context)
            if m:
                brand = re.sub(r"\s*logo\s*", " ", m.group(1), flags=re.IGNORECASE).strip()
                break
        base = self._base_word(analysis)
        if not brand or not base:
            return None
        return self.phrases.brand.format(brand=brand, base=base)

    def technical(self, analysis: AltTextAnalysis) -> str | None:
        """Chart type, up to three numbers from the context and the trend direction."""
        if analysis.image_type not in (ImageType.DATA_VISUALIZATION, ImageType.COMPLEX):
            return None
        text = strip_tags(analysis.context)
        if not (contains_keyword(analysis.src, ("chart", "graph")) or contains_keyword(text, ("chart", "graph", "グラフ", "チャート"))):
            return None

        charts = self.phrases.chart
        if contains_keyword(text, ("bar", "column", "棒")):
            parts = [charts["bar"]]
        elif contains_keyword(text, ("pie", "円")):
            parts = [charts["pie"]]
        elif contains_keyword(text, ("line", "線")):
            parts = [charts["line"]]
        else:
            parts = [charts["generic"]]

        numbers = [n.strip() for n in _NUMBER_RE.findall(text)][:3]
        if numbers:
            parts.append(", ".join(numbers))
        if contains_keyword(text, _INCREASING):
            parts.append(self.phrases.trend["increasing"])
        elif contains_keyword(text, _DECREASING):
            parts.append(self.phrases.trend["decreasing"])
        return self._join(parts)

    # -- helpers ------------------------------------------------------------

    def _type_words(self, analysis: AltTextAnalysis) -> list[str]:
        category = vocab.IMAGE_TYPE_CATEGORY.get(analysis.image_type.value, "object")
        return vocab.words(self.language, "types", category)

    def _base_word(self, analysis: AltTextAnalysis) -> str | None:
        return self._first.select(self._type_words(analysis))

    def _join(self, parts: list[str]) -> str | None:
        valid = [p.strip() for p in parts if p and p.strip()]
        if not valid:
            return None
        separator = "" if vocab.is_unspaced(self.language) else " "
        return separator.join(valid)
