"""Per-language vocabulary tables for alt text generation.

Each language maps a section (types, emotions, actions, contexts) to
categories, and each category to an ordered list of words.  Unknown
languages fall back to English.
"""

from __future__ import annotations

from dataclasses import dataclass, field

FALLBACK_LANGUAGE = "en"

# Languages written without spaces between words; parts are joined directly.
UNSPACED_LANGUAGES = frozenset({"ja", "zh", "ko"})

VOCABULARY: dict[str, dict[str, dict[str, list[str]]]] = {
    "ja": {
        "types": {
            "person": ["人物", "人", "男性", "女性", "子供", "大人"],
            "object": ["物", "商品", "アイテム", "製品"],
            "nature": ["自然", "風景", "景色", "環境"],
            "building": ["建物", "建築", "構造物", "施設"],
            "food": ["食べ物", "料理", "食品", "グルメ"],
            "technology": ["技術", "テクノロジー", "機器", "デバイス"],
            "art": ["芸術", "アート", "作品", "デザイン"],
            "vehicle": ["乗り物", "車両", "交通手段"],
        },
        "emotions": {
            "positive": ["明るい", "楽しい", "美しい", "素晴らしい", "魅力的な"],
            "neutral": ["シンプルな", "清潔な", "整然とした", "プロフェッショナルな"],
            "dynamic": ["活気のある", "エネルギッシュな", "ダイナミックな", "力強い"],
        },
        "actions": {
            "showing": ["示している", "表示している", "見せている"],
            "working": ["作業している", "働いている", "取り組んでいる"],
            "enjoying": ["楽しんでいる", "満喫している", "味わっている"],
            "creating": ["作成している", "制作している", "開発している"],
        },
        "contexts": {
            "business": ["ビジネス", "企業", "会社", "職場"],
            "education": ["教育", "学習", "研修", "トレーニング"],
            "lifestyle": ["ライフスタイル", "日常", "生活", "暮らし"],
            "technology": ["IT", "デジタル", "オンライン", "ウェブ"],
        },
    },
    "en": {
        "types": {
            "person": ["person", "people", "individual", "team", "group"],
            "object": ["object", "item", "product", "tool", "equipment"],
            "nature": ["nature", "landscape", "scenery", "environment"],
            "building": ["building", "architecture", "structure", "facility"],
            "food": ["food", "cuisine", "dish", "meal", "delicacy"],
            "technology": ["technology", "device", "gadget", "equipment"],
            "art": ["art", "artwork", "design", "creation"],
            "vehicle": ["vehicle", "transportation", "automobile"],
        },
        "emotions": {
            "positive": ["bright", "cheerful", "beautiful", "wonderful", "attractive"],
            "neutral": ["simple", "clean", "organized", "professional"],
            "dynamic": ["vibrant", "energetic", "dynamic", "powerful"],
        },
        "actions": {
            "showing": ["showing", "displaying", "presenting"],
            "working": ["working", "operating", "engaging"],
            "enjoying": ["enjoying", "experiencing", "savoring"],
            "creating": ["creating", "developing", "building"],
        },
        "contexts": {
            "business": ["business", "corporate", "company", "workplace"],
            "education": ["education", "learning", "training", "academic"],
            "lifestyle": ["lifestyle", "daily life", "personal", "casual"],
            "technology": ["technology", "digital", "online", "web"],
        },
    },
    "vi": {
        "types": {
            "person": ["người", "con người", "cá nhân", "nhóm", "đội ngũ"],
            "object": ["vật", "đồ vật", "sản phẩm", "công cụ", "thiết bị"],
            "nature": ["thiên nhiên", "phong cảnh", "cảnh quan", "môi trường"],
            "building": ["tòa nhà", "kiến trúc", "công trình", "cơ sở"],
            "food": ["thức ăn", "món ăn", "ẩm thực", "đặc sản"],
            "technology": ["công nghệ", "thiết bị", "máy móc", "kỹ thuật"],
            "art": ["nghệ thuật", "tác phẩm", "thiết kế", "sáng tạo"],
            "vehicle": ["phương tiện", "xe cộ", "giao thông"],
        },
        "emotions": {
            "positive": ["tươi sáng", "vui vẻ", "đẹp đẽ", "tuyệt vời", "hấp dẫn"],
            "neutral": ["đơn giản", "sạch sẽ", "ngăn nắp", "chuyên nghiệp"],
            "dynamic": ["sôi động", "năng động", "mạnh mẽ", "đầy năng lượng"],
        },
        "actions": {
            "showing": ["đang hiển thị", "đang trình bày", "đang thể hiện"],
            "working": ["đang làm việc", "đang hoạt động", "đang thực hiện"],
            "enjoying": ["đang thưởng thức", "đang tận hưởng", "đang trải nghiệm"],
            "creating": ["đang tạo ra", "đang phát triển", "đang xây dựng"],
        },
        "contexts": {
            "business": ["kinh doanh", "doanh nghiệp", "công ty", "nơi làm việc"],
            "education": ["giáo dục", "học tập", "đào tạo", "học thuật"],
            "lifestyle": ["lối sống", "cuộc sống", "cá nhân", "thường ngày"],
            "technology": ["công nghệ", "số hóa", "trực tuyến", "web"],
        },
    },
}

# Image classification -> vocabulary "types" category.
IMAGE_TYPE_CATEGORY: dict[str, str] = {
    "decorative": "art",
    "logo": "art",
    "functional-icon": "technology",
    "data-visualization": "technology",
    "complex": "technology",
    "content": "object",
    "informative": "object",
}

# Ordered src keyword lookup for basic mode; first hit wins.
BASIC_KEYWORDS: dict[str, list[tuple[tuple[str, ...], str]]] = {
    "ja": [
        (("logo",), "ロゴ"),
        (("icon",), "アイコン"),
        (("banner",), "バナー"),
        (("button",), "ボタン"),
        (("arrow",), "矢印"),
        (("calendar",), "カレンダー"),
        (("video",), "ビデオ"),
        (("chart", "graph"), "グラフ"),
        (("photo", "img"), "写真"),
    ],
    "en": [
        (("logo",), "Logo"),
        (("icon",), "Icon"),
        (("banner",), "Banner"),
        (("button",), "Button"),
        (("arrow",), "Arrow"),
        (("calendar",), "Calendar"),
        (("video",), "Video"),
        (("chart", "graph"), "Chart"),
        (("photo", "img"), "Photo"),
    ],
    "vi": [
        (("logo",), "Logo"),
        (("icon",), "Biểu tượng"),
        (("banner",), "Biểu ngữ"),
        (("button",), "Nút"),
        (("arrow",), "Mũi tên"),
        (("calendar",), "Lịch"),
        (("video",), "Video"),
        (("chart", "graph"), "Biểu đồ"),
        (("photo", "img"), "Ảnh"),
    ],
}

# Generic last-resort words, chosen so they pass validation.
SAFE_DEFAULT: dict[str, str] = {"ja": "イラスト", "en": "Illustration", "vi": "Minh họa"}

# Words that make an alt text redundant ("image of ...").
FORBIDDEN_WORDS: tuple[str, ...] = ("image", "picture", "photo", "画像", "写真", "hình ảnh")
PLACEHOLDER_MARKERS: tuple[str, ...] = ("[", "]", "placeholder", "dummy")


@dataclass(frozen=True)
class Phrases:
    """Language-specific sentence frames used by the generator."""

    link: str  # {text}
    heading: str  # {heading} {word}
    text: str  # {text} {word}
    caption: str  # {word} {caption}
    action: str  # {subject} {action}
    brand: str  # {brand} {base}
    emotion: str  # {emotion} {base}
    context_prefix: str  # {context} {subject}
    chart: dict[str, str] = field(default_factory=dict)
    trend: dict[str, str] = field(default_factory=dict)


PHRASES: dict[str, Phrases] = {
    "ja": Phrases(
        link="{text}へのリンク",
        heading="{heading}の{word}",
        text="{text}の{word}",
        caption="{word}：{caption}",
        action="{subject}{action}様子",
        brand="{brand}の{base}",
        emotion="{emotion}{base}",
        context_prefix="{context}の{subject}",
        chart={"bar": "棒グラフ", "pie": "円グラフ", "line": "線グラフ", "generic": "グラフ"},
        trend={"increasing": "増加傾向", "decreasing": "減少傾向"},
    ),
    "en": Phrases(
        link="Link to {text}",
        heading="{word} of {heading}",
        text="{word} showing {text}",
        caption="{word}: {caption}",
        action="{subject} {action}",
        brand="{brand} {base}",
        emotion="{emotion} {base}",
        context_prefix="{context} {subject}",
        chart={"bar": "Bar chart", "pie": "Pie chart", "line": "Line chart", "generic": "Chart"},
        trend={"increasing": "increasing trend", "decreasing": "decreasing trend"},
    ),
    "vi": Phrases(
        link="Liên kết đến {text}",
        heading="{word} về {heading}",
        text="{word} thể hiện {text}",
        caption="{word}: {caption}",
        action="{subject} {action}",
        brand="{base} {brand}",
        emotion="{base} {emotion}",
        context_prefix="{subject} {context}",
        chart={"bar": "Biểu đồ cột", "pie": "Biểu đồ tròn", "line": "Biểu đồ đường", "generic": "Biểu đồ"},
        trend={"increasing": "xu hướng tăng", "decreasing": "xu hướng giảm"},
    ),
}


def resolve_language(language: str) -> str:
    """Vocabulary key for *language* (``ja-JP`` -> ``ja``; unknown -> ``en``)."""
    base = language.lower().split("-")[0].split("_")[0]
    return base if base in VOCABULARY else FALLBACK_LANGUAGE


def words(language: str, section: str, category: str) -> list[str]:
    return VOCABULARY[resolve_language(language)].get(section, {}).get(category, [])


def phrases(language: str) -> Phrases:
    return PHRASES[resolve_language(language)]


def is_unspaced(language: str) -> bool:
    return language.lower().split("-")[0] in UNSPACED_LANGUAGES
