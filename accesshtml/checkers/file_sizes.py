"""File size analysis with per-category thresholds and optimization hints."""

from __future__ import annotations

import logging
from pathlib import Path

from accesshtml.config import AccessHTMLConfig
from accesshtml.discovery import find_all_files
from accesshtml.models import FileSizeReport, LargeFile

logger = logging.getLogger(__name__)

KB = 1024
MB = 1024 * KB

CATEGORY_EXTENSIONS: dict[str, frozenset[str]] = {
    "image": frozenset({".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp", ".ico", ".bmp"}),
    "css": frozenset({".css", ".scss", ".sass", ".less"}),
    "js": frozenset({".js", ".mjs", ".ts", ".jsx", ".tsx"}),
    "html": frozenset({".html", ".htm", ".xhtml"}),
    "video": frozenset({".mp4", ".avi", ".mov", ".wmv", ".flv", ".webm", ".mkv"}),
    "audio": frozenset({".mp3", ".wav", ".ogg", ".aac", ".flac"}),
    "document": frozenset({".pdf", ".doc", ".docx", ".txt"}),
    "archive": frozenset({".zip", ".rar", ".tar", ".gz", ".7z"}),
    "font": frozenset({".ttf", ".woff", ".woff2", ".otf", ".eot"}),
}

# Categories without an entry use the "other" threshold.
THRESHOLDS: dict[str, int] = {
    "image": 500 * KB,
    "js": 200 * KB,
    "video": 10 * MB,
    "audio": 5 * MB,
    "other": 1 * MB,
}


def file_category(path: Path) -> str:
    ext = path.suffix.lower()
    for category, extensions in CATEGORY_EXTENSIONS.items():
        if ext in extensions:
            return category
    return "other"


def threshold_for(category: str) -> int:
    return THRESHOLDS.get(category, THRESHOLDS["other"])


def format_file_size(size: int) -> str:
    """``1536`` -> ``1.5 KB``."""
    units = ("B", "KB", "MB", "GB")
    value = float(max(size, 0))
    i = 0
    while value >= 1024 and i < len(units) - 1:
        value /= 1024
        i += 1
    value = round(value, 1)
    if value == int(value):
        return f"{int(value)} {units[i]}"
    return f"{value} {units[i]}"


def optimization_suggestions(path: Path, size: int, category: str) -> list[str]:
    ext = path.suffix.lower()
    hints: list[str] = []
    if category == "image":
        if ext in (".jpg", ".jpeg"):
            hints += ["Compress JPEG with a tool such as jpegoptim", "Consider converting to WebP"]
            if size > MB:
                hints.append("Resize the image if its dimensions are larger than needed")
        elif ext == ".png":
            hints += [
                "Compress PNG with a tool such as OptiPNG",
                "Consider converting to WebP",
                "Use JPEG for photos that need no transparency",
            ]
        elif ext == ".svg":
            hints += ["Minify SVG with SVGO", "Remove unnecessary metadata and comments"]
        elif ext == ".gif":
            hints += ["Consider WebP or MP4 for animations", "Reduce the color palette"]
    elif category == "js":
        hints += [
            "Minify JavaScript with Terser or a similar tool",
            "Enable gzip/brotli compression on the web server",
            "Consider code splitting for large bundles",
        ]
        if size > 500 * KB:
            hints.append("Break the bundle into smaller modules")
    elif category == "css":
        hints += ["Minify CSS with cssnano or CleanCSS", "Remove unused CSS rules"]
    elif category == "html":
        hints += ["Minify HTML by removing whitespace and comments", "Enable gzip/brotli compression on the web server"]
    elif category == "video":
        hints += [
            "Compress with H.264 or H.265",
            "Provide multiple quality versions",
            "Use HLS or DASH streaming for long videos",
        ]
    elif category == "audio":
        hints += ["Use MP3 or AAC instead of uncompressed formats", "Reduce the bitrate if quality allows"]
    elif category == "font":
        hints += ["Use WOFF2", "Subset fonts to the characters in use"]
    else:
        hints.append("Check whether this file needs to be deployed")
    return hints


def check_sizes(root: Path, config: AccessHTMLConfig) -> FileSizeReport:
    root = Path(root)
    base = root if root.is_dir() else root.parent
    report = FileSizeReport()
    for path in find_all_files(root, config.skip_dirs):
        try:
            size = path.stat().st_size
        except OSError as exc:
            logger.debug("Skipping %s: %s", path, exc)
            continue
        category = file_category(path)
        report.total_files += 1
        report.total_size += size
        report.categories[category] = report.categories.get(category, 0) + size

        threshold = threshold_for(category)
        if size > threshold:
            report.large_files.append(LargeFile(
                path=path.relative_to(base).as_posix(),
                size=size,
                category=category,
                threshold=threshold,
                suggestions=optimization_suggestions(path, size, category),
            ))

    report.large_files.sort(key=lambda f: f.size, reverse=True)
    logger.info(
        "Analyzed %d file(s) (%s); %d exceed their size threshold",
        report.total_files, format_file_size(report.total_size), len(report.large_files),
    )
    return report
