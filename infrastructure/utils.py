"""Filesystem helpers for candidate discovery and output paths.

Also registers the pillow-heif opener so HEIC/HEIF sources decode through
Pillow when the package is installed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from loguru import logger

try:  # pragma: no cover - optional dependency
    from pillow_heif import register_heif_opener  # type: ignore

    register_heif_opener()
    PIL_HEIF_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    PIL_HEIF_AVAILABLE = False

BASE_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tif", ".tiff", ".webp"}
HEIF_EXTENSIONS = {".heic", ".heif"}


def image_extensions() -> set[str]:
    """Extensions treated as image candidates (HEIF only when decodable)."""
    if PIL_HEIF_AVAILABLE:
        return BASE_IMAGE_EXTENSIONS | HEIF_EXTENSIONS
    return set(BASE_IMAGE_EXTENSIONS)


def is_image_file(path: str | Path) -> bool:
    return Path(path).suffix.lower() in image_extensions()


def list_candidate_files(folder: str | Path) -> tuple[list[Path], int]:
    """Return sorted image candidates in `folder` and the count of other files."""
    root = Path(folder)
    files = sorted(p for p in root.iterdir() if p.is_file())
    images = [p for p in files if is_image_file(p)]
    return images, len(files) - len(images)


def ensure_dir(p: Path) -> None:
    """Create directory `p` if missing (including parents)."""
    p.mkdir(parents=True, exist_ok=True)


def join_posix(*parts: str) -> str:
    """Join path parts with forward slashes regardless of platform."""
    return "/".join(part.strip("/\\") for part in parts if part)


def exif_value_to_text(value: Any, rational: bool = False) -> str:
    """Render a raw Pillow EXIF value as text.

    Rationals become "numerator/denominator", bytes are decoded and NUL padding
    is stripped. Sequences use their first element, except that a pair of ints
    is read as a legacy (numerator, denominator) rational when `rational` is set.
    """
    if isinstance(value, (tuple, list)):
        if rational and len(value) == 2 and all(isinstance(v, int) for v in value):
            return f"{value[0]}/{value[1]}"
        if not value:
            return ""
        value = value[0]
    numerator = getattr(value, "numerator", None)
    denominator = getattr(value, "denominator", None)
    if numerator is not None and denominator is not None and not isinstance(value, int):
        return f"{numerator}/{denominator}"
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Non UTF-8 EXIF bytes, decoding as latin-1")
            value = value.decode("latin-1")
    return str(value).replace("\x00", "").strip()
