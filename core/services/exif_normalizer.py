"""Normalization of raw EXIF values into camera settings.

Raw values arrive as strings (rationals rendered as "numerator/denominator").
Malformed input never raises: it is logged and replaced by a safe default so
a batch can keep going.
"""

from __future__ import annotations

from enum import Enum

from loguru import logger

from core.models import CameraSettings

INVALID_SHUTTER_SPEED = "Invalid"

# Pillow IFD pointer for the Exif sub-directory
EXIF_IFD_POINTER = 0x8769


class ExifTag(Enum):
    """The EXIF tags consumed by the extractor, with their tag id and IFD."""

    MODEL = (0x0110, False)
    LENS_MODEL = (0xA434, True)
    EXPOSURE_TIME = (0x829A, True)
    F_NUMBER = (0x829D, True)
    RECOMMENDED_EXPOSURE_INDEX = (0x8832, True)

    def __init__(self, tag_id: int, in_exif_ifd: bool) -> None:
        self.tag_id = tag_id
        self.in_exif_ifd = in_exif_ifd

    @classmethod
    def from_id(cls, tag_id: int, in_exif_ifd: bool) -> ExifTag | None:
        for member in cls:
            if member.tag_id == tag_id and member.in_exif_ifd == in_exif_ifd:
                return member
        return None


def _try_float(text: str) -> float | None:
    try:
        return float(text)
    except (TypeError, ValueError):
        return None


def _try_int(text: str) -> int | None:
    try:
        return int(text.strip())
    except (TypeError, ValueError):
        return None


def parse_rational_to_decimal(raw: str | None) -> float:
    """Convert "N/D" or a plain number to a float.

    Quotients are rounded to 2 decimal places. Returns 0 (with a warning) on a
    zero denominator, an unparsable part or any other shape.
    """
    if raw is None or not str(raw).strip():
        logger.warning("Rational value is empty")
        return 0
    text = str(raw).strip()
    parts = text.split("/")
    if len(parts) == 2:
        numerator = _try_float(parts[0])
        denominator = _try_float(parts[1])
        if numerator is None or denominator is None:
            logger.warning("Unable to parse rational parts: {}", text)
            return 0
        if denominator == 0:
            logger.warning("Division by zero in rational: {}", text)
            return 0
        return round(numerator / denominator, 2)
    if len(parts) == 1:
        value = _try_float(text)
        if value is not None:
            return value
    logger.warning("Unrecognized rational value: {}", text)
    return 0


def normalize_shutter_speed(raw: str) -> str:
    """Render an exposure time for display.

    Fast speeds keep their fraction ("1/250"); speeds of a second or longer
    become decimal seconds ("2", "2.5").
    """
    if "/" not in raw:
        return raw
    parts = raw.split("/")
    numerator = _try_int(parts[0]) if len(parts) == 2 else None
    denominator = _try_int(parts[1]) if len(parts) == 2 else None
    if numerator is None or denominator is None or denominator == 0:
        logger.warning("Invalid shutter speed value: {}", raw)
        return INVALID_SHUTTER_SPEED
    if numerator < denominator:
        return f"{numerator}/{denominator}"
    if numerator % denominator == 0:
        return str(numerator // denominator)
    text = f"{numerator / denominator:.2f}".rstrip("0").rstrip(".")
    return text


def apply_tag(settings: CameraSettings, tag: ExifTag, raw: str) -> None:
    """Write the normalized value of `tag` into `settings`."""
    if tag is ExifTag.MODEL:
        settings.camera_model = raw
    elif tag is ExifTag.LENS_MODEL:
        settings.lens_model = raw
    elif tag is ExifTag.EXPOSURE_TIME:
        settings.shutter_speed = normalize_shutter_speed(raw)
    elif tag is ExifTag.F_NUMBER:
        settings.aperture = parse_rational_to_decimal(raw)
    elif tag is ExifTag.RECOMMENDED_EXPOSURE_INDEX:
        settings.iso_value = raw
