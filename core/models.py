"""Core domain models for photo records, camera settings and export variants."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ResolutionSlot(Enum):
    """One of the three fixed export sizes.

    Each member carries the directory label used on disk, the target size and
    the key used in the persisted JSON document.
    """

    LARGE = ("Lg", 1920, 1080, "previewL")
    MEDIUM = ("Md", 1024, 768, "previewM")
    SMALL = ("Sm", 960, 640, "previewS")

    def __init__(self, label: str, width: int, height: int, json_key: str) -> None:
        self.label = label
        self.width = width
        self.height = height
        self.json_key = json_key

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


class OutputFormat(Enum):
    """Encoders available for resized variants."""

    JPG = ("jpg", "JPEG", True)
    PNG = ("png", "PNG", False)
    GIF = ("gif", "GIF", False)
    BMP = ("bmp", "BMP", False)
    TIFF = ("tiff", "TIFF", False)
    WEBP = ("webp", "WEBP", True)

    def __init__(self, extension: str, pillow_format: str, lossy: bool) -> None:
        self.extension = extension
        self.pillow_format = pillow_format
        self.lossy = lossy

    @classmethod
    def parse(cls, value: str | None) -> OutputFormat:
        """Return the format for an extension like "png" or ".webp" (jpg when empty)."""
        text = (value or "").strip().lower().lstrip(".")
        if not text:
            return cls.JPG
        if text == "jpeg":
            text = "jpg"
        if text == "tif":
            text = "tiff"
        for member in cls:
            if member.extension == text:
                return member
        raise ValueError(f"Unsupported output format: {value}")


@dataclass
class CameraSettings:
    """Camera values read from EXIF; `None` means the tag was not present."""

    camera_model: str | None = None
    lens_model: str | None = None
    shutter_speed: str | None = None
    aperture: float | None = None
    iso_value: str | None = None


@dataclass
class Resolution:
    """An exported variant: recorded relative path and target dimensions."""

    path: str | None = None
    width: int = 0
    height: int = 0


@dataclass
class Resolutions:
    small: Resolution = field(default_factory=Resolution)
    medium: Resolution = field(default_factory=Resolution)
    large: Resolution = field(default_factory=Resolution)

    def get(self, slot: ResolutionSlot) -> Resolution:
        if slot is ResolutionSlot.LARGE:
            return self.large
        if slot is ResolutionSlot.MEDIUM:
            return self.medium
        return self.small

    def set(self, slot: ResolutionSlot, resolution: Resolution) -> None:
        if slot is ResolutionSlot.LARGE:
            self.large = resolution
        elif slot is ResolutionSlot.MEDIUM:
            self.medium = resolution
        else:
            self.small = resolution


@dataclass
class PhotoRecord:
    """A single source photo keyed by `file_name`."""

    file_name: str
    alt_name: str | None = None
    type: str | None = None
    alt: str | None = None
    resolutions: Resolutions = field(default_factory=Resolutions)
    tags: list[str] = field(default_factory=list)
    camera_settings: CameraSettings = field(default_factory=CameraSettings)

    def has_data(self) -> bool:
        """True when the record holds usable camera metadata."""
        return bool(self.camera_settings.camera_model)
