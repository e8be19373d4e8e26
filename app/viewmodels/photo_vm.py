"""Lightweight view model wrapper around `PhotoRecord`."""

from __future__ import annotations

from dataclasses import dataclass

from core.models import PhotoRecord, Resolution, ResolutionSlot


@dataclass
class PhotoVM:
    """Expose convenient properties for console rendering."""

    record: PhotoRecord

    @property
    def file_name(self) -> str:
        return self.record.file_name

    @property
    def is_renamed(self) -> bool:
        """True if the record has an output name different from its source."""
        return bool(self.record.alt_name) and self.record.alt_name != self.record.file_name

    @property
    def aperture_text(self) -> str:
        aperture = self.record.camera_settings.aperture
        if aperture is None:
            return ""
        return f"f/{aperture:g}"

    @property
    def tags_text(self) -> str:
        return ", ".join(self.record.tags)

    def sizes(self) -> list[tuple[str, Resolution]]:
        """Exported sizes from small to large, labelled like the JSON keys."""
        order = (ResolutionSlot.SMALL, ResolutionSlot.MEDIUM, ResolutionSlot.LARGE)
        return [(slot.json_key, self.record.resolutions.get(slot)) for slot in order]
