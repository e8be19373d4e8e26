"""EXIF metadata extraction into catalog records."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from loguru import logger

from core.models import CameraSettings, PhotoRecord
from core.services.catalog import PhotoCatalog
from core.services.exif_normalizer import EXIF_IFD_POINTER, ExifTag, apply_tag
from infrastructure.utils import exif_value_to_text


class MetadataExtractor:
    """Reads the five recognized EXIF tags from decoded Pillow images."""

    def __init__(self, catalog: PhotoCatalog) -> None:
        self._catalog = catalog

    def extract(
        self,
        image: Any,
        file_name: str,
        *,
        file_type: str | None = None,
        alt_name: str | None = None,
    ) -> bool:
        """Populate the catalog record for `file_name` from `image` EXIF.

        A file only counts as having metadata when its EXIF names the camera
        model. Anything less (no EXIF at all, or the layout tags every TIFF
        carries) marks the file as no-data and returns False, unless a record
        for it already exists.
        """
        found = CameraSettings()
        exif = self._read_exif(image, file_name)
        if exif:
            for tag, value in self._iter_entries(exif):
                apply_tag(found, tag, exif_value_to_text(value, tag in _RATIONAL_TAGS))

        record = self._catalog.find(file_name)
        if record is None:
            if not PhotoRecord(file_name=file_name, camera_settings=found).has_data():
                self._catalog.mark_no_data(file_name)
                logger.info("{} does not contain metadata", file_name)
                return False
            record = self._catalog.find_or_create(
                file_name, file_type=file_type, alt_name=alt_name
            )

        settings = record.camera_settings
        # populated once per record
        for name in _FIELD_BY_TAG.values():
            if getattr(settings, name) in (None, ""):
                setattr(settings, name, getattr(found, name))
        logger.debug("Metadata for {}: {}", file_name, settings)
        return True

    def _read_exif(self, image: Any, file_name: str) -> Any:
        getexif = getattr(image, "getexif", None)
        if getexif is None:
            return None
        try:
            return getexif()
        except (OSError, ValueError, SyntaxError) as ex:
            logger.warning("EXIF read failed for {}: {}", file_name, ex)
            return None

    def _iter_entries(self, exif: Any) -> Iterator[tuple[ExifTag, Any]]:
        """Yield each recognized tag once, IFD0 first, stopping when all are seen."""
        remaining = set(ExifTag)
        for tag_id, value in list(exif.items()):
            tag = ExifTag.from_id(tag_id, in_exif_ifd=False)
            if tag in remaining:
                remaining.discard(tag)
                yield tag, value
        if not remaining:
            return
        try:
            sub_ifd = exif.get_ifd(EXIF_IFD_POINTER)
        except (OSError, ValueError, KeyError, SyntaxError) as ex:
            logger.warning("Exif sub-IFD unreadable: {}", ex)
            return
        for tag_id, value in list((sub_ifd or {}).items()):
            tag = ExifTag.from_id(tag_id, in_exif_ifd=True)
            if tag in remaining:
                remaining.discard(tag)
                yield tag, value
                if not remaining:
                    return


_FIELD_BY_TAG = {
    ExifTag.MODEL: "camera_model",
    ExifTag.LENS_MODEL: "lens_model",
    ExifTag.EXPOSURE_TIME: "shutter_speed",
    ExifTag.F_NUMBER: "aperture",
    ExifTag.RECOMMENDED_EXPOSURE_INDEX: "iso_value",
}

_RATIONAL_TAGS = {ExifTag.EXPOSURE_TIME, ExifTag.F_NUMBER}
