"""JSON persistence for the photo catalog.

Documents are a top-level array of record objects. Every nested structure is
rebuilt field by field on load so documents stay readable when the in-memory
types change; PascalCase keys written by older tools are accepted as well.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import json
from pathlib import Path
from typing import Any

from loguru import logger

from core.models import (
    CameraSettings,
    PhotoRecord,
    Resolution,
    Resolutions,
    ResolutionSlot,
)


def _get(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """Return `data[key]`, falling back to the PascalCase spelling."""
    if key in data:
        return data[key]
    pascal = key[:1].upper() + key[1:]
    return data.get(pascal, default)


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def _opt_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid aperture value in document: {}", value)
        return None


def _to_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        logger.warning("Invalid dimension in document: {}", value)
        return 0


def resolution_to_dict(res: Resolution) -> dict[str, Any]:
    return {"path": res.path, "width": res.width, "height": res.height}


def resolution_from_dict(data: Any) -> Resolution:
    if not isinstance(data, Mapping):
        return Resolution()
    return Resolution(
        path=_opt_str(_get(data, "path")),
        width=_to_int(_get(data, "width", 0)),
        height=_to_int(_get(data, "height", 0)),
    )


def record_to_dict(record: PhotoRecord) -> dict[str, Any]:
    """Serialize `record` with the persisted camelCase shape."""
    cam = record.camera_settings
    return {
        "fileName": record.file_name,
        "altName": record.alt_name,
        "type": record.type,
        "alt": record.alt,
        "resolutions": {
            slot.json_key: resolution_to_dict(record.resolutions.get(slot))
            for slot in (ResolutionSlot.SMALL, ResolutionSlot.MEDIUM, ResolutionSlot.LARGE)
        },
        "tags": list(record.tags),
        "cameraSettings": {
            "cameraModel": cam.camera_model,
            "lensModel": cam.lens_model,
            "shutterSpeed": cam.shutter_speed,
            "aperture": cam.aperture,
            "isoValue": cam.iso_value,
        },
    }


def record_from_dict(data: Mapping[str, Any]) -> PhotoRecord:
    """Rebuild a `PhotoRecord` from one document entry.

    Raises:
        ValueError: If the entry has no file name.
    """
    file_name = _get(data, "fileName")
    if not file_name:
        raise ValueError("record without fileName")

    raw_res = _get(data, "resolutions") or {}
    if not isinstance(raw_res, Mapping):
        raw_res = {}
    resolutions = Resolutions()
    for slot in ResolutionSlot:
        resolutions.set(slot, resolution_from_dict(_get(raw_res, slot.json_key)))

    raw_cam = _get(data, "cameraSettings") or {}
    if not isinstance(raw_cam, Mapping):
        raw_cam = {}
    camera = CameraSettings(
        camera_model=_opt_str(_get(raw_cam, "cameraModel")),
        lens_model=_opt_str(_get(raw_cam, "lensModel")),
        shutter_speed=_opt_str(_get(raw_cam, "shutterSpeed")),
        aperture=_opt_float(_get(raw_cam, "aperture")),
        iso_value=_opt_str(_get(raw_cam, "isoValue")),
    )

    raw_tags = _get(data, "tags") or []
    tags = [str(t) for t in raw_tags] if isinstance(raw_tags, list) else []

    return PhotoRecord(
        file_name=str(file_name),
        alt_name=_opt_str(_get(data, "altName")),
        type=_opt_str(_get(data, "type")),
        alt=_opt_str(_get(data, "alt")),
        resolutions=resolutions,
        tags=tags,
        camera_settings=camera,
    )


def to_document(records: Iterable[PhotoRecord]) -> list[dict[str, Any]]:
    return [record_to_dict(r) for r in records]


def from_document(document: Any) -> list[PhotoRecord]:
    """Rebuild records from a parsed document, skipping malformed entries.

    Raises:
        ValueError: If the document is not a JSON array.
    """
    if not isinstance(document, list):
        raise ValueError("Catalog document must be a JSON array of records")
    records: list[PhotoRecord] = []
    for index, entry in enumerate(document):
        if not isinstance(entry, Mapping):
            logger.error("Catalog entry {} is not an object: {!r}", index, entry)
            continue
        try:
            records.append(record_from_dict(entry))
        except (ValueError, TypeError) as ex:
            logger.error("Catalog entry error: {} | entry={}", ex, entry)
            continue
    return records


def no_data_path(json_path: str | Path) -> Path:
    """Sidecar holding the no-data list: `data.json` -> `data.nodata.json`."""
    path = Path(json_path)
    return path.with_name(f"{path.stem}.nodata.json")


class JsonCatalogRepository:
    """Load and save photo records as a JSON document."""

    def load(self, json_path: str | Path) -> list[PhotoRecord]:
        """Return records from the document at `json_path`.

        Raises:
            ValueError: If the file is not valid JSON or not an array.
        """
        path = Path(json_path)
        with path.open("r", encoding="utf-8") as f:
            try:
                document = json.load(f)
            except json.JSONDecodeError as ex:
                raise ValueError(f"Invalid catalog JSON in {path}: {ex}") from ex
        records = from_document(document)
        logger.info("Loaded {} records from {}", len(records), path)
        return records

    def save(self, json_path: str | Path, records: Iterable[PhotoRecord]) -> None:
        """Write `records` to `json_path`, creating parent directories."""
        path = Path(json_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        document = to_document(records)
        with path.open("w", encoding="utf-8") as f:
            json.dump(document, f, indent=2, ensure_ascii=False)
            f.write("\n")
        logger.info("Saved {} records to {}", len(document), path)

    def load_no_data(self, json_path: str | Path) -> list[str]:
        """Return the no-data names kept beside the catalog at `json_path`.

        A missing sidecar means no file has been classified yet.

        Raises:
            ValueError: If the sidecar is not a JSON array.
        """
        path = no_data_path(json_path)
        if not path.exists():
            return []
        with path.open("r", encoding="utf-8") as f:
            try:
                document = json.load(f)
            except json.JSONDecodeError as ex:
                raise ValueError(f"Invalid no-data JSON in {path}: {ex}") from ex
        if not isinstance(document, list):
            raise ValueError(f"No-data document must be a JSON array: {path}")
        return [name for name in document if isinstance(name, str) and name]

    def save_no_data(self, json_path: str | Path, names: Iterable[str]) -> None:
        path = no_data_path(json_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(list(names), f, indent=2, ensure_ascii=False)
            f.write("\n")
