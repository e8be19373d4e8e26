"""Settings access helpers for JSON-based configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger

from core.models import OutputFormat
from core.services.interfaces import MAX_QUALITY, MIN_QUALITY, ExportOptions

DEFAULT_CATALOG_PATH = "./data.json"


class JsonSettings:
    """Lightweight JSON settings reader with dotted-key access.

    A missing file is an error only when `required` is set; otherwise every
    lookup returns its default.
    """

    def __init__(self, settings_path: str | Path, required: bool = True) -> None:
        self._path = Path(settings_path)
        self._data: dict[str, Any] = {}
        if not self._path.exists():
            if required:
                raise FileNotFoundError(f"settings.json not found: {self._path}")
            logger.debug("No settings file at {}, using defaults", self._path)
            return
        with self._path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            self._data = data
        else:
            logger.warning("Ignoring settings file {}: top level is not an object", self._path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return value for dotted `key`, or `default` if not present."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if isinstance(node, dict) and part in node:
                node = node[part]
            else:
                return default
        return node


def export_options_from_settings(settings: JsonSettings) -> ExportOptions:
    """Build batch defaults from `export.*` and `processing.*` keys.

    Invalid values fall back to the `ExportOptions` defaults with a warning.
    """
    options = ExportOptions()

    quality = settings.get("export.quality", options.quality)
    try:
        quality = int(quality)
        if not MIN_QUALITY <= quality <= MAX_QUALITY:
            raise ValueError(quality)
        options.quality = quality
    except (TypeError, ValueError):
        logger.warning("Invalid export.quality {!r}, using {}", quality, options.quality)

    raw_format = settings.get("export.format", options.output_format.extension)
    try:
        options.output_format = OutputFormat.parse(str(raw_format))
    except ValueError:
        logger.warning("Invalid export.format {!r}, using jpg", raw_format)

    base_dir = settings.get("export.base_dir", options.base_dir)
    if isinstance(base_dir, str):
        options.base_dir = base_dir
    options.add_assets = bool(settings.get("export.add_assets", options.add_assets))

    workers = settings.get("processing.workers", options.workers)
    try:
        options.workers = max(1, int(workers))
    except (TypeError, ValueError):
        logger.warning("Invalid processing.workers {!r}, using 1", workers)
    return options
