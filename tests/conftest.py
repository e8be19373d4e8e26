from __future__ import annotations

from pathlib import Path

from PIL import Image
from loguru import logger
import pytest

from core.services.catalog import PhotoCatalog


class FakeExif(dict):
    """Stand-in for `PIL.Image.Exif` with a separate Exif sub-IFD."""

    def __init__(self, ifd0=None, exif_ifd=None):
        super().__init__(ifd0 or {})
        self._exif_ifd = dict(exif_ifd or {})

    def get_ifd(self, tag):
        return self._exif_ifd if tag == 0x8769 else {}


class FakeImage:
    def __init__(self, exif: FakeExif | None) -> None:
        self._exif = exif if exif is not None else FakeExif()

    def getexif(self):
        return self._exif


def make_jpeg(
    path: Path, size: tuple[int, int] = (400, 300), model: str | None = None, mode: str = "RGB"
) -> Path:
    """Write a small image; `model` adds an EXIF camera model tag."""
    img = Image.new(mode, size, color=(200, 80, 40) if mode == "RGB" else None)
    params = {}
    if model is not None:
        exif = Image.Exif()
        exif[0x0110] = model
        params["exif"] = exif
    img.save(path, **params)
    return path


@pytest.fixture
def catalog() -> PhotoCatalog:
    return PhotoCatalog()


@pytest.fixture
def log_messages():
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)
