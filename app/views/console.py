"""Plain-text rendering of records and batch summaries."""

from __future__ import annotations

from collections.abc import Iterable

from app.viewmodels.photo_vm import PhotoVM
from core.services.interfaces import BatchResult

BORDER = "*" * 80
LABEL_WIDTH = 25


def _line(label: str, value: object) -> str:
    text = "" if value is None else value
    return f"{label:<{LABEL_WIDTH}} {text}".rstrip()


def render_photo(vm: PhotoVM) -> str:
    """Render one record the way the `show` command prints it."""
    rec = vm.record
    cam = rec.camera_settings
    lines: list[str] = []
    if vm.is_renamed:
        lines.append(_line("Original file name:", rec.file_name))
        lines.append(_line("New file name:", rec.alt_name))
    else:
        lines.append(_line("File name:", rec.file_name))
    lines += [
        _line("Type:", rec.type),
        _line("Alt Text:", rec.alt),
        _line("Camera model:", cam.camera_model),
        _line("Lens model:", cam.lens_model),
        _line("Shutter Speed:", cam.shutter_speed),
        _line("Aperture:", vm.aperture_text),
        _line("ISO:", cam.iso_value),
        "",
        "Exported sizes:",
    ]
    for key, res in vm.sizes():
        lines.append(f"  {key}")
        lines.append(_line("    Path:", res.path))
        lines.append(_line("    Width:", res.width))
        lines.append(_line("    Height:", res.height))
    lines.append(_line("Tags:", vm.tags_text))
    lines.append(BORDER)
    return "\n".join(lines)


def render_photos(photos: Iterable[PhotoVM]) -> str:
    blocks = [render_photo(vm) for vm in photos]
    return "\n".join(blocks) if blocks else "No photos in catalog."


def render_batch(result: BatchResult) -> str:
    """Summary printed after `process`."""
    lines = [
        f"Processed: {len(result.processed)}",
        f"Skipped (already read): {len(result.skipped_known)}",
        f"Skipped (not an image extension): {result.skipped_extension}",
    ]
    if result.non_image:
        lines.append(f"Skipped non-image files: {', '.join(result.non_image)}")
    if result.no_metadata:
        lines.append(f"Files with no EXIF data: {len(result.no_metadata)}")
        lines += [f"  {name}" for name in result.no_metadata]
    if result.failed:
        lines.append(f"Failed: {len(result.failed)}")
        lines += [f"  {name}: {reason}" for name, reason in result.failed]
    return "\n".join(lines)
