"""Multi-resolution export of photos with metadata stripped.

Every source image yields three crop-resized variants written to
`{base_dir}/img/{Lg,Md,Sm}/{stem}.{ext}`. The path recorded in the catalog is
relative and slash separated, optionally prefixed with `assets/` for web front
ends; the prefix never changes where the file is written.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from PIL import Image, ImageOps
from loguru import logger

from core.models import OutputFormat, Resolution, ResolutionSlot
from core.services.catalog import PhotoCatalog
from infrastructure.utils import ensure_dir, join_posix

ASSETS_PREFIX = "assets"
IMG_DIR = "img"

_WORKING_MODES = {"1", "L", "LA", "RGB", "RGBA", "CMYK"}
_ENCODER_MODES = {
    OutputFormat.JPG: {"1", "L", "RGB", "CMYK"},
    OutputFormat.WEBP: {"RGB", "RGBA"},
    OutputFormat.BMP: {"1", "L", "P", "RGB", "RGBA"},
    OutputFormat.PNG: {"1", "L", "LA", "P", "RGB", "RGBA"},
    OutputFormat.GIF: {"1", "L", "P", "RGB"},
    OutputFormat.TIFF: {"1", "L", "LA", "P", "RGB", "RGBA", "CMYK"},
}
_OPAQUE_FORMATS = {OutputFormat.JPG, OutputFormat.GIF}


def _has_alpha(img: Any) -> bool:
    return "A" in img.getbands() or "transparency" in img.info


def _oriented(image: Any) -> Any:
    """Apply the EXIF orientation so stripped variants keep their rotation."""
    try:
        oriented = ImageOps.exif_transpose(image)
    except (OSError, ValueError, AttributeError, SyntaxError) as ex:
        logger.debug("exif_transpose failed, using raw orientation: {}", ex)
        oriented = image
    if oriented is None:
        oriented = image
    if oriented.mode not in _WORKING_MODES:
        oriented = oriented.convert("RGBA" if _has_alpha(oriented) else "RGB")
    return oriented


def _for_encoder(img: Any, fmt: OutputFormat) -> Any:
    allowed = _ENCODER_MODES.get(fmt)
    if allowed is None or img.mode in allowed:
        return img
    if fmt in _OPAQUE_FORMATS or not _has_alpha(img):
        return img.convert("RGB")
    return img.convert("RGBA")


def render_variant(image: Any, size: tuple[int, int]) -> Any:
    """Crop-resize `image` to exactly `size` and drop all embedded metadata."""
    variant = ImageOps.fit(image, size, method=Image.Resampling.LANCZOS)
    # EXIF, XMP, ICC and IPTC blocks all travel in `info`
    variant.info = {}
    return variant


class ResizePipeline:
    """Writes the three export variants and records them in the catalog."""

    def __init__(self, catalog: PhotoCatalog) -> None:
        self._catalog = catalog

    def resize(
        self,
        image: Any,
        file_name: str,
        add_assets: bool,
        base_dir: str | Path,
        quality: int,
        output_format: OutputFormat | str,
        *,
        output_name: str | None = None,
    ) -> dict[ResolutionSlot, Resolution]:
        """Export `image` in every `ResolutionSlot` size.

        Args:
            image: Decoded Pillow image.
            file_name: Source file name; identity of the catalog record.
            add_assets: Prefix the recorded paths with `assets/`.
            base_dir: Root of the written `img/` tree.
            quality: Encoder quality, applied to lossy formats only.
            output_format: Batch output format.
            output_name: Optional rename target used for the output stem.

        Returns:
            Mapping of slot to the recorded `Resolution`.
        """
        fmt = (
            output_format
            if isinstance(output_format, OutputFormat)
            else OutputFormat.parse(output_format)
        )
        out_file = f"{Path(output_name or file_name).stem}.{fmt.extension}"
        root = Path(base_dir) if str(base_dir).strip() else Path(".")
        source = _oriented(image)

        results: dict[ResolutionSlot, Resolution] = {}
        for slot in ResolutionSlot:
            out_path = root / IMG_DIR / slot.label / out_file
            ensure_dir(out_path.parent)
            variant = _for_encoder(render_variant(source, slot.size), fmt)
            self._save(variant, out_path, fmt, quality)

            prefix = ASSETS_PREFIX if add_assets else ""
            recorded = join_posix(prefix, IMG_DIR, slot.label, out_file)
            resolution = Resolution(path=recorded, width=slot.width, height=slot.height)
            self._catalog.set_resolution(file_name, slot, resolution, file_type=fmt.extension)
            results[slot] = resolution
            logger.debug("Wrote {} variant of {} to {}", slot.label, file_name, out_path)
        return results

    def _save(self, variant: Any, out_path: Path, fmt: OutputFormat, quality: int) -> None:
        params: dict[str, Any] = {"format": fmt.pillow_format}
        if fmt.lossy:
            params["quality"] = int(quality)
        variant.save(str(out_path), **params)
