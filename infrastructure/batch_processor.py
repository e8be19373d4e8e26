"""Folder processing: metadata extraction then resizing, one file at a time.

A bad file is logged and reported in the `BatchResult`; it never aborts the
batch. With more than one worker, files run on a thread pool and share the
locked catalog.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from PIL import Image, UnidentifiedImageError
from loguru import logger

from core.services.catalog import PhotoCatalog
from core.services.interfaces import BatchResult, ExportOptions, FileOutcome
from infrastructure.metadata_extractor import MetadataExtractor
from infrastructure.resize_pipeline import ResizePipeline
from infrastructure.utils import list_candidate_files


class BatchProcessor:
    """Drives `MetadataExtractor` and `ResizePipeline` over a folder."""

    def __init__(
        self,
        catalog: PhotoCatalog,
        extractor: MetadataExtractor | None = None,
        pipeline: ResizePipeline | None = None,
    ) -> None:
        self._catalog = catalog
        self._extractor = extractor or MetadataExtractor(catalog)
        self._pipeline = pipeline or ResizePipeline(catalog)

    def process_folder(self, folder: str | Path, options: ExportOptions) -> BatchResult:
        """Process every new image file directly inside `folder`.

        Raises:
            NotADirectoryError: If `folder` is not a directory.
        """
        root = Path(folder)
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")

        candidates, skipped = list_candidate_files(root)
        result = BatchResult(skipped_extension=skipped)
        logger.info(
            "Reading {} photos in {} (skipping {} non-image files)", len(candidates), root, skipped
        )

        pending: list[Path] = []
        for path in candidates:
            if self._catalog.is_known(path.name):
                logger.info("Skipping file {}, already read", path.name)
                result.skipped_known.append(path.name)
            else:
                pending.append(path)

        workers = max(1, int(options.workers or 1))
        if workers == 1 or len(pending) <= 1:
            outcomes = [self.process_file(p, options) for p in pending]
        else:
            with ThreadPoolExecutor(max_workers=workers) as ex:
                outcomes = list(ex.map(lambda p: self.process_file(p, options), pending))

        for outcome in outcomes:
            result.add(outcome)
        logger.info(
            "Batch done: {} processed, {} without metadata, {} non-image, {} failed",
            len(result.processed),
            len(result.no_metadata),
            len(result.non_image),
            len(result.failed),
        )
        return result

    def process_file(self, path: Path, options: ExportOptions) -> FileOutcome:
        """Extract metadata from and resize a single file."""
        file_name = path.name
        alt_name = options.renames.get(file_name) or None
        file_type = options.output_format.extension
        try:
            with Image.open(path) as image:
                image.load()
                has_metadata = self._extractor.extract(
                    image, file_name, file_type=file_type, alt_name=alt_name
                )
                self._pipeline.resize(
                    image,
                    file_name,
                    options.add_assets,
                    options.base_dir,
                    options.quality,
                    options.output_format,
                    output_name=alt_name,
                )
        except UnidentifiedImageError:
            logger.warning("Skipping non-image file: {}", file_name)
            return FileOutcome(file_name, "non_image")
        except Exception as ex:  # pylint: disable=broad-exception-caught
            logger.exception("Unexpected error while processing {}: {}", file_name, ex)
            return FileOutcome(file_name, "failed", str(ex))
        return FileOutcome(file_name, "processed" if has_metadata else "no_metadata")
