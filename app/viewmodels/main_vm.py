"""ViewModel for orchestrating catalog IO, processing and curation."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from app.viewmodels.photo_vm import PhotoVM
from core.services.catalog import PhotoCatalog
from core.services.interfaces import BatchResult, ExportOptions
from infrastructure.batch_processor import BatchProcessor


class MainVM:
    """Main application view-model.

    Mediates between the JSON repository, the batch processor and the shared
    `PhotoCatalog` for the command-line views.
    """

    def __init__(
        self,
        repo,
        catalog: PhotoCatalog | None = None,
        processor: BatchProcessor | None = None,
    ) -> None:
        """Create a MainVM.

        Args:
            repo: Repository with `load(path)` and `save(path, records)` methods.
            catalog: Catalog for this run (a new one by default).
            processor: Batch processor bound to `catalog`.
        """
        self._repo = repo
        self.catalog = catalog or PhotoCatalog()
        self._processor = processor or BatchProcessor(self.catalog)
        self._source_path: str | None = None

    def load_catalog(self, path: str) -> int:
        """Open the working catalog at `path`; returns records added.

        The no-data names saved beside it are restored too, so files without
        EXIF are not exported again on the next run.
        """
        added = self.catalog.extend(self._repo.load(path))
        self._source_path = path
        for name in self._repo.load_no_data(path):
            self.catalog.mark_no_data(name)
        return added

    def load_if_exists(self, path: str) -> int:
        if not Path(path).exists():
            logger.info("No catalog at {}, starting empty", path)
            self._source_path = path
            return 0
        return self.load_catalog(path)

    def import_catalog(self, path: str) -> int:
        """Merge records from another document; the working path is unchanged."""
        return self.catalog.extend(self._repo.load(path))

    def save_catalog(self, path: str | None = None) -> str:
        """Write every record to `path` (defaults to the working catalog).

        The no-data list is written to its sidecar only for the working catalog.
        """
        target = path or self._source_path
        if not target:
            raise ValueError("No catalog path to save to")
        self._repo.save(target, self.catalog.records)
        if target == self._source_path:
            self._repo.save_no_data(target, self.catalog.no_data)
        return target

    def process_folder(self, folder: str, options: ExportOptions) -> BatchResult:
        return self._processor.process_folder(folder, options)

    def add_tags(self, file_name: str, tags: list[str]) -> int:
        """Append `tags` in order; returns how many were added."""
        added = sum(1 for tag in tags if self.catalog.add_tag(file_name, tag))
        if not added:
            logger.warning("No tags added to {}", file_name)
        return added

    def set_alt(self, file_name: str, text: str) -> bool:
        return self.catalog.set_alt(file_name, text)

    def photos(self) -> list[PhotoVM]:
        return [PhotoVM(r) for r in self.catalog.records]

    @property
    def record_count(self) -> int:
        """Number of records currently loaded."""
        return len(self.catalog)
