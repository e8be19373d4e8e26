"""Core service interfaces and shared data structures.

This module defines the options and outcome dataclasses exchanged between the
batch processor and the application layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.models import OutputFormat

MIN_QUALITY = 25
MAX_QUALITY = 100


@dataclass
class ExportOptions:
    """Settings chosen once for a processing batch.

    Attributes:
        quality: Encoder quality (25-100), used by lossy formats only.
        output_format: Format for every resized variant of the batch.
        base_dir: Directory under which `img/{Lg,Md,Sm}` is written.
        add_assets: Prefix recorded paths with `assets/`.
        renames: Optional mapping of source file name to output name.
        workers: Number of files processed in parallel.
    """

    quality: int = 90
    output_format: OutputFormat = OutputFormat.JPG
    base_dir: str = "./"
    add_assets: bool = False
    renames: dict[str, str] = field(default_factory=dict)
    workers: int = 1


@dataclass
class FileOutcome:
    """Result of processing one file.

    Attributes:
        file_name: Source file name.
        status: One of "processed", "no_metadata", "non_image", "failed".
        reason: Error text for failures.
    """

    file_name: str
    status: str
    reason: str | None = None


@dataclass
class BatchResult:
    """Outcome of a folder processing pass.

    Attributes:
        processed: Files with metadata that were resized.
        no_metadata: Files without EXIF data (variants are still written).
        skipped_known: Files already present in the catalog.
        non_image: Files Pillow could not identify as images.
        failed: Tuples of (file name, reason) for unexpected errors.
        skipped_extension: Count of folder entries without an image extension.
    """

    processed: list[str] = field(default_factory=list)
    no_metadata: list[str] = field(default_factory=list)
    skipped_known: list[str] = field(default_factory=list)
    non_image: list[str] = field(default_factory=list)
    failed: list[tuple[str, str]] = field(default_factory=list)
    skipped_extension: int = 0

    def add(self, outcome: FileOutcome) -> None:
        """Record a per-file outcome in the matching list."""
        if outcome.status == "processed":
            self.processed.append(outcome.file_name)
        elif outcome.status == "no_metadata":
            self.no_metadata.append(outcome.file_name)
        elif outcome.status == "non_image":
            self.non_image.append(outcome.file_name)
        else:
            self.failed.append((outcome.file_name, outcome.reason or "unknown error"))
