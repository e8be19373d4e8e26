"""In-memory photo catalog shared by the metadata and resize passes.

The catalog owns two ordered sequences: photo records (unique by file name)
and the names of scanned files that carried no EXIF data. A name lives in at
most one of them. Every operation takes the same re-entrant lock so worker
threads can share one catalog.
"""

from __future__ import annotations

from collections.abc import Iterable
import threading

from loguru import logger

from core.models import PhotoRecord, Resolution, ResolutionSlot


class PhotoCatalog:
    """Repository of `PhotoRecord` objects keyed by file name."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._records: list[PhotoRecord] = []
        self._by_name: dict[str, PhotoRecord] = {}
        self._no_data: list[str] = []

    @property
    def records(self) -> list[PhotoRecord]:
        """Snapshot of records in insertion order."""
        with self._lock:
            return list(self._records)

    @property
    def no_data(self) -> list[str]:
        """Snapshot of file names scanned without metadata."""
        with self._lock:
            return list(self._no_data)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def find(self, file_name: str) -> PhotoRecord | None:
        with self._lock:
            return self._by_name.get(file_name)

    def contains(self, file_name: str) -> bool:
        with self._lock:
            return file_name in self._by_name

    def is_known(self, file_name: str) -> bool:
        """True if the file already has a record or is on the no-data list."""
        with self._lock:
            return file_name in self._by_name or file_name in self._no_data

    def find_or_create(
        self, file_name: str, *, file_type: str | None = None, alt_name: str | None = None
    ) -> PhotoRecord:
        """Return the record for `file_name`, inserting a new one if missing.

        `file_type` and `alt_name` only apply when the record is created.
        """
        with self._lock:
            record = self._by_name.get(file_name)
            if record is not None:
                return record
            if file_name in self._no_data:
                # keep the two sequences disjoint
                self._no_data.remove(file_name)
            record = PhotoRecord(file_name=file_name, type=file_type, alt_name=alt_name)
            self._records.append(record)
            self._by_name[file_name] = record
            return record

    def mark_no_data(self, file_name: str) -> bool:
        """Add `file_name` to the no-data list; returns False if refused or already present."""
        with self._lock:
            if file_name in self._by_name:
                logger.warning("Not marking {} as no-data: a record already exists", file_name)
                return False
            if file_name in self._no_data:
                return False
            self._no_data.append(file_name)
            return True

    def set_resolution(
        self,
        file_name: str,
        slot: ResolutionSlot,
        resolution: Resolution,
        *,
        file_type: str | None = None,
    ) -> PhotoRecord | None:
        """Replace one resolution slot, creating a bare record when needed.

        Files on the no-data list are left without a record.
        """
        with self._lock:
            if file_name in self._no_data:
                logger.debug("Skipping {} slot for no-data file {}", slot.label, file_name)
                return None
            record = self.find_or_create(file_name, file_type=file_type)
            record.resolutions.set(slot, resolution)
            return record

    def add_tag(self, file_name: str, tag: str) -> bool:
        """Append `tag` to the record's tags. Empty tags are ignored."""
        tag = (tag or "").strip()
        if not tag:
            return False
        with self._lock:
            record = self._by_name.get(file_name)
            if record is None:
                return False
            record.tags.append(tag)
            return True

    def set_alt(self, file_name: str, text: str | None) -> bool:
        with self._lock:
            record = self._by_name.get(file_name)
            if record is None:
                return False
            record.alt = text
            return True

    def extend(self, records: Iterable[PhotoRecord]) -> int:
        """Append loaded records, skipping names the catalog already knows.

        Returns the number of records added.
        """
        added = 0
        with self._lock:
            for record in records:
                if self.is_known(record.file_name):
                    logger.warning("Skipping duplicate record on load: {}", record.file_name)
                    continue
                self._records.append(record)
                self._by_name[record.file_name] = record
                added += 1
        return added
