"""Ordered, import-path-unique collection of the records found during one run."""

from typing import Iterator, Optional

from .models import PackageRecord


class PackageRegistry:
    """Append-ordered records keyed by import path.

    Inserting a record whose import path is already present replaces the
    earlier one but keeps its original position.
    """

    def __init__(self) -> None:
        self._records: dict[str, PackageRecord] = {}

    def insert(self, record: PackageRecord) -> bool:
        """Insert or replace. Returns True if the import path was new."""
        is_new = record.import_path not in self._records
        self._records[record.import_path] = record
        return is_new

    def get(self, import_path: str) -> Optional[PackageRecord]:
        return self._records.get(import_path)

    def all(self) -> list[PackageRecord]:
        return list(self._records.values())

    def import_paths(self) -> list[str]:
        return list(self._records)

    def __contains__(self, import_path: object) -> bool:
        return import_path in self._records

    def __iter__(self) -> Iterator[PackageRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
