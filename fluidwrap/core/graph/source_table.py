"""
Source table — records keyed by resolved path.

Relative paths resolve against the owning scope's source directory, so
``win.fl`` and ``/src/win.fl`` name the same record.
"""

from __future__ import annotations

import logging
import posixpath
from typing import Iterator

from fluidwrap.core.models.source import SourceRecord

logger = logging.getLogger(__name__)


class SourceTable:
    """Lookup and explicit creation of ``SourceRecord``s."""

    def __init__(self, base_dir: str):
        self._base_dir = base_dir
        self._records: dict[str, SourceRecord] = {}

    def resolve(self, path: str) -> str:
        """Resolve ``path`` against the table's base directory."""
        if posixpath.isabs(path):
            return posixpath.normpath(path)
        return posixpath.normpath(posixpath.join(self._base_dir, path))

    def get(self, path: str) -> SourceRecord | None:
        """Look up a record without creating one."""
        return self._records.get(self.resolve(path))

    def get_or_create(self, path: str) -> SourceRecord:
        """Look up a record, creating an empty one if needed."""
        full = self.resolve(path)
        record = self._records.get(full)
        if record is None:
            record = SourceRecord(path=path, full_path=full)
            self._records[full] = record
            logger.debug("Created source record %s", full)
        return record

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.resolve(path) in self._records

    def __iter__(self) -> Iterator[SourceRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)
