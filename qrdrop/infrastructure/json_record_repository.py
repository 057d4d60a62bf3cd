"""
JSON Record Repository Implementation

Record store kept as a single human-readable JSON blob on disk.
Each write serializes the entire mapping and atomically replaces the blob.
"""

import json
import logging
import os
from contextlib import contextmanager
from pathlib import Path
import tempfile
import threading
from typing import Dict, Iterator

from qrdrop.domain.errors import StorageError
from qrdrop.domain.file_storage.entities import FileRecord
from qrdrop.domain.file_storage.repositories import FileRecordRepository

logger = logging.getLogger(__name__)


class JsonFileRecordRepository(FileRecordRepository):
    """
    FileRecordRepository backed by one JSON file.

    Thread Safety:
        transaction() holds a re-entrant lock for the whole
        read-modify-write cycle, so writers in one process never
        overwrite each other's updates. Other processes sharing the
        file still race (last writer wins).

    Attributes:
        store_path: Path of the JSON blob
    """

    def __init__(self, store_path: str):
        self.store_path = Path(store_path)
        self._lock = threading.RLock()
        self._ensure_store()

    def _ensure_store(self) -> None:
        try:
            self.store_path.parent.mkdir(parents=True, exist_ok=True)
            if not self.store_path.exists():
                self.store_path.write_text("{}", encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to create record store: {self.store_path}", e) from e

    def load(self) -> Dict[str, FileRecord]:
        """
        Read and deserialize the whole store.

        An unreadable or corrupt blob yields an empty mapping and a warning.
        """
        with self._lock:
            try:
                raw = json.loads(self.store_path.read_text(encoding="utf-8") or "{}")
                return {
                    share_id: FileRecord.from_dict(data)
                    for share_id, data in raw.items()
                }
            except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Failed to read record store {self.store_path}: {e}")
                return {}

    def save(self, records: Dict[str, FileRecord]) -> None:
        """Serialize every record and atomically replace the blob."""
        payload = json.dumps(
            {share_id: record.to_dict() for share_id, record in records.items()},
            indent=2,
        )

        with self._lock:
            fd, tmp_path = tempfile.mkstemp(
                dir=self.store_path.parent, prefix=".files-", suffix=".json"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_path, self.store_path)
            except OSError as e:
                Path(tmp_path).unlink(missing_ok=True)
                raise StorageError(f"Failed to write record store: {e}", e) from e

    @contextmanager
    def transaction(self) -> Iterator[Dict[str, FileRecord]]:
        with self._lock:
            records = self.load()
            yield records
            self.save(records)
