"""
In-memory repositories and a controllable clock for unit tests.
"""

from contextlib import contextmanager
import io
from pathlib import Path

from qrdrop.domain.file_storage import FileRecord, FileRecordRepository, IFileStorageRepository


class FakeClock:
    """Callable returning a settable epoch-ms time."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class InMemoryRecordRepo(FileRecordRepository):
    def __init__(self, records=None):
        self.records = dict(records or {})
        self.save_count = 0

    def load(self):
        return dict(self.records)

    def save(self, records):
        self.save_count += 1
        self.records = dict(records)

    @contextmanager
    def transaction(self):
        records = self.load()
        yield records
        self.save(records)


class DummyStorageRepo(IFileStorageRepository):
    def __init__(self):
        self.saved = {}
        self.deleted = []

    def save(self, content, original_name):
        stored_name = f"{len(self.saved)}-stored{Path(original_name).suffix}"
        path = f"/virtual/{stored_name}"
        self.saved[path] = content.read()
        return stored_name, path

    def delete(self, storage_path):
        self.deleted.append(storage_path)
        self.saved.pop(storage_path, None)
        return True

    def exists(self, storage_path):
        return storage_path in self.saved


class FailingStorageRepo(DummyStorageRepo):
    """Storage whose deletions always fail."""

    def delete(self, storage_path):
        raise PermissionError(f"locked: {storage_path}")


def make_record(share_id: str, expires_at: int, password_digest=None,
                storage_path=None) -> FileRecord:
    return FileRecord(
        id=share_id,
        stored_name=f"{share_id}.bin",
        original_name=f"{share_id}.txt",
        storage_path=storage_path or f"/virtual/{share_id}.bin",
        password_digest=password_digest,
        uploaded_at=expires_at - 600_000,
        expires_at=expires_at,
    )


def upload_stream(content: bytes = b"hello world") -> io.BytesIO:
    return io.BytesIO(content)
