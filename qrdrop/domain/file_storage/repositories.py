"""
File Storage Repositories

Repository interfaces for record persistence and physical file storage.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import BinaryIO, Dict, Iterator, Tuple

from .entities import FileRecord


class FileRecordRepository(ABC):
    """
    Abstract repository for the record store.

    The store is always read and written as a whole mapping of
    share id -> FileRecord; there are no partial updates.
    """

    @abstractmethod
    def load(self) -> Dict[str, FileRecord]:
        """
        Read every record.

        Returns:
            Mapping of share id to record (empty when the store is unreadable)
        """
        pass

    @abstractmethod
    def save(self, records: Dict[str, FileRecord]) -> None:
        """
        Overwrite the store with ``records``.

        Raises:
            StorageError: If the store cannot be written
        """
        pass

    @contextmanager
    def transaction(self) -> Iterator[Dict[str, FileRecord]]:
        """
        Load the store, yield it for mutation and save it on clean exit.

        Implementations that are shared between threads override this to
        hold a lock for the whole read-modify-write cycle. Raising inside
        the block discards the changes.
        """
        records = self.load()
        yield records
        self.save(records)


class IFileStorageRepository(ABC):
    """
    Interface for the bytes of uploaded files.

    Contract Guarantees:
    - save() never reuses an existing name
    - delete() succeeds when the file is already gone
    """

    @abstractmethod
    def save(self, content: BinaryIO, original_name: str) -> Tuple[str, str]:
        """
        Persist uploaded bytes under a freshly generated name.

        Args:
            content: Binary stream of the upload
            original_name: User-supplied name, used only for its extension

        Returns:
            Tuple of (stored_name, storage_path)

        Raises:
            StorageError: If the bytes cannot be written
        """
        pass

    @abstractmethod
    def delete(self, storage_path: str) -> bool:
        """
        Delete stored bytes.

        Returns:
            True if the file was removed or did not exist

        Raises:
            OSError: If an existing file cannot be removed
        """
        pass

    @abstractmethod
    def exists(self, storage_path: str) -> bool:
        """Check whether the stored bytes exist."""
        pass
