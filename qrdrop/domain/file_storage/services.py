"""
File Storage Services

Domain service for registering, reading and expiring shared files.
"""

from dataclasses import dataclass, field
import logging
from typing import Callable, List, Optional, Tuple

from ..errors import InvalidPasswordError, ShareExpiredError, ShareNotFoundError
from .entities import FileRecord, current_millis
from .repositories import FileRecordRepository, IFileStorageRepository
from .value_objects import PasswordDigest, ShareId

logger = logging.getLogger(__name__)

DEFAULT_TTL_MS = 10 * 60 * 1000


@dataclass
class CleanupReport:
    """Outcome of one expiry sweep."""
    started_at: int
    removed_ids: List[str] = field(default_factory=list)
    failures: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def removed_count(self) -> int:
        return len(self.removed_ids)

    def to_dict(self) -> dict:
        return {
            "expired_files_cleaned": self.removed_count,
            "deletion_failures": len(self.failures),
        }


class ShareManager:
    """
    Domain service for managing shared files.

    Coordinates record creation, password-checked access, lazy expiry on
    access and proactive cleanup. Every store mutation goes through one
    repository transaction.
    """

    MAX_ID_ATTEMPTS = 10

    def __init__(self, record_repository: FileRecordRepository,
                 storage_repository: IFileStorageRepository,
                 ttl_ms: int = DEFAULT_TTL_MS,
                 clock: Callable[[], int] = current_millis):
        """
        Initialize ShareManager.

        Args:
            record_repository: Record store
            storage_repository: Storage for the uploaded bytes
            ttl_ms: Lifetime of a share in milliseconds
            clock: Callable returning the current time in epoch ms
        """
        self.record_repo = record_repository
        self.storage_repo = storage_repository
        self.ttl_ms = ttl_ms
        self.clock = clock
        self.deletion_failures = 0

    def register_file(self, stored_name: str, storage_path: str,
                      original_name: str, password: Optional[str] = None,
                      before_commit: Optional[Callable[[FileRecord], None]] = None
                      ) -> FileRecord:
        """
        Create and persist a record for already stored bytes.

        Args:
            stored_name: Generated name of the stored bytes
            storage_path: Location of the stored bytes
            original_name: User-supplied file name
            password: Optional plaintext share password
            before_commit: Called with the new record before the store is
                written; an exception aborts the registration

        Returns:
            The persisted FileRecord
        """
        with self.record_repo.transaction() as records:
            share_id = self._generate_unique_id(records)
            record = FileRecord.create(
                share_id=share_id,
                stored_name=stored_name,
                original_name=original_name,
                storage_path=storage_path,
                password_digest=PasswordDigest.from_secret(password),
                ttl_ms=self.ttl_ms,
                now=self.clock(),
            )

            if before_commit is not None:
                before_commit(record)

            records[share_id] = record

        return record

    def _generate_unique_id(self, records: dict) -> str:
        for _ in range(self.MAX_ID_ATTEMPTS):
            share_id = str(ShareId.generate())
            if share_id not in records:
                return share_id
            logger.warning(f"Share id collision on {share_id}, retrying")
        raise RuntimeError("Could not generate a unique share id")

    def get_live_record(self, share_id: str) -> FileRecord:
        """
        Retrieve an unexpired record without modifying the store.

        Raises:
            ShareNotFoundError: If the id is unknown or already expired
        """
        record = self.record_repo.load().get(share_id)

        if record is None or record.is_expired(self.clock()):
            raise ShareNotFoundError(f"File not found for id: {share_id}")

        return record

    def get_file_for_download(self, share_id: str,
                              password: Optional[str] = None) -> FileRecord:
        """
        Retrieve a record for download, enforcing expiry and password.

        Lookup and password checks only read the store. An expired record
        is deleted together with its bytes before ShareExpiredError is raised.

        Raises:
            ShareNotFoundError: If the id is unknown
            ShareExpiredError: If the record has expired
            InvalidPasswordError: If the password is missing or wrong
        """
        record = self.record_repo.load().get(share_id)

        if record is None:
            raise ShareNotFoundError(f"File not found for id: {share_id}")

        if record.is_expired(self.clock()):
            undeleted_path = self._remove_expired(share_id)
            raise ShareExpiredError(f"File has expired: {share_id}", undeleted_path)

        if record.password_protected and not PasswordDigest.matches(
            password, record.password_digest
        ):
            raise InvalidPasswordError(f"Invalid password for id: {share_id}")

        return record

    def cleanup_expired_files(self) -> CleanupReport:
        """
        Remove every expired record and its bytes.

        The store is written once, and only if something was removed.

        Returns:
            CleanupReport listing removed ids and deletion failures
        """
        report = CleanupReport(started_at=self.clock())
        records = self.record_repo.load()
        expired = [r for r in records.values() if r.is_expired(report.started_at)]

        if not expired:
            return report

        with self.record_repo.transaction() as records:
            for record in expired:
                if records.pop(record.id, None) is None:
                    continue
                if not self._delete_physical_file(record):
                    report.failures.append((record.id, record.storage_path))
                report.removed_ids.append(record.id)

        return report

    def _remove_expired(self, share_id: str) -> Optional[str]:
        """
        Delete an expired record and its bytes.

        The record is re-read inside the transaction; a concurrent sweep may
        already have removed it.

        Returns:
            Storage path of bytes that could not be deleted, else None
        """
        undeleted_path = None

        with self.record_repo.transaction() as records:
            record = records.pop(share_id, None)
            if record is not None and not self._delete_physical_file(record):
                undeleted_path = record.storage_path

        return undeleted_path

    def count_records(self) -> int:
        return len(self.record_repo.load())

    def _delete_physical_file(self, record: FileRecord) -> bool:
        """
        Best-effort deletion of stored bytes.

        Failures are logged and counted, never raised.

        Returns:
            True if deleted or already absent, False otherwise
        """
        try:
            return self.storage_repo.delete(record.storage_path)
        except OSError as e:
            self.deletion_failures += 1
            logger.warning(f"Error deleting stored file {record.storage_path}: {e}")
            return False
