"""
Share Service

Application service orchestrating uploads, metadata lookups, downloads and
expiry sweeps. Publishes a domain event for every state change.
"""

from datetime import datetime
import logging
from typing import BinaryIO, Optional

from qrdrop.application.event_publisher import EventPublisher
from qrdrop.application.upload_result import UploadResult
from qrdrop.domain.errors import MissingUploadError, ShareExpiredError, StorageError
from qrdrop.domain.events import (
    FileCleanupFailedEvent,
    FileDownloadedEvent,
    FileExpiredEvent,
    FileUploadedEvent,
)
from qrdrop.domain.file_storage import (
    CleanupReport,
    FileRecord,
    IFileStorageRepository,
    ShareManager,
)

logger = logging.getLogger(__name__)

DOWNLOAD_PAGE = "download.html"


def build_share_url(base_url: str, share_id: str) -> str:
    """
    Build the absolute URL of the download page for a share.

    Args:
        base_url: Scheme and host of the service, e.g. ``http://host:3000/``
        share_id: Share id

    Returns:
        ``<base_url>/download.html?id=<share_id>``
    """
    return f"{base_url.rstrip('/')}/{DOWNLOAD_PAGE}?id={share_id}"


class ShareService:
    """
    Orchestrates the share lifecycle.

    Upload stores the bytes first, then registers the record; the share link
    and its QR image are produced before the record is committed so a failed
    upload never leaves a record or stored bytes behind.
    """

    def __init__(self, share_manager: ShareManager,
                 storage_repository: IFileStorageRepository,
                 qr_renderer,
                 event_publisher: Optional[EventPublisher] = None):
        """
        Initialize ShareService.

        Args:
            share_manager: Domain service for records
            storage_repository: Storage for uploaded bytes
            qr_renderer: Object with ``to_data_uri(text) -> str``
            event_publisher: Optional publisher for domain events
        """
        self.share_manager = share_manager
        self.storage_repo = storage_repository
        self.qr_renderer = qr_renderer
        self.event_publisher = event_publisher

    def upload(self, content: Optional[BinaryIO], original_name: Optional[str],
               password: Optional[str], base_url: str) -> UploadResult:
        """
        Store an uploaded file and create its share.

        Args:
            content: Binary stream of the upload, None when no file was sent
            original_name: User-supplied file name
            password: Optional plaintext password protecting the share
            base_url: Scheme and host used to build the share link

        Returns:
            UploadResult with id, link, QR data URI and expiry

        Raises:
            MissingUploadError: If no file was sent
            StorageError: If the bytes or the record cannot be persisted
        """
        if content is None or not original_name:
            raise MissingUploadError("No file uploaded")

        stored_name, storage_path = self.storage_repo.save(content, original_name)
        links = {}

        def attach_links(record: FileRecord) -> None:
            file_url = build_share_url(base_url, record.id)
            links["file_url"] = file_url
            links["qr_data"] = self.qr_renderer.to_data_uri(file_url)

        try:
            record = self.share_manager.register_file(
                stored_name=stored_name,
                storage_path=storage_path,
                original_name=original_name,
                password=password,
                before_commit=attach_links,
            )
        except Exception as e:
            self._discard_stored_bytes(storage_path)
            raise StorageError(f"Failed to record upload {original_name}", e) from e

        self._publish(FileUploadedEvent(
            aggregate_id=record.id,
            occurred_at=datetime.utcnow(),
            original_name=record.original_name,
            expires_at=record.expires_at,
            password_protected=record.password_protected,
        ))

        return UploadResult(
            id=record.id,
            file_url=links["file_url"],
            qr_data=links["qr_data"],
            expires_at=record.expires_at,
        )

    def get_metadata(self, share_id: str) -> dict:
        """
        Display-safe description of a live share.

        Raises:
            ShareNotFoundError: If the id is unknown or expired
        """
        return self.share_manager.get_live_record(share_id).to_public_dict()

    def authorize_download(self, share_id: str,
                           password: Optional[str] = None) -> FileRecord:
        """
        Validate expiry and password for a download.

        Raises:
            ShareNotFoundError: If the id is unknown
            ShareExpiredError: If the share expired (it is removed first)
            InvalidPasswordError: If the password is missing or wrong
        """
        try:
            return self.share_manager.get_file_for_download(share_id, password)
        except ShareExpiredError as e:
            now = datetime.utcnow()
            self._publish(FileExpiredEvent(aggregate_id=share_id, occurred_at=now, reason="access"))
            if e.undeleted_path is not None:
                self._publish(FileCleanupFailedEvent(
                    aggregate_id=share_id, occurred_at=now, storage_path=e.undeleted_path
                ))
            raise

    def record_download(self, record: FileRecord) -> None:
        self._publish(FileDownloadedEvent(
            aggregate_id=record.id,
            occurred_at=datetime.utcnow(),
            filename=record.download_name(),
        ))

    def sweep_expired(self) -> CleanupReport:
        """
        Remove every expired share.

        Returns:
            CleanupReport of the sweep
        """
        report = self.share_manager.cleanup_expired_files()
        now = datetime.utcnow()

        for share_id in report.removed_ids:
            self._publish(FileExpiredEvent(aggregate_id=share_id, occurred_at=now, reason="sweep"))
        for share_id, storage_path in report.failures:
            self._publish(FileCleanupFailedEvent(
                aggregate_id=share_id, occurred_at=now, storage_path=storage_path
            ))

        return report

    def count_shares(self) -> int:
        return self.share_manager.count_records()

    def _discard_stored_bytes(self, storage_path: str) -> None:
        try:
            self.storage_repo.delete(storage_path)
        except OSError as e:
            logger.warning(f"Could not discard stored bytes {storage_path}: {e}")

    def _publish(self, event) -> None:
        if self.event_publisher is not None:
            self.event_publisher.publish(event)
