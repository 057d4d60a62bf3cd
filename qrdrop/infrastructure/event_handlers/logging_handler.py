"""
Logging Event Handler

Infrastructure event handler for logging domain events.
Domain layer remains unaware of logging infrastructure.
"""

import logging

from qrdrop.domain.events import (
    DomainEvent,
    FileCleanupFailedEvent,
    FileDownloadedEvent,
    FileExpiredEvent,
    FileUploadedEvent,
)


class LoggingEventHandler:
    """Writes one console line per domain event."""

    def __init__(self, logger: logging.Logger):
        """
        Initialize with logger instance.

        Args:
            logger: Python logging.Logger instance
        """
        self.logger = logger

    def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event by logging it.

        Args:
            event: Domain event to log
        """
        if isinstance(event, FileUploadedEvent):
            self._handle_uploaded(event)
        elif isinstance(event, FileDownloadedEvent):
            self._handle_downloaded(event)
        elif isinstance(event, FileExpiredEvent):
            self._handle_expired(event)
        elif isinstance(event, FileCleanupFailedEvent):
            self._handle_cleanup_failed(event)
        else:
            self.logger.debug(
                f"Unhandled event: {event.__class__.__name__} "
                f"(aggregate_id={event.aggregate_id})"
            )

    def _handle_uploaded(self, event: FileUploadedEvent) -> None:
        self.logger.info(f"Uploaded {event.original_name} -> id={event.aggregate_id}")

    def _handle_downloaded(self, event: FileDownloadedEvent) -> None:
        self.logger.info(f"Downloaded id={event.aggregate_id} file={event.filename}")

    def _handle_expired(self, event: FileExpiredEvent) -> None:
        if event.reason == "sweep":
            self.logger.info(f"Auto-deleted expired file id={event.aggregate_id}")
        else:
            self.logger.info(f"Removed expired file on access id={event.aggregate_id}")

    def _handle_cleanup_failed(self, event: FileCleanupFailedEvent) -> None:
        self.logger.warning(
            f"Could not delete stored file for id={event.aggregate_id}: {event.storage_path}"
        )
