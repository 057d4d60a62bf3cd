"""
Domain Events

Immutable records of significant state changes in the domain.
Events decouple side effects (console logging) from core business logic.
"""

from abc import ABC
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Attributes:
        aggregate_id: Share id the event is about
        occurred_at: Timestamp when the event occurred
    """
    aggregate_id: str
    occurred_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to dictionary for serialization.

        Returns:
            Dictionary representation of the event
        """
        return {
            "event_type": self.__class__.__name__,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
        }


@dataclass(frozen=True)
class FileUploadedEvent(DomainEvent):
    """
    Event emitted when an upload has been stored and recorded.

    Attributes:
        original_name: User-supplied file name
        expires_at: Expiry in epoch ms
        password_protected: Whether a password is required
    """
    original_name: str
    expires_at: int
    password_protected: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        base_dict = super().to_dict()
        base_dict.update({
            "original_name": self.original_name,
            "expires_at": self.expires_at,
            "password_protected": self.password_protected,
        })
        return base_dict


@dataclass(frozen=True)
class FileDownloadedEvent(DomainEvent):
    """Event emitted when a file is handed to a client."""
    filename: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        base_dict = super().to_dict()
        base_dict["filename"] = self.filename
        return base_dict


@dataclass(frozen=True)
class FileExpiredEvent(DomainEvent):
    """
    Event emitted when an expired record is removed.

    Attributes:
        reason: "access" for lazy removal on download, "sweep" for the sweeper
    """
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        base_dict = super().to_dict()
        base_dict["reason"] = self.reason
        return base_dict


@dataclass(frozen=True)
class FileCleanupFailedEvent(DomainEvent):
    """Event emitted when stored bytes could not be deleted."""
    storage_path: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        base_dict = super().to_dict()
        base_dict["storage_path"] = self.storage_path
        return base_dict
