"""
File Storage Entities

Domain entity for shared file records.
"""

from dataclasses import dataclass
from pathlib import Path
import time
from typing import Optional


def current_millis() -> int:
    """Wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class FileRecord:
    """
    Entity representing one uploaded file and its expiry.

    Serialized with the camelCase keys of the record store blob.
    """
    id: str
    stored_name: str
    original_name: str
    storage_path: str
    password_digest: Optional[str]
    uploaded_at: int
    expires_at: int

    @classmethod
    def create(cls, share_id: str, stored_name: str, original_name: str,
               storage_path: str, password_digest: Optional[str],
               ttl_ms: int, now: Optional[int] = None) -> 'FileRecord':
        """
        Factory method to create a new record.

        Args:
            share_id: Unique share id
            stored_name: Generated name of the stored bytes
            original_name: User-supplied file name
            storage_path: Location of the stored bytes
            password_digest: Digest of the share password, or None
            ttl_ms: Time to live in milliseconds
            now: Creation time in epoch ms (defaults to the wall clock)

        Returns:
            New FileRecord instance
        """
        if now is None:
            now = current_millis()

        return cls(
            id=share_id,
            stored_name=stored_name,
            original_name=original_name,
            storage_path=storage_path,
            password_digest=password_digest,
            uploaded_at=now,
            expires_at=now + ttl_ms,
        )

    @property
    def password_protected(self) -> bool:
        return self.password_digest is not None

    def is_expired(self, now: Optional[int] = None) -> bool:
        """
        Check if the record has expired.

        Args:
            now: Reference time in epoch ms (defaults to the wall clock)

        Returns:
            True once ``now`` reaches ``expires_at``
        """
        if now is None:
            now = current_millis()
        return now >= self.expires_at

    def download_name(self) -> str:
        """Name suggested to the client when saving the file."""
        return self.original_name or Path(self.storage_path).name

    def to_public_dict(self) -> dict:
        """Display-safe subset; never includes the digest or the path."""
        return {
            "id": self.id,
            "originalName": self.original_name,
            "expiresAt": self.expires_at,
            "passwordProtected": self.password_protected,
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "filename": self.stored_name,
            "originalName": self.original_name,
            "path": self.storage_path,
            "passwordHash": self.password_digest,
            "uploadedAt": self.uploaded_at,
            "expiresAt": self.expires_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'FileRecord':
        """Create FileRecord from dictionary."""
        return cls(
            id=data["id"],
            stored_name=data["filename"],
            original_name=data.get("originalName") or "",
            storage_path=data["path"],
            password_digest=data.get("passwordHash"),
            uploaded_at=int(data["uploadedAt"]),
            expires_at=int(data["expiresAt"]),
        )
