"""
File Storage Domain

Handles shared file records, id and digest generation, expiry and cleanup.
"""

from .entities import FileRecord, current_millis
from .repositories import FileRecordRepository, IFileStorageRepository
from .services import CleanupReport, ShareManager
from .value_objects import InvalidShareIdError, PasswordDigest, ShareId

__all__ = [
    "CleanupReport",
    "FileRecord",
    "FileRecordRepository",
    "IFileStorageRepository",
    "InvalidShareIdError",
    "PasswordDigest",
    "ShareId",
    "ShareManager",
    "current_millis",
]
