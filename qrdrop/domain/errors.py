"""
Error Handling Module

Defines domain exceptions and error categories for the application.
Domain exceptions are pure and have no external dependencies.
The error categories carry the exact bodies returned by the HTTP layer.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """Error category enumeration for structured error handling."""

    NO_FILE = "no_file"
    FILE_TOO_LARGE = "file_too_large"
    UPLOAD_FAILED = "upload_failed"
    NOT_FOUND = "not_found"
    INVALID_LINK = "invalid_link"
    LINK_EXPIRED = "link_expired"
    INVALID_PASSWORD = "invalid_password"
    DOWNLOAD_FAILED = "download_failed"


# Client-visible messages, kept identical to the public HTTP contract
ERROR_MESSAGES: Dict[ErrorCategory, str] = {
    ErrorCategory.NO_FILE: "No file uploaded",
    ErrorCategory.FILE_TOO_LARGE: "File too large",
    ErrorCategory.UPLOAD_FAILED: "Server error during upload",
    ErrorCategory.NOT_FOUND: "Not found or expired",
    ErrorCategory.INVALID_LINK: "Invalid or expired link",
    ErrorCategory.LINK_EXPIRED: "Link expired",
    ErrorCategory.INVALID_PASSWORD: "Invalid password",
    ErrorCategory.DOWNLOAD_FAILED: "Download failed",
}


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Base exception for all domain errors.

    Domain exceptions are pure and have no external dependencies.
    They can optionally wrap original errors for context.
    """

    def __init__(self, message: str, original_error: Exception = None):
        """
        Initialize domain error.

        Args:
            message: Error message
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.original_error = original_error


class ShareNotFoundError(DomainError):
    """Raised when no record exists for a share id."""
    pass


class ShareExpiredError(DomainError):
    """
    Raised when a record was found but its expiry has passed.

    By the time this is raised the record has been removed. When its bytes
    could not be deleted, ``undeleted_path`` names the leftover file.
    """

    def __init__(self, message: str, undeleted_path: Optional[str] = None):
        super().__init__(message)
        self.undeleted_path = undeleted_path


class InvalidPasswordError(DomainError):
    """Raised when a protected share is requested with a missing or wrong password."""
    pass


class MissingUploadError(DomainError):
    """Raised when an upload request carries no file."""
    pass


class StorageError(DomainError):
    """Raised when bytes or records cannot be persisted."""
    pass


# ============================================================================
# Application Layer Exceptions
# ============================================================================

class ApplicationError(Exception):
    """
    Application error bound to an ErrorCategory.

    Bridges domain errors with the user-facing messages of the HTTP layer.
    """

    def __init__(self, category: ErrorCategory):
        self.category = category
        self.message = ERROR_MESSAGES[category]

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to dictionary for API response.

        Returns:
            Dictionary with error information
        """
        return {"error": self.message}


def create_error_response(
    category: ErrorCategory,
    status_code: int = 400,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured JSON error response for API endpoints.

    Args:
        category: Error category
        status_code: HTTP status code

    Returns:
        Tuple of (error_dict, status_code)
    """
    error = ApplicationError(category)
    return error.to_dict(), status_code
