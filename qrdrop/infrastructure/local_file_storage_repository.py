"""
Local File Storage Repository Implementation

Concrete implementation of IFileStorageRepository for the local filesystem.
Uploaded bytes are stored under generated names that never derive from
the user-supplied path, only from its sanitized extension.
"""

from pathlib import Path
import secrets
import time
from typing import BinaryIO, Tuple

from werkzeug.utils import secure_filename

from qrdrop.domain.errors import StorageError
from qrdrop.domain.file_storage.repositories import IFileStorageRepository

CHUNK_SIZE = 8192


class LocalFileStorageRepository(IFileStorageRepository):
    """
    Local filesystem implementation of IFileStorageRepository.

    Attributes:
        base_path: Directory holding the uploaded files
    """

    def __init__(self, base_path: str):
        """
        Initialize the local file storage repository.

        Args:
            base_path: Upload directory, created if missing
        """
        self.base_path = Path(base_path).resolve()
        self._ensure_base_directory()

    def _ensure_base_directory(self) -> None:
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create storage directory: {self.base_path}", e) from e

    @staticmethod
    def generate_stored_name(original_name: str) -> str:
        """
        Build a collision-resistant storage name.

        Combines the current epoch milliseconds with a random suffix and keeps
        the extension of the sanitized original name.

        Example:
            "report.final.pdf" -> "1700000000000-482910377.pdf"
        """
        extension = Path(secure_filename(original_name or "")).suffix
        return f"{int(time.time() * 1000)}-{secrets.randbelow(10 ** 9)}{extension}"

    def save(self, content: BinaryIO, original_name: str) -> Tuple[str, str]:
        """
        Write the upload stream under a fresh name.

        Returns:
            Tuple of (stored_name, absolute storage path)

        Raises:
            StorageError: If the bytes cannot be written
        """
        while True:
            stored_name = self.generate_stored_name(original_name)
            full_path = self.base_path / stored_name
            try:
                target = open(full_path, "xb")
            except FileExistsError:
                continue
            except OSError as e:
                raise StorageError(f"Failed to save file: {e}", e) from e
            break

        try:
            with target:
                while True:
                    chunk = content.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    target.write(chunk)
        except OSError as e:
            full_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to save file: {e}", e) from e

        return stored_name, str(full_path)

    def delete(self, storage_path: str) -> bool:
        """
        Delete stored bytes; a missing file counts as deleted.

        Raises:
            OSError: If an existing file cannot be removed
        """
        Path(storage_path).unlink(missing_ok=True)
        return True

    def exists(self, storage_path: str) -> bool:
        try:
            return Path(storage_path).is_file()
        except (OSError, ValueError):
            return False
