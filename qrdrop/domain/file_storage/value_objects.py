"""
File Storage Value Objects

Immutable value objects for share ids and password digests.
"""

from dataclasses import dataclass
import hashlib
import hmac
import secrets
import string
from typing import Optional


class InvalidShareIdError(ValueError):
    """Raised when a share id is malformed."""
    pass


@dataclass(frozen=True)
class ShareId:
    """
    Value object representing a share id.

    The id is the only authorization token of an unprotected share, so it is
    drawn from a cryptographic source: 6 random bytes, hex encoded.
    """
    value: str

    BYTES = 6

    def __post_init__(self):
        if not self._is_valid():
            raise InvalidShareIdError(
                f"Invalid share id: expected {self.BYTES * 2} hex characters, got {self.value!r}"
            )

    def _is_valid(self) -> bool:
        if not self.value or not isinstance(self.value, str):
            return False

        if len(self.value) != self.BYTES * 2:
            return False

        return all(c in string.hexdigits for c in self.value)

    @classmethod
    def generate(cls) -> 'ShareId':
        """
        Generate a new random share id.

        Returns:
            New ShareId with 12 lowercase hex characters
        """
        return cls(secrets.token_hex(cls.BYTES))

    def __str__(self) -> str:
        return self.value


class PasswordDigest:
    """
    One-way sha256 digest of a share password.

    ``None`` is the "no password" sentinel; it never equals a real digest.
    """

    @staticmethod
    def from_secret(secret: Optional[str]) -> Optional[str]:
        """
        Hash a plaintext password.

        Args:
            secret: Plaintext password, may be None or empty

        Returns:
            Hex digest, or None when no password was given
        """
        if not secret:
            return None
        return hashlib.sha256(secret.encode("utf-8")).hexdigest()

    @classmethod
    def matches(cls, secret: Optional[str], digest: Optional[str]) -> bool:
        """Check a plaintext password against a stored digest."""
        candidate = cls.from_secret(secret)
        if candidate is None or digest is None:
            return False
        return hmac.compare_digest(candidate, digest)
