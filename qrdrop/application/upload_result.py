"""
Upload Result Value Object

Value object returned to the client after a successful upload.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class UploadResult:
    """
    Outcome of an upload.

    Attributes:
        id: Share id
        file_url: Absolute URL of the download page for this share
        qr_data: PNG data URI encoding ``file_url``
        expires_at: Expiry in epoch ms
    """
    id: str
    file_url: str
    qr_data: str
    expires_at: int

    def to_dict(self) -> dict:
        return {
            "message": "uploaded",
            "id": self.id,
            "fileUrl": self.file_url,
            "qrData": self.qr_data,
            "expiresAt": self.expires_at,
        }
