"""
QR Code Renderer

Renders share links as PNG QR codes encoded in data URIs.
"""

import base64
import io

import qrcode
from qrcode.constants import ERROR_CORRECT_M


class QrCodeRenderer:
    """Render text as a scannable PNG QR code."""

    def __init__(self, box_size: int = 4, border: int = 4):
        self.box_size = box_size
        self.border = border

    def to_png(self, text: str) -> bytes:
        qr = qrcode.QRCode(
            error_correction=ERROR_CORRECT_M,
            box_size=self.box_size,
            border=self.border,
        )
        qr.add_data(text)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")
        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()

    def to_data_uri(self, text: str) -> str:
        """
        Render ``text`` as a ``data:image/png;base64,...`` URI.
        """
        encoded = base64.b64encode(self.to_png(text)).decode("ascii")
        return f"data:image/png;base64,{encoded}"
