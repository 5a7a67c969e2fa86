from __future__ import annotations

import io
from typing import BinaryIO

import qrcode
from PIL import Image
from pyzbar.pyzbar import decode as pyzbar_decode

from ..core.exceptions import ValidationError


def make_qr_png(data: str) -> bytes:
    """Render a QR code (PNG bytes) for an employee badge."""

    if not (data or "").strip():
        raise ValidationError("QR content is required")

    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(data.strip())
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def decode_qr_image(stream: BinaryIO) -> str:
    """Return the text of the first QR code found in an uploaded image."""

    try:
        img = Image.open(stream).convert("RGB")
    except OSError:
        raise ValidationError("Invalid image file")

    decoded = pyzbar_decode(img)
    if not decoded:
        raise ValidationError("No QR code found in the image")
    return decoded[0].data.decode("utf-8").strip()
