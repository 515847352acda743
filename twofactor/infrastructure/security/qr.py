from __future__ import annotations

import base64
from io import BytesIO

import qrcode
from PIL import Image
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q

from twofactor.domain.errors import EncodingError
from twofactor.infrastructure.security.totp import build_otpauth_uri
from twofactor.settings import get_settings

_ERROR_CORRECTION = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}

_BOX_SIZE = 10


def render_qr_data_uri(
    data: str,
    *,
    error_correction: str | None = None,
    width: int | None = None,
    border: int | None = None,
) -> str:
    """
    Render data as a square PNG QR code and return it as
    data:image/png;base64,... Unset options come from settings.
    Any failure while encoding is raised as EncodingError.
    """
    settings = get_settings()
    error_correction = error_correction or settings.qr_error_correction
    width = settings.qr_width if width is None else width
    border = settings.qr_border if border is None else border

    try:
        if width <= 0:
            raise ValueError(f"QR width must be positive, got {width}")
        qr = qrcode.QRCode(
            error_correction=_ERROR_CORRECTION[error_correction],
            box_size=_BOX_SIZE,
            border=border,
        )
        qr.add_data(data)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white").get_image()
        img = img.resize((width, width), Image.NEAREST)

        buffer = BytesIO()
        img.save(buffer, format="PNG")
    except Exception as exc:
        raise EncodingError(f"QR rendering failed: {type(exc).__name__}") from exc

    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def enrollment_qr_data_uri(secret: str, account_label: str, *, issuer: str | None = None) -> str:
    """QR image of the otpauth:// URI an authenticator app scans during setup."""
    return render_qr_data_uri(build_otpauth_uri(secret, account_label, issuer=issuer))
