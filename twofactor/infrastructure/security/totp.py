"""TOTP secrets, enrollment URIs and code verification on top of pyotp."""

from __future__ import annotations

import logging
from datetime import datetime

import pyotp

from twofactor.domain.services import DEFAULT_TOTP_CONFIG, TotpConfig
from twofactor.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def totp_config_from_settings(settings: Settings | None = None) -> TotpConfig:
    settings = settings or get_settings()
    return TotpConfig(
        digits=settings.totp_digits,
        step_seconds=settings.totp_step_seconds,
        window_steps=settings.totp_window_steps,
    )


def _is_plain_code(code: str, digits: int) -> bool:
    # pyotp NFKC-normalizes codes; only ASCII digits count
    return (
        isinstance(code, str)
        and len(code) == digits
        and code.isascii()
        and code.isdigit()
    )


def generate_secret() -> str:
    """New base32 TOTP seed (32 chars, 160 bits)."""
    return pyotp.random_base32()


def build_otpauth_uri(
    secret: str,
    account_label: str,
    *,
    issuer: str | None = None,
    config: TotpConfig = DEFAULT_TOTP_CONFIG,
) -> str:
    """
    otpauth://totp/{issuer}:{account_label}?secret={secret}&issuer={issuer}

    digits/period only appear in the query when they differ from 6/30.
    """
    issuer = issuer or get_settings().totp_issuer
    totp = pyotp.TOTP(secret, digits=config.digits, interval=config.step_seconds)
    return totp.provisioning_uri(name=account_label, issuer_name=issuer)


def verify_totp(
    code: str,
    secret: str,
    config: TotpConfig = DEFAULT_TOTP_CONFIG,
    *,
    for_time: datetime | int | None = None,
) -> bool:
    """
    True when code matches the current step, or one of config.window_steps
    steps on either side of it.

    Never raises: an empty or malformed code or secret is reported as an
    invalid code. for_time pins "now" (unix seconds or datetime).
    """
    if not secret or not _is_plain_code(code, config.digits):
        return False
    try:
        totp = pyotp.TOTP(secret, digits=config.digits, interval=config.step_seconds)
        return totp.verify(code, for_time=for_time, valid_window=config.window_steps)
    except Exception as exc:
        # exc carries decoder detail only, never the secret itself
        logger.warning(
            "TOTP verification error treated as invalid code",
            extra={"error": type(exc).__name__},
        )
        return False
