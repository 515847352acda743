"""Default collaborators for the 2FA use cases, resolved from settings."""

from typing import Callable

from twofactor.domain.services import TotpConfig
from twofactor.infrastructure.security.password import hash_password, verify_password
from twofactor.infrastructure.security.qr import render_qr_data_uri
from twofactor.infrastructure.security.totp import totp_config_from_settings
from twofactor.settings import get_settings


def get_hash_code() -> Callable[..., str]:
    return hash_password


def get_verify_code() -> Callable[[str, str], bool]:
    return verify_password


def get_verify_password() -> Callable[[str, str], bool]:
    return verify_password


def get_render_qr() -> Callable[[str], str]:
    return render_qr_data_uri


def get_totp_config() -> TotpConfig:
    return totp_config_from_settings(get_settings())


def get_issuer() -> str:
    return get_settings().totp_issuer


def get_backup_code_count() -> int:
    return get_settings().backup_code_count
