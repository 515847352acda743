from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"

    # TOTP
    totp_issuer: str = "AffiliateXchange"
    totp_digits: int = 6
    totp_step_seconds: int = 30
    totp_window_steps: int = 1

    # Backup codes
    backup_code_count: int = 10
    bcrypt_rounds: int = 10

    # Enrollment QR image
    qr_error_correction: Literal["L", "M", "Q", "H"] = "M"
    qr_width: int = 256
    qr_border: int = 2

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
