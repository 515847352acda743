from dataclasses import dataclass, field

from twofactor.domain.errors import (
    TwoFactorAlreadyEnabled,
    TwoFactorNotEnabled,
    TwoFactorSetupNotStarted,
)
from twofactor.domain.services import remove_used_backup_code


@dataclass
class User:
    id: str | None = None
    email: str | None = None
    two_factor_secret: str | None = None
    two_factor_enabled: bool = False
    backup_codes: list[str] = field(default_factory=list)

    def __post_init__(self):
        if self.email:
            self.email = self.email.strip().lower()
            if not self.email:
                raise ValueError("email cannot be empty")
        else:
            raise ValueError("email is required")

    def begin_two_factor_setup(self, secret: str):
        """Keep a pending secret; it only counts once enable_two_factor() runs."""
        if self.two_factor_enabled:
            raise TwoFactorAlreadyEnabled()
        self.two_factor_secret = secret

    def enable_two_factor(self, hashed_codes: list[str]):
        if self.two_factor_enabled:
            raise TwoFactorAlreadyEnabled()
        if not self.two_factor_secret:
            raise TwoFactorSetupNotStarted()
        self.two_factor_enabled = True
        self.backup_codes = list(hashed_codes)

    def disable_two_factor(self):
        if not self.two_factor_enabled:
            raise TwoFactorNotEnabled()
        self.two_factor_enabled = False
        self.two_factor_secret = None
        self.backup_codes = []

    def replace_backup_codes(self, hashed_codes: list[str]):
        if not self.two_factor_enabled:
            raise TwoFactorNotEnabled()
        self.backup_codes = list(hashed_codes)

    def consume_backup_code(self, index: int):
        self.backup_codes = remove_used_backup_code(self.backup_codes, index)

    def require_two_factor(self) -> str:
        """The active secret, or TwoFactorNotEnabled."""
        if not self.two_factor_enabled or not self.two_factor_secret:
            raise TwoFactorNotEnabled()
        return self.two_factor_secret
