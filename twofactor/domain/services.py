# twofactor/domain/services.py
from __future__ import annotations

import re
import secrets
from dataclasses import dataclass
from typing import Sequence

_TOTP_FORMAT = re.compile(r"[0-9]{6}")
_BACKUP_CODE_FORMAT = re.compile(r"[A-F0-9]{8}")
_SEPARATORS = re.compile(r"[-\s]")


@dataclass(frozen=True)
class TotpConfig:
    """
    TOTP parameters handed to every verification call.

    digits: length of the numeric code.
    step_seconds: how long one code stays current.
    window_steps: adjacent steps accepted on each side for clock drift.
    """

    digits: int = 6
    step_seconds: int = 30
    window_steps: int = 1


DEFAULT_TOTP_CONFIG = TotpConfig()


def generate_backup_code() -> str:
    """One recovery code: 4 random bytes as uppercase hex, grouped XXXX-XXXX."""
    raw = secrets.token_hex(4).upper()
    return f"{raw[:4]}-{raw[4:]}"


def normalize_backup_code(code: str) -> str:
    """
    Bring user input back to the XXXX-XXXX shape the codes were hashed in.
    Whitespace and hyphens are dropped and letters uppercased; anything that
    does not end up 8 characters long is only uppercased.
    """
    compact = _SEPARATORS.sub("", code).upper()
    if len(compact) == 8:
        return f"{compact[:4]}-{compact[4:]}"
    return code.upper()


def remove_used_backup_code(hashed_codes: Sequence[str], used_index: int) -> list[str]:
    """Return a new list without the entry at used_index, order preserved."""
    return [code for index, code in enumerate(hashed_codes) if index != used_index]


def format_backup_codes_for_display(codes: Sequence[str]) -> str:
    return "\n".join(f"{index}. {code}" for index, code in enumerate(codes, start=1))


def is_valid_totp_format(code: str) -> bool:
    return isinstance(code, str) and bool(_TOTP_FORMAT.fullmatch(code))


def is_valid_backup_code_format(code: str) -> bool:
    """Accepts XXXX-XXXX and XXXXXXXX, any case, hex digits only."""
    if not isinstance(code, str):
        return False
    return bool(_BACKUP_CODE_FORMAT.fullmatch(_SEPARATORS.sub("", code).upper()))
