from __future__ import annotations

from passlib.context import CryptContext

from twofactor.settings import get_settings

# bcrypt for account passwords and backup codes alike
_pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain: str, *, rounds: int | None = None) -> str:
    """
    bcrypt hash of an account password or a XXXX-XXXX backup code, the form
    that gets stored. rounds defaults to settings.bcrypt_rounds (cost 10).
    """
    if rounds is None:
        rounds = int(get_settings().bcrypt_rounds)
    return _pwd.hash(plain, rounds=rounds)


def verify_password(plain: str, password_hash: str) -> bool:
    """
    Check plain against one stored bcrypt hash.

    passlib raises ValueError when password_hash is not a recognizable
    bcrypt hash (e.g. a corrupted backup-code entry) and TypeError when it is
    not a string; backup_codes.verify_backup_code treats both as no match.
    """
    return _pwd.verify(plain, password_hash)
