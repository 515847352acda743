from __future__ import annotations

from typing import Optional, Protocol

from twofactor.domain.entities import User


class TwoFactorUserRepositoryPort(Protocol):
    async def get_by_id_for_update(self, user_id: str) -> Optional[User]:
        """
        Fetch user (with 2FA state) by id and lock the row for update
        (transaction-scoped). Return None if not found.
        """

    async def get_password_hash(self, user_id: str) -> Optional[str]:
        """
        Return the account password hash, or None for accounts without a
        password (OAuth sign-ups).
        """

    async def save_two_factor_state(self, user: User) -> None:
        """
        Persist two_factor_secret, two_factor_enabled and the hashed
        backup_codes array exactly as they are on the entity.
        """
