import logging
from typing import Callable

from twofactor.application._users import load_user_for_update
from twofactor.domain.errors import (
    InvalidCredentials,
    InvalidVerificationCode,
    TwoFactorNotEnabled,
    VerificationRequired,
)
from twofactor.domain.ports.unit_of_work import UnitOfWorkPort
from twofactor.domain.services import TotpConfig
from twofactor.infrastructure.security.totp import verify_totp

logger = logging.getLogger(__name__)


async def disable_two_factor(
    uow: UnitOfWorkPort,
    user_id: str,
    verify_password: Callable[[str, str], bool],
    totp_config: TotpConfig,
    password: str | None = None,
    code: str | None = None,
) -> None:
    """
    Turn 2FA off and drop the secret and backup codes.

    The caller proves ownership with the account password or, for accounts
    without one, a current TOTP code.
    """
    async with uow as transaction:
        user = await load_user_for_update(transaction, user_id)
        if not user.two_factor_enabled:
            raise TwoFactorNotEnabled()
        if not password and not code:
            raise VerificationRequired()

        password_hash = await transaction.users.get_password_hash(user.id)
        if password and password_hash:
            if not verify_password(password, password_hash):
                raise InvalidCredentials()
        elif code:
            if not verify_totp(code, user.require_two_factor(), totp_config):
                raise InvalidVerificationCode()
        else:
            raise VerificationRequired()

        user.disable_two_factor()
        await transaction.users.save_two_factor_state(user)
        await transaction.commit()

    logger.info("2FA disabled", extra={"user_id": user_id})
