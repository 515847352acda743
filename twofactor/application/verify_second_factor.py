import logging
from typing import Callable

from twofactor.application._users import load_user_for_update
from twofactor.domain.errors import InvalidCodeFormat, InvalidVerificationCode
from twofactor.domain.ports.unit_of_work import UnitOfWorkPort
from twofactor.domain.services import (
    TotpConfig,
    is_valid_backup_code_format,
    is_valid_totp_format,
)
from twofactor.infrastructure.security.backup_codes import NOT_FOUND, verify_backup_code
from twofactor.infrastructure.security.totp import verify_totp
from twofactor.schemas.responses import SecondFactorOut

logger = logging.getLogger(__name__)


async def verify_second_factor(
    uow: UnitOfWorkPort,
    user_id: str,
    code: str,
    verify_code: Callable[[str, str], bool],
    totp_config: TotpConfig,
    is_backup_code: bool = False,
) -> SecondFactorOut:
    """
    Second login step for accounts with 2FA on. A matching backup code is
    removed from the stored set in the same transaction.
    """
    async with uow as transaction:
        user = await load_user_for_update(transaction, user_id)
        secret = user.require_two_factor()

        if is_backup_code:
            if not is_valid_backup_code_format(code):
                raise InvalidCodeFormat()
            index = verify_backup_code(code, user.backup_codes, verify_code=verify_code)
            if index == NOT_FOUND:
                raise InvalidVerificationCode()
            user.consume_backup_code(index)
            await transaction.users.save_two_factor_state(user)
            await transaction.commit()
            logger.info(
                "Backup code used",
                extra={"user_id": user_id, "remaining": len(user.backup_codes)},
            )
        else:
            if not is_valid_totp_format(code):
                raise InvalidCodeFormat()
            if not verify_totp(code, secret, totp_config):
                raise InvalidVerificationCode()

    logger.info("2FA verification succeeded", extra={"user_id": user_id})
    return SecondFactorOut(
        user_id=user_id,
        used_backup_code=is_backup_code,
        remaining_backup_codes=len(user.backup_codes),
    )
