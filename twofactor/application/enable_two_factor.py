import logging
from typing import Callable

from twofactor.application._users import load_user_for_update
from twofactor.domain.errors import (
    InvalidCodeFormat,
    InvalidVerificationCode,
    TwoFactorAlreadyEnabled,
    TwoFactorSetupNotStarted,
)
from twofactor.domain.ports.unit_of_work import UnitOfWorkPort
from twofactor.domain.services import TotpConfig, is_valid_totp_format
from twofactor.infrastructure.security.backup_codes import generate_backup_codes
from twofactor.infrastructure.security.totp import verify_totp
from twofactor.schemas.responses import BackupCodesOut

logger = logging.getLogger(__name__)


async def enable_two_factor(
    uow: UnitOfWorkPort,
    user_id: str,
    code: str,
    hash_code: Callable[[str], str],
    totp_config: TotpConfig,
    backup_code_count: int = 10,
) -> BackupCodesOut:
    async with uow as transaction:
        user = await load_user_for_update(transaction, user_id)
        if user.two_factor_enabled:
            raise TwoFactorAlreadyEnabled()
        if not user.two_factor_secret:
            raise TwoFactorSetupNotStarted()
        if not is_valid_totp_format(code):
            raise InvalidCodeFormat()
        if not verify_totp(code, user.two_factor_secret, totp_config):
            raise InvalidVerificationCode()

        batch = generate_backup_codes(backup_code_count, hash_code=hash_code)
        user.enable_two_factor(batch.hashed_codes)
        await transaction.users.save_two_factor_state(user)
        await transaction.commit()

    logger.info("2FA enabled", extra={"user_id": user_id})
    return BackupCodesOut(backup_codes=batch.plaintext_codes)
