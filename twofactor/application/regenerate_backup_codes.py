import logging
from typing import Callable

from twofactor.application._users import load_user_for_update
from twofactor.domain.errors import InvalidVerificationCode
from twofactor.domain.ports.unit_of_work import UnitOfWorkPort
from twofactor.domain.services import TotpConfig
from twofactor.infrastructure.security.backup_codes import generate_backup_codes
from twofactor.infrastructure.security.totp import verify_totp
from twofactor.schemas.responses import BackupCodesOut

logger = logging.getLogger(__name__)


async def regenerate_backup_codes(
    uow: UnitOfWorkPort,
    user_id: str,
    code: str,
    hash_code: Callable[[str], str],
    totp_config: TotpConfig,
    backup_code_count: int = 10,
) -> BackupCodesOut:
    """Replace the whole backup-code set; every old code stops working."""
    async with uow as transaction:
        user = await load_user_for_update(transaction, user_id)
        secret = user.require_two_factor()
        if not verify_totp(code, secret, totp_config):
            raise InvalidVerificationCode()

        batch = generate_backup_codes(backup_code_count, hash_code=hash_code)
        user.replace_backup_codes(batch.hashed_codes)
        await transaction.users.save_two_factor_state(user)
        await transaction.commit()

    logger.info("Backup codes regenerated", extra={"user_id": user_id})
    return BackupCodesOut(backup_codes=batch.plaintext_codes)
