import logging
from typing import Callable

import twofactor.infrastructure.security.totp as totp_security
from twofactor.application._users import load_user_for_update
from twofactor.domain.ports.unit_of_work import UnitOfWorkPort
from twofactor.schemas.responses import TwoFactorSetupOut

logger = logging.getLogger(__name__)


async def start_two_factor_setup(
    uow: UnitOfWorkPort,
    user_id: str,
    issuer: str,
    render_qr: Callable[[str], str],
) -> TwoFactorSetupOut:
    """
    Generate a fresh secret and keep it pending on the user. 2FA stays off
    until enable_two_factor() sees a valid code for it. Calling this again
    before enabling replaces the pending secret.
    """
    async with uow as transaction:
        user = await load_user_for_update(transaction, user_id)
        secret = totp_security.generate_secret()
        user.begin_two_factor_setup(secret)
        await transaction.users.save_two_factor_state(user)

        otpauth_uri = totp_security.build_otpauth_uri(secret, user.email, issuer=issuer)
        qr_code = render_qr(otpauth_uri)
        await transaction.commit()

    logger.info("2FA setup started", extra={"user_id": user_id})
    return TwoFactorSetupOut(secret=secret, otpauth_uri=otpauth_uri, qr_code=qr_code)
