from twofactor.application._users import load_user_for_update
from twofactor.domain.ports.unit_of_work import UnitOfWorkPort
from twofactor.schemas.responses import TwoFactorStatusOut


async def get_two_factor_status(uow: UnitOfWorkPort, user_id: str) -> TwoFactorStatusOut:
    async with uow as tx:
        user = await load_user_for_update(tx, user_id)
        # read only; no commit needed
    return TwoFactorStatusOut(
        enabled=user.two_factor_enabled,
        has_backup_codes=bool(user.backup_codes),
        remaining_backup_codes=len(user.backup_codes),
    )
