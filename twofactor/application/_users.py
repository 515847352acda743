from twofactor.domain.entities import User
from twofactor.domain.errors import UserNotFound
from twofactor.domain.ports.unit_of_work import UnitOfWorkPort


async def load_user_for_update(transaction: UnitOfWorkPort, user_id: str) -> User:
    user = await transaction.users.get_by_id_for_update(user_id)
    if not user:
        raise UserNotFound()
    return user
