import pytest

from twofactor.application.get_two_factor_status import get_two_factor_status
from twofactor.application.verify_second_factor import verify_second_factor
from twofactor.domain.errors import (
    InvalidCodeFormat,
    InvalidVerificationCode,
    TwoFactorNotEnabled,
    UserNotFound,
)


@pytest.mark.asyncio
async def test_totp_code_accepted(uow, enrolled_user, current_code, verify_code_stub, totp_config):
    out = await verify_second_factor(
        uow=uow,
        user_id="u1",
        code=current_code,
        verify_code=verify_code_stub,
        totp_config=totp_config,
    )

    assert out.user_id == "u1"
    assert out.used_backup_code is False
    assert out.remaining_backup_codes == 3
    assert uow.users.save_calls == []


@pytest.mark.asyncio
async def test_totp_code_wrong(uow, enrolled_user, current_code, verify_code_stub, totp_config):
    wrong = str((int(current_code) + 1) % 1_000_000).zfill(6)
    with pytest.raises(InvalidVerificationCode):
        await verify_second_factor(
            uow=uow,
            user_id="u1",
            code=wrong,
            verify_code=verify_code_stub,
            totp_config=totp_config,
        )


@pytest.mark.asyncio
@pytest.mark.parametrize("code", ["12345", "abcdef", "AB12-CD34"])
async def test_totp_code_bad_format(uow, enrolled_user, verify_code_stub, totp_config, code):
    with pytest.raises(InvalidCodeFormat):
        await verify_second_factor(
            uow=uow,
            user_id="u1",
            code=code,
            verify_code=verify_code_stub,
            totp_config=totp_config,
        )


@pytest.mark.asyncio
async def test_backup_code_is_consumed(uow, enrolled_user, verify_code_stub, totp_config):
    out = await verify_second_factor(
        uow=uow,
        user_id="u1",
        code="ab12 cd34",
        verify_code=verify_code_stub,
        totp_config=totp_config,
        is_backup_code=True,
    )

    assert out.used_backup_code is True
    assert out.remaining_backup_codes == 2
    assert uow.users.users["u1"].backup_codes == ["hashed-0000-1111", "hashed-FFFF-9999"]
    assert uow.committed is True

    with pytest.raises(InvalidVerificationCode):
        await verify_second_factor(
            uow=uow,
            user_id="u1",
            code="AB12-CD34",
            verify_code=verify_code_stub,
            totp_config=totp_config,
            is_backup_code=True,
        )
    assert len(uow.users.users["u1"].backup_codes) == 2


@pytest.mark.asyncio
async def test_last_backup_code_in_the_middle(uow, enrolled_user, verify_code_stub, totp_config):
    await verify_second_factor(
        uow=uow,
        user_id="u1",
        code="00001111",
        verify_code=verify_code_stub,
        totp_config=totp_config,
        is_backup_code=True,
    )
    assert uow.users.users["u1"].backup_codes == ["hashed-AB12-CD34", "hashed-FFFF-9999"]


@pytest.mark.asyncio
async def test_backup_code_bad_format(uow, enrolled_user, verify_code_stub, totp_config):
    with pytest.raises(InvalidCodeFormat):
        await verify_second_factor(
            uow=uow,
            user_id="u1",
            code="XYZ",
            verify_code=verify_code_stub,
            totp_config=totp_config,
            is_backup_code=True,
        )
    assert uow.users.save_calls == []


@pytest.mark.asyncio
async def test_unknown_backup_code(uow, enrolled_user, verify_code_stub, totp_config):
    with pytest.raises(InvalidVerificationCode):
        await verify_second_factor(
            uow=uow,
            user_id="u1",
            code="1234-5678",
            verify_code=verify_code_stub,
            totp_config=totp_config,
            is_backup_code=True,
        )
    assert uow.users.users["u1"].backup_codes == enrolled_user.backup_codes
    assert uow.committed is False


@pytest.mark.asyncio
async def test_second_factor_requires_enabled(uow, pending_user, current_code, verify_code_stub, totp_config):
    with pytest.raises(TwoFactorNotEnabled):
        await verify_second_factor(
            uow=uow,
            user_id="u1",
            code=current_code,
            verify_code=verify_code_stub,
            totp_config=totp_config,
        )


@pytest.mark.asyncio
async def test_second_factor_unknown_user(uow, verify_code_stub, totp_config):
    with pytest.raises(UserNotFound):
        await verify_second_factor(
            uow=uow,
            user_id="ghost",
            code="123456",
            verify_code=verify_code_stub,
            totp_config=totp_config,
        )


@pytest.mark.asyncio
async def test_status_enrolled(uow, enrolled_user):
    out = await get_two_factor_status(uow, "u1")
    assert out.enabled is True
    assert out.has_backup_codes is True
    assert out.remaining_backup_codes == 3


@pytest.mark.asyncio
async def test_status_not_enrolled(uow, new_user):
    out = await get_two_factor_status(uow, "u1")
    assert (out.enabled, out.has_backup_codes, out.remaining_backup_codes) == (False, False, 0)


@pytest.mark.asyncio
async def test_status_unknown_user(uow):
    with pytest.raises(UserNotFound):
        await get_two_factor_status(uow, "ghost")
