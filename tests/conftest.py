import pyotp
import pytest

from tests.fakes import FakeUoW
from twofactor.domain.entities import User
from twofactor.domain.services import DEFAULT_TOTP_CONFIG
from twofactor.settings import get_settings

SECRET = "JBSWY3DPEHPK3PXPJBSWY3DPEHPK3PXP"


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def uow():
    return FakeUoW()


@pytest.fixture()
def secret():
    return SECRET


@pytest.fixture()
def totp_config():
    return DEFAULT_TOTP_CONFIG


@pytest.fixture()
def current_code(secret):
    return pyotp.TOTP(secret).now()


@pytest.fixture()
def hash_code_stub():
    return lambda c: "hashed-" + c


@pytest.fixture()
def verify_code_stub():
    return lambda c, h: h == "hashed-" + c


@pytest.fixture()
def new_user(uow):
    return uow.users.add(User(id="u1", email="creator@example.com"))


@pytest.fixture()
def pending_user(uow, secret):
    return uow.users.add(
        User(id="u1", email="creator@example.com", two_factor_secret=secret)
    )


@pytest.fixture()
def enrolled_user(uow, secret):
    return uow.users.add(
        User(
            id="u1",
            email="creator@example.com",
            two_factor_secret=secret,
            two_factor_enabled=True,
            backup_codes=["hashed-AB12-CD34", "hashed-0000-1111", "hashed-FFFF-9999"],
        ),
        password_hash="hashed-s3cret",
    )
