import os

import pytest

from pbkdf2key.config import get_settings


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    for name in list(os.environ):
        if name.upper().startswith("PBKDF2KEY_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def password():
    return b"password"


@pytest.fixture
def salt():
    return b"salt"


@pytest.fixture
def random_password():
    return os.urandom(24)


@pytest.fixture
def random_salt():
    return os.urandom(16)
