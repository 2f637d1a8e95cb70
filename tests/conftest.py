import pytest
from memberdir_core.crypto import ed25519_generate
from memberdir_core.storage import InMemoryRecordProvider, SQLiteRecordProvider
from memberdir_core.store import RecordStore

NOW = 1_700_000_000_000


@pytest.fixture
def authority():
    priv, _ = ed25519_generate()
    return priv


@pytest.fixture(params=["memory", "sqlite"])
def provider(request, tmp_path):
    if request.param == "memory":
        p = InMemoryRecordProvider()
    else:
        p = SQLiteRecordProvider(str(tmp_path / "memberdir.db"))
    yield p
    p.close()


@pytest.fixture
def store(provider):
    return RecordStore(provider)
