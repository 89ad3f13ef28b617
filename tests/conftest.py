import pytest

from data.codec import INDEX_KEY
from data.connection import InMemoryStore, get_store_client
from data.repository import RecordRepository
from data.signer import load_signer


OWNER_KEY = "0x" + "11" * 32
OTHER_KEY = "0x" + "22" * 32


class InterleavingStore(InMemoryStore):
    """
    Runs `on_index_read` once, after the index value has been read but before
    it is returned, to simulate another caller slipping in between.
    """

    def __init__(self):
        super().__init__()
        self.on_index_read = None

    def get_data(self, key):
        value = super().get_data(key)
        if key == INDEX_KEY and self.on_index_read is not None:
            hook, self.on_index_read = self.on_index_read, None
            hook()
        return value


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def clock():
    """Settable fake clock (seconds)."""

    class Clock:
        now = 1_700_000_000.0

        def __call__(self):
            return self.now

    return Clock()


@pytest.fixture
def repo(store, clock) -> RecordRepository:
    return RecordRepository(store, clock=clock)


@pytest.fixture(scope="session")
def owner():
    return load_signer(OWNER_KEY)


@pytest.fixture(scope="session")
def other():
    return load_signer(OTHER_KEY)


@pytest.fixture(autouse=True)
def _fresh_store_cache():
    get_store_client.cache_clear()
    yield
    get_store_client.cache_clear()


@pytest.fixture
def interleaving_store() -> InterleavingStore:
    return InterleavingStore()


@pytest.fixture
def make_cfg():
    from config import AppConfig

    def _make(**overrides) -> AppConfig:
        values = dict(
            store_backend="memory",
            store_url=None,
            store_token=None,
            store_path=".gwas_store.json",
            store_timeout_s=5.0,
            contract_address="0xC0",
            chain_id=1,
            signature_duration_days=30,
            signer_private_key=None,
            default_use_mock=True,
            log_level="INFO",
        )
        values.update(overrides)
        return AppConfig(**values)

    return _make
