from data.codec import INDEX_KEY, decode_index
from data.connection import InMemoryStore
from data.mock_data import PHENOTYPES, mock_records, seed_store
from data.repository import RecordRepository


def test_mock_records_are_deterministic():
    assert mock_records(now=1_700_000_000) == mock_records(now=1_700_000_000)


def test_mock_records_cover_every_status():
    records = mock_records(n=6, now=1_700_000_000)
    assert {r.status for r in records} == {"pending", "processed", "error"}
    assert all(r.phenotype in PHENOTYPES for r in records)
    assert all(r.institution.startswith("0x") and len(r.institution) == 42 for r in records)


def test_seed_store_is_listable():
    store = InMemoryStore()
    ids = seed_store(store)
    assert decode_index(store.get_data(INDEX_KEY)) == ids
    assert len(RecordRepository(store).list_records()) == len(ids)


def test_seed_store_twice_is_noop():
    store = InMemoryStore()
    first = seed_store(store)
    assert seed_store(store) == []
    assert decode_index(store.get_data(INDEX_KEY)) == first
