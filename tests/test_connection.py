"""
Store clients. The HTTP client is exercised with `requests` patched out.
"""

import json
from unittest.mock import Mock, patch

import pytest
import requests

from data.connection import HttpStore, InMemoryStore, JsonFileStore, get_store_client
from data.errors import StoreReadError, StoreWriteError
from data.repository import RecordRepository


def test_memory_store_absent_key_is_empty():
    store = InMemoryStore()
    assert store.get_data("missing") == b""
    receipt = store.set_data("k", b"v")
    assert receipt.key == "k"
    assert receipt.tx_hash.startswith("0x")
    assert store.get_data("k") == b"v"


def test_file_store_persists_between_instances(tmp_path):
    path = str(tmp_path / "store.json")
    JsonFileStore(path).set_data("gwas_record_keys", b'["a"]')

    reopened = JsonFileStore(path)
    assert reopened.is_available()
    assert reopened.get_data("gwas_record_keys") == b'["a"]'
    assert reopened.get_data("other") == b""


def test_file_store_corrupt_file(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{oops", encoding="utf-8")
    store = JsonFileStore(str(path))
    with pytest.raises(StoreReadError):
        store.get_data("k")
    with pytest.raises(StoreWriteError):
        store.set_data("k", b"v")


def test_file_store_non_string_value_is_a_read_error(tmp_path):
    path = tmp_path / "store.json"
    path.write_text(json.dumps({"gwas_record_keys": b'["a"]'.hex(), "gwas_record_a": 5}), encoding="utf-8")
    store = JsonFileStore(str(path))
    with pytest.raises(StoreReadError):
        store.get_data("gwas_record_a")

    assert RecordRepository(store).list_records() == []


def test_file_store_unavailable_when_directory_missing(tmp_path):
    assert not JsonFileStore(str(tmp_path / "nope" / "store.json")).is_available()


def test_http_store_reads_hex_values():
    store = HttpStore("https://gw.example/", token="t0k", timeout=3)
    with patch("data.connection.requests.get") as get:
        get.return_value = Mock(status_code=200, json=lambda: {"value": "0x" + b"hello".hex()})
        assert store.get_data("gwas_record_keys") == b"hello"
        get.assert_called_once_with(
            "https://gw.example/data/gwas_record_keys",
            headers={"Authorization": "Bearer t0k"},
            timeout=3,
        )


def test_http_store_missing_key_is_empty():
    store = HttpStore("https://gw.example")
    with patch("data.connection.requests.get", return_value=Mock(status_code=404)):
        assert store.get_data("k") == b""


@pytest.mark.parametrize(
    "side_effect, response",
    [
        (requests.ConnectionError("down"), None),
        (None, Mock(status_code=500)),
        (None, Mock(status_code=200, json=lambda: {"value": "0xzz"})),
    ],
)
def test_http_store_read_failures(side_effect, response):
    store = HttpStore("https://gw.example")
    with patch("data.connection.requests.get", side_effect=side_effect, return_value=response):
        with pytest.raises(StoreReadError):
            store.get_data("k")


def test_http_store_write():
    store = HttpStore("https://gw.example")
    with patch("data.connection.requests.post") as post:
        post.return_value = Mock(status_code=200, json=lambda: {"tx_hash": "0xfeed"})
        receipt = store.set_data("k", b"\x01\x02")
        assert receipt.tx_hash == "0xfeed"
        assert post.call_args.kwargs["json"] == {"value": "0x0102"}


def test_http_store_write_rejected():
    store = HttpStore("https://gw.example")
    with patch("data.connection.requests.post", return_value=Mock(status_code=400, text="user rejected transaction")):
        with pytest.raises(StoreWriteError, match="user rejected transaction"):
            store.set_data("k", b"v")


def test_http_store_availability():
    store = HttpStore("https://gw.example")
    with patch("data.connection.requests.get", return_value=Mock(status_code=200, json=lambda: {"available": True})):
        assert store.is_available()
    with patch("data.connection.requests.get", side_effect=requests.Timeout("slow")):
        assert not store.is_available()


def test_factory_backends(make_cfg, tmp_path):
    assert isinstance(get_store_client(make_cfg(), False), InMemoryStore)
    assert isinstance(get_store_client(make_cfg(store_backend="file", store_path=str(tmp_path / "s.json")), False), JsonFileStore)
    assert isinstance(get_store_client(make_cfg(store_backend="http", store_url="https://gw.example"), False), HttpStore)
    with pytest.raises(StoreReadError):
        get_store_client(make_cfg(store_backend="http"), False)


def test_factory_reuses_store_per_mode(make_cfg):
    cfg = make_cfg(store_backend="http", store_url="https://gw.example")
    mock_store = get_store_client(cfg, True)
    assert isinstance(mock_store, InMemoryStore)
    assert get_store_client(cfg, True) is mock_store
    assert mock_store.get_data("gwas_record_keys") != b""
