from __future__ import annotations

import json
import logging
import os
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import requests

from config import AppConfig
from data.errors import StoreReadError, StoreWriteError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WriteReceipt:
    key: str
    tx_hash: str


class KeyValueStore(ABC):
    """
    The generic on-chain key/value contract, seen as an opaque byte store.
    `get_data` returns b"" for keys that were never written.
    """

    @abstractmethod
    def is_available(self) -> bool:
        pass

    @abstractmethod
    def get_data(self, key: str) -> bytes:
        pass

    @abstractmethod
    def set_data(self, key: str, value: bytes) -> WriteReceipt:
        pass


def _fake_tx_hash() -> str:
    return "0x" + uuid.uuid4().hex + uuid.uuid4().hex


class InMemoryStore(KeyValueStore):
    """Dict-backed store for mock mode and tests."""

    def __init__(self, available: bool = True):
        self.available = available
        self.reject_writes: Optional[str] = None
        self._data: dict[str, bytes] = {}

    def is_available(self) -> bool:
        return self.available

    def get_data(self, key: str) -> bytes:
        return self._data.get(key, b"")

    def set_data(self, key: str, value: bytes) -> WriteReceipt:
        if self.reject_writes:
            raise StoreWriteError(self.reject_writes)
        self._data[key] = bytes(value)
        return WriteReceipt(key=key, tx_hash=_fake_tx_hash())

    def keys(self) -> list[str]:
        return list(self._data.keys())


class JsonFileStore(KeyValueStore):
    """
    File-backed store: one JSON object of hex-encoded values.
    Writes go through a temp file + rename.
    """

    def __init__(self, path: str):
        self.path = path

    def _load(self) -> dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            raise StoreReadError(f"Could not read {self.path}: {e}") from e
        return raw if isinstance(raw, dict) else {}

    def is_available(self) -> bool:
        directory = os.path.dirname(os.path.abspath(self.path))
        return os.path.isdir(directory)

    def get_data(self, key: str) -> bytes:
        value = self._load().get(key)
        if not value:
            return b""
        if not isinstance(value, str):
            raise StoreReadError(f"Stored value for {key!r} is not a hex string")
        try:
            return bytes.fromhex(value)
        except ValueError as e:
            raise StoreReadError(f"Stored value for {key!r} is not hex") from e

    def set_data(self, key: str, value: bytes) -> WriteReceipt:
        try:
            data = self._load()
        except StoreReadError as e:
            raise StoreWriteError(str(e)) from e
        data[key] = bytes(value).hex()
        tmp = self.path + ".tmp"
        try:
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(data, f)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except OSError as e:
            raise StoreWriteError(f"Could not write {self.path}: {e}") from e
        return WriteReceipt(key=key, tx_hash=_fake_tx_hash())


class HttpStore(KeyValueStore):
    """
    Client for a JSON gateway in front of the key/value contract.

    Routes:
    - GET  /available    -> {"available": bool}
    - GET  /data/{key}   -> {"value": "0x<hex>"}
    - POST /data/{key}   {"value": "0x<hex>"} -> {"tx_hash": "..."}
    """

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: float = 30.0):
        self._base_url = base_url.rstrip("/")
        self._headers = {"Authorization": f"Bearer {token}"} if token else {}
        self.timeout = timeout

    def is_available(self) -> bool:
        try:
            resp = requests.get(f"{self._base_url}/available", headers=self._headers, timeout=self.timeout)
            if resp.status_code >= 300:
                return False
            return bool(resp.json().get("available", False))
        except (requests.RequestException, ValueError, AttributeError) as e:
            logger.warning("Store availability check failed: %s", e)
            return False

    def get_data(self, key: str) -> bytes:
        try:
            resp = requests.get(f"{self._base_url}/data/{key}", headers=self._headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise StoreReadError(f"getData({key}) failed: {e}") from e
        if resp.status_code == 404:
            return b""
        if resp.status_code >= 300:
            raise StoreReadError(f"getData({key}) returned HTTP {resp.status_code}")
        try:
            value = resp.json().get("value") or ""
            return bytes.fromhex(value[2:] if value.startswith("0x") else value)
        except (ValueError, AttributeError) as e:
            raise StoreReadError(f"getData({key}) returned a malformed value") from e

    def set_data(self, key: str, value: bytes) -> WriteReceipt:
        try:
            resp = requests.post(
                f"{self._base_url}/data/{key}",
                json={"value": "0x" + bytes(value).hex()},
                headers=self._headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise StoreWriteError(str(e)) from e
        if resp.status_code >= 300:
            detail = resp.text.strip() or f"HTTP {resp.status_code}"
            raise StoreWriteError(detail)
        try:
            tx_hash = resp.json().get("tx_hash") or ""
        except ValueError:
            tx_hash = ""
        return WriteReceipt(key=key, tx_hash=tx_hash)


@lru_cache(maxsize=None)
def get_store_client(cfg: AppConfig, use_mock: bool) -> KeyValueStore:
    """
    One store per (config, mode) for the life of the process, so the
    in-memory store survives Streamlit reruns.
    """
    if use_mock or cfg.store_backend == "memory":
        from data.mock_data import seed_store

        store = InMemoryStore()
        if use_mock:
            seed_store(store)
        return store
    if cfg.store_backend == "file":
        return JsonFileStore(cfg.store_path)
    if not cfg.store_url:
        raise StoreReadError("STORE_URL is required for the http store backend")
    return HttpStore(cfg.store_url, token=cfg.store_token, timeout=cfg.store_timeout_s)
