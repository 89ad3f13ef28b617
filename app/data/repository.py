"""
Record repository over the key/value store.

Layout in the store:
- `gwas_record_keys`     JSON array of record ids (append-only)
- `gwas_record_<id>`     one JSON document per record

Create writes the document, then re-reads and rewrites the index. The store
has no compare-and-set, so two creators racing on the index can drop each
other's id (the document survives as an orphan). That gap is left as is.
"""

from __future__ import annotations

import logging
import secrets
import time
from typing import Callable, Optional

from data import cipher
from data.codec import (
    INDEX_KEY,
    GwasRecord,
    decode_index,
    decode_record,
    encode_index,
    encode_record,
    record_key,
)
from data.connection import KeyValueStore
from data.errors import (
    AuthorizationError,
    DecodeError,
    InvalidStateError,
    NotFoundError,
    StoreReadError,
    StoreUnavailableError,
)
from data.signer import SignatureRequest, Signer, is_owner, recover_signer


logger = logging.getLogger(__name__)

ID_PREFIX = "gwas"
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def new_record_id(now_ms: Optional[int] = None) -> str:
    """`gwas-<epoch ms>-<4 base36 chars>`; unique only with high probability."""
    ms = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(4))
    return f"{ID_PREFIX}-{ms}-{suffix}"


class RecordRepository:
    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], float] = time.time,
        id_factory: Callable[[], str] = new_record_id,
    ):
        self.store = store
        self._clock = clock
        self._id_factory = id_factory

    def _require_available(self) -> None:
        if not self.store.is_available():
            raise StoreUnavailableError("Key/value store is not available")

    def list_ids(self) -> list[str]:
        return decode_index(self.store.get_data(INDEX_KEY))

    def list_records(self) -> list[GwasRecord]:
        """
        All readable records, newest first. Unreadable entries are logged and
        skipped; an unavailable store or unreadable index gives [].
        """
        if not self.store.is_available():
            logger.info("Store unavailable; nothing to list")
            return []
        try:
            ids = self.list_ids()
        except StoreReadError as e:
            logger.error("Error loading record keys: %s", e)
            return []

        records: list[GwasRecord] = []
        for record_id in ids:
            try:
                raw = self.store.get_data(record_key(record_id))
            except StoreReadError as e:
                logger.warning("Error loading record %s: %s", record_id, e)
                continue
            if not raw:
                logger.warning("Record %s is in the index but has no document", record_id)
                continue
            try:
                records.append(decode_record(record_id, raw))
            except DecodeError as e:
                logger.warning("Skipping record %s: %s", record_id, e)

        records.sort(key=lambda r: r.timestamp, reverse=True)
        return records

    def get(self, record_id: str) -> GwasRecord:
        raw = self.store.get_data(record_key(record_id))
        if not raw:
            raise NotFoundError(f"Record not found: {record_id}")
        return decode_record(record_id, raw)

    def create(self, institution: str, phenotype: str, snp_count: int, effect_size: float) -> str:
        self._require_available()
        record = GwasRecord(
            id=self._id_factory(),
            data=cipher.encode(effect_size),
            timestamp=int(self._clock()),
            institution=institution,
            phenotype=phenotype,
            status="pending",
            snp_count=int(snp_count),
        )
        self.store.set_data(record_key(record.id), encode_record(record))

        # Not atomic with the write above; see module docstring.
        ids = self.list_ids()
        ids.append(record.id)
        self.store.set_data(INDEX_KEY, encode_index(ids))
        logger.info("Created record %s for %s", record.id, institution)
        return record.id

    def process(self, record_id: str, caller: str) -> GwasRecord:
        self._require_available()
        record = self.get(record_id)
        if not is_owner(caller, record.institution):
            raise AuthorizationError(f"{caller} does not own record {record_id}")
        if record.status != "pending":
            raise InvalidStateError(f"Record {record_id} is {record.status}, expected pending")

        updated = record.with_result(cipher.derive(record.data))
        self.store.set_data(record_key(record_id), encode_record(updated))
        logger.info("Processed record %s", record_id)
        return updated

    def reveal_value(self, record: GwasRecord, signer: Signer, request: SignatureRequest) -> float:
        """
        Decode a record's payload after the signer proves it holds the
        owning institution's key. Display only; nothing is written.
        """
        message = request.message()
        signature = signer.sign_message(message)
        if not is_owner(recover_signer(message, signature), record.institution):
            raise AuthorizationError(f"Signature does not match the owner of record {record.id}")
        return cipher.decode(record.data)
