"""
Byte/JSON codec for the record index and record documents.

Key names and JSON field names are shared with the deployed front-end and
must not change.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, replace
from typing import Any

from data.errors import DecodeError


logger = logging.getLogger(__name__)

INDEX_KEY = "gwas_record_keys"
RECORD_KEY_PREFIX = "gwas_record_"

STATUSES = ("pending", "processed", "error")


def record_key(record_id: str) -> str:
    return f"{RECORD_KEY_PREFIX}{record_id}"


@dataclass(frozen=True)
class GwasRecord:
    id: str
    data: str  # placeholder-cipher payload
    timestamp: int  # seconds since epoch
    institution: str  # owner address
    phenotype: str
    status: str = "pending"
    snp_count: int = 0

    def to_document(self) -> dict[str, Any]:
        return {
            "data": self.data,
            "timestamp": self.timestamp,
            "institution": self.institution,
            "phenotype": self.phenotype,
            "status": self.status,
            "snpCount": self.snp_count,
        }

    def with_result(self, data: str, status: str = "processed") -> "GwasRecord":
        return replace(self, data=data, status=status)


def to_bytes(text: str) -> bytes:
    return text.encode("utf-8")


def from_bytes(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError("Value is not valid UTF-8") from e


def encode_index(ids: list[str]) -> bytes:
    return to_bytes(json.dumps(list(ids)))


def decode_index(raw: bytes) -> list[str]:
    """
    Absent or unreadable index -> empty list. Never raises.
    """
    if not raw:
        return []
    try:
        text = from_bytes(raw)
        if text.strip() == "":
            return []
        parsed = json.loads(text)
    except (DecodeError, ValueError) as e:
        logger.error("Error parsing record keys: %s", e)
        return []
    if not isinstance(parsed, list):
        logger.error("Record keys are not a JSON array (got %s)", type(parsed).__name__)
        return []
    ids = [k for k in parsed if isinstance(k, str)]
    if len(ids) != len(parsed):
        logger.warning("Dropped %d non-string record keys", len(parsed) - len(ids))
    return ids


def encode_record(record: GwasRecord) -> bytes:
    return to_bytes(json.dumps(record.to_document()))


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"Field {field!r} is not a number: {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise DecodeError(f"Field {field!r} is not finite: {value!r}")
    return int(value)


def decode_record(record_id: str, raw: bytes) -> GwasRecord:
    """
    Parse one record document. Raises DecodeError on anything malformed;
    a missing or unknown status reads as "pending", a missing snpCount as 0.
    """
    if not raw:
        raise DecodeError(f"Record {record_id} is empty")
    try:
        doc = json.loads(from_bytes(raw))
    except ValueError as e:
        raise DecodeError(f"Record {record_id} is not valid JSON") from e
    if not isinstance(doc, dict):
        raise DecodeError(f"Record {record_id} is not a JSON object")

    data = doc.get("data")
    institution = doc.get("institution")
    if not isinstance(data, str):
        raise DecodeError(f"Record {record_id} has no data payload")
    if not isinstance(institution, str):
        raise DecodeError(f"Record {record_id} has no institution")

    status = doc.get("status")
    if status not in STATUSES:
        status = "pending"

    snp_count = _as_int(doc.get("snpCount") or 0, "snpCount")
    if snp_count < 0:
        raise DecodeError(f"Record {record_id} has a negative snpCount")

    phenotype = doc.get("phenotype")
    return GwasRecord(
        id=record_id,
        data=data,
        timestamp=_as_int(doc.get("timestamp"), "timestamp"),
        institution=institution,
        phenotype=phenotype if isinstance(phenotype, str) else "",
        status=status,
        snp_count=snp_count,
    )
