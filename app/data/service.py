from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from config import AppConfig
from data.codec import GwasRecord
from data.connection import get_store_client
from data.errors import GwasStoreError, StoreUnavailableError
from data.repository import RecordRepository
from data.signer import SignatureRequest, Signer


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordsResult:
    records: list[GwasRecord]
    source: str  # "mock" | "memory" | "file" | "http"
    warning: str | None = None


@dataclass(frozen=True)
class TxResult:
    ok: bool
    status: Optional[str]  # "success" | "error" | None (silent no-op)
    message: Optional[str]
    record_id: Optional[str] = None


@dataclass(frozen=True)
class RevealResult:
    value: Optional[float]
    message: Optional[str] = None


@dataclass(frozen=True)
class UploadForm:
    phenotype: str = ""
    description: str = ""
    snp_count: int = 0
    effect_size: float = 0.0

    def validate(self) -> Optional[str]:
        if not self.phenotype.strip():
            return "Phenotype is required"
        if self.snp_count < 0:
            return "SNP count cannot be negative"
        return None


@dataclass(frozen=True)
class StatusCounts:
    total: int
    processed: int
    pending: int
    error: int

    def shares(self) -> dict[str, float]:
        """Percent of total per status; an empty list counts as total 1."""
        total = self.total or 1
        return {
            "processed": self.processed / total * 100,
            "pending": self.pending / total * 100,
            "error": self.error / total * 100,
        }


NO_OP = TxResult(ok=False, status=None, message=None)


def _source(cfg: AppConfig, use_mock: bool) -> str:
    return "mock" if use_mock else cfg.store_backend


def get_repository(cfg: AppConfig, use_mock: bool) -> RecordRepository:
    return RecordRepository(get_store_client(cfg, use_mock))


def get_records(cfg: AppConfig, use_mock: bool) -> RecordsResult:
    source = _source(cfg, use_mock)
    try:
        repo = get_repository(cfg, use_mock)
    except GwasStoreError as e:
        logger.error("Error loading records: %s", e)
        return RecordsResult(records=[], source=source, warning=f"Could not reach the store: {e}")
    return load_records(repo, source)


def load_records(repo: RecordRepository, source: str) -> RecordsResult:
    try:
        return RecordsResult(records=repo.list_records(), source=source)
    except GwasStoreError as e:
        logger.error("Error loading records: %s", e)
        return RecordsResult(records=[], source=source, warning=f"Could not load records: {type(e).__name__}")


def _failure(prefix: str, e: Exception) -> TxResult:
    text = str(e) or "Unknown error"
    if "user rejected transaction" in text:
        return TxResult(ok=False, status="error", message="Transaction rejected by user")
    return TxResult(ok=False, status="error", message=f"{prefix}: {text}")


def upload_record(repo: RecordRepository, signer: Signer, form: UploadForm) -> TxResult:
    problem = form.validate()
    if problem:
        return TxResult(ok=False, status="error", message=problem)
    try:
        record_id = repo.create(
            institution=signer.address,
            phenotype=form.phenotype.strip(),
            snp_count=form.snp_count,
            effect_size=form.effect_size,
        )
    except StoreUnavailableError:
        return NO_OP
    except GwasStoreError as e:
        logger.error("Upload failed: %s", e)
        return _failure("Submission failed", e)
    return TxResult(ok=True, status="success", message="Encrypted GWAS data submitted securely!", record_id=record_id)


def process_record(repo: RecordRepository, record_id: str, caller: str) -> TxResult:
    try:
        repo.process(record_id, caller)
    except StoreUnavailableError:
        return NO_OP
    except GwasStoreError as e:
        logger.error("Processing %s failed: %s", record_id, e)
        return _failure("Processing failed", e)
    return TxResult(ok=True, status="success", message="FHE GWAS processing completed!", record_id=record_id)


def reveal_record(
    repo: RecordRepository,
    record: GwasRecord,
    signer: Signer,
    request: SignatureRequest,
) -> RevealResult:
    try:
        return RevealResult(value=repo.reveal_value(record, signer, request))
    except GwasStoreError as e:
        logger.error("Decryption failed: %s", e)
        return RevealResult(value=None, message=str(e))


def filter_records(records: list[GwasRecord], search: str = "", tab: str = "all") -> list[GwasRecord]:
    needle = search.lower()
    return [
        r
        for r in records
        if (needle in r.phenotype.lower() or needle in r.institution.lower())
        and (tab == "all" or r.status == tab)
    ]


def status_counts(records: list[GwasRecord]) -> StatusCounts:
    return StatusCounts(
        total=len(records),
        processed=sum(1 for r in records if r.status == "processed"),
        pending=sum(1 for r in records if r.status == "pending"),
        error=sum(1 for r in records if r.status == "error"),
    )
