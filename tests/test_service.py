import pytest

from data import cipher
from data.codec import INDEX_KEY, GwasRecord, encode_index, record_key
from data.service import (
    StatusCounts,
    UploadForm,
    filter_records,
    get_records,
    load_records,
    process_record,
    reveal_record,
    status_counts,
    upload_record,
)
from data.signer import SignatureRequest


def _rec(rid, status="pending", phenotype="Height", institution="0xAAA", ts=1):
    return GwasRecord(
        id=rid, data=cipher.encode(1), timestamp=ts, institution=institution, phenotype=phenotype, status=status
    )


def test_upload_success(repo, owner):
    res = upload_record(repo, owner, UploadForm(phenotype=" BMI ", snp_count=5, effect_size=0.25))
    assert res.ok
    assert res.status == "success"
    assert res.message == "Encrypted GWAS data submitted securely!"
    record = repo.get(res.record_id)
    assert record.phenotype == "BMI"
    assert record.institution == owner.address


@pytest.mark.parametrize(
    "form, message",
    [
        (UploadForm(phenotype="  "), "Phenotype is required"),
        (UploadForm(phenotype="BMI", snp_count=-1), "SNP count cannot be negative"),
    ],
)
def test_upload_validation(repo, owner, store, form, message):
    res = upload_record(repo, owner, form)
    assert not res.ok
    assert res.message == message
    assert store.keys() == []


def test_upload_write_failure_is_reported(repo, owner, store):
    store.reject_writes = "out of gas"
    res = upload_record(repo, owner, UploadForm(phenotype="BMI"))
    assert res.status == "error"
    assert res.message == "Submission failed: out of gas"


def test_upload_rejected_by_user(repo, owner, store):
    store.reject_writes = "user rejected transaction (code 4001)"
    res = upload_record(repo, owner, UploadForm(phenotype="BMI"))
    assert res.message == "Transaction rejected by user"


def test_upload_on_unavailable_store_is_silent(repo, owner, store):
    store.available = False
    res = upload_record(repo, owner, UploadForm(phenotype="BMI"))
    assert not res.ok
    assert res.status is None
    assert res.message is None


def test_process_success_and_failure(repo, owner, other):
    rid = upload_record(repo, owner, UploadForm(phenotype="BMI", effect_size=10)).record_id

    denied = process_record(repo, rid, other.address)
    assert denied.status == "error"
    assert denied.message.startswith("Processing failed: ")

    done = process_record(repo, rid, owner.address)
    assert done.ok
    assert done.message == "FHE GWAS processing completed!"
    assert repo.get(rid).status == "processed"


def test_process_missing_record(repo, owner):
    res = process_record(repo, "gwas-0-none", owner.address)
    assert res.message == "Processing failed: Record not found: gwas-0-none"


def test_reveal_record(repo, owner, other):
    rid = upload_record(repo, owner, UploadForm(phenotype="BMI", effect_size=1.5)).record_id
    request = SignatureRequest(public_key="0x0", contract_address="0xC0", chain_id=1, start_timestamp=1)
    record = repo.get(rid)

    assert reveal_record(repo, record, owner, request).value == 1.5
    denied = reveal_record(repo, record, other, request)
    assert denied.value is None
    assert denied.message


def test_load_records_reports_source(repo, owner):
    upload_record(repo, owner, UploadForm(phenotype="BMI"))
    res = load_records(repo, "memory")
    assert res.source == "memory"
    assert res.warning is None
    assert len(res.records) == 1


def test_load_records_skips_record_with_nan_timestamp(store, repo, owner):
    upload_record(repo, owner, UploadForm(phenotype="BMI"))
    store.set_data(record_key("bad"), b'{"data": "FHE-MQ==", "timestamp": NaN, "institution": "0x1"}')
    store.set_data(INDEX_KEY, encode_index(repo.list_ids() + ["bad"]))

    res = load_records(repo, "memory")
    assert res.warning is None
    assert [r.phenotype for r in res.records] == ["BMI"]


def test_get_records_mock_mode_is_seeded(make_cfg):
    res = get_records(make_cfg(), use_mock=True)
    assert res.source == "mock"
    assert len(res.records) == 6


def test_get_records_http_without_url_warns(make_cfg):
    res = get_records(make_cfg(store_backend="http"), use_mock=False)
    assert res.records == []
    assert res.warning


def test_filter_by_search_and_tab():
    records = [
        _rec("a", phenotype="Type 2 diabetes", institution="0xAAA"),
        _rec("b", status="processed", phenotype="Height", institution="0xBBB"),
        _rec("c", status="error", phenotype="Asthma", institution="0xDiab"),
    ]
    assert [r.id for r in filter_records(records, "DIAB")] == ["a", "c"]
    assert [r.id for r in filter_records(records, "", "processed")] == ["b"]
    assert [r.id for r in filter_records(records, "diab", "error")] == ["c"]
    assert filter_records(records) == records


def test_status_counts_and_shares():
    counts = status_counts([_rec("a"), _rec("b", "processed"), _rec("c", "processed"), _rec("d", "error")])
    assert counts == StatusCounts(total=4, processed=2, pending=1, error=1)
    assert counts.shares() == {"processed": 50.0, "pending": 25.0, "error": 25.0}


def test_shares_of_empty_list():
    assert status_counts([]).shares() == {"processed": 0.0, "pending": 0.0, "error": 0.0}
