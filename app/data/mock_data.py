from __future__ import annotations

import random
import time

from faker import Faker

from data import cipher
from data.codec import INDEX_KEY, GwasRecord, encode_index, encode_record, record_key
from data.connection import KeyValueStore


PHENOTYPES = [
    "Type 2 diabetes",
    "Coronary artery disease",
    "Body mass index",
    "Height",
    "LDL cholesterol",
    "Schizophrenia",
    "Asthma",
    "Alzheimer's disease",
]

# Status per seeded slot; cycles when n > len
_STATUS_CYCLE = ["pending", "processed", "pending", "processed", "pending", "error"]


def mock_records(n: int = 6, seed: int = 7, now: int | None = None) -> list[GwasRecord]:
    fake = Faker()
    Faker.seed(seed)
    rng = random.Random(seed)
    now = now if now is not None else int(time.time())

    institutions = [fake.hexify(text="0x" + "^" * 40) for _ in range(3)]
    records = []
    for i in range(n):
        ts = now - rng.randint(3600, 30 * 86400)
        status = _STATUS_CYCLE[i % len(_STATUS_CYCLE)]
        effect = round(rng.gauss(0.0, 2.5), 3)
        data = cipher.encode(effect)
        if status == "processed":
            data = cipher.derive(data)
        elif status == "error":
            data = "corrupted"
        records.append(
            GwasRecord(
                id=f"gwas-{ts * 1000}-{fake.lexify(text='????').lower()}",
                data=data,
                timestamp=ts,
                institution=rng.choice(institutions),
                phenotype=rng.choice(PHENOTYPES),
                status=status,
                snp_count=rng.randint(50_000, 2_000_000),
            )
        )
    return records


def seed_store(store: KeyValueStore, n: int = 6, seed: int = 7) -> list[str]:
    """Write synthetic records + index into an empty store. No-op if an index exists."""
    if store.get_data(INDEX_KEY):
        return []
    records = mock_records(n=n, seed=seed)
    for r in records:
        store.set_data(record_key(r.id), encode_record(r))
    ids = [r.id for r in records]
    store.set_data(INDEX_KEY, encode_index(ids))
    return ids
