from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


#
# Shared theme tokens
# - Centralized here so components/styles.py and chart helpers read one source.
#
THEME = {
    # Backgrounds
    "bg_primary": "#F2F4F8",     # page background
    "bg_secondary": "#FFFFFF",   # sidebar / top surfaces
    "bg_card": "#FFFFFF",       # card surface
    # Accents
    "accent_primary": "#6D28D9",    # violet 700
    "accent_secondary": "#8B5CF6",  # violet 500 (hover)
    "navy_900": "#0B1220",
    "navy_800": "#111C33",
    # Text + borders
    "text_primary": "#111827",
    "text_secondary": "rgba(17, 24, 39, 0.72)",
    "border_color": "#E3E6EE",
    "grid": "rgba(17, 24, 39, 0.10)",
    "shadow": "0 1px 3px rgba(16,24,40,0.08)",
    "radius_px": 10,
    # Status colors
    "success": "#067647",
    "warning": "#F59E0B",
    "danger": "#B42318",
}

STORE_BACKENDS = ("memory", "file", "http")


@dataclass(frozen=True)
class AppConfig:
    # Key/value store backend: "memory" | "file" | "http"
    store_backend: str
    store_url: Optional[str]
    store_token: Optional[str]
    store_path: str
    store_timeout_s: float

    # Signature request parameters (shown to the signer on reveal)
    contract_address: str
    chain_id: int
    signature_duration_days: int

    # Optional institution key. If unset, a throwaway account is generated per session.
    signer_private_key: Optional[str]

    # Defaults
    default_use_mock: bool
    log_level: str

    @property
    def store_label(self) -> str:
        if self.store_backend == "http":
            return f"http ({self.store_url or 'unset'})"
        if self.store_backend == "file":
            return f"file ({self.store_path})"
        return "memory"


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _getint(name: str, default: int) -> int:
    raw = _getenv(name)
    try:
        return int(raw) if raw is not None else default
    except ValueError:
        return default


def _getfloat(name: str, default: float) -> float:
    raw = _getenv(name)
    try:
        return float(raw) if raw is not None else default
    except ValueError:
        return default


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - Unknown STORE_BACKEND values fall back to the in-memory store
    """
    load_dotenv(override=False)

    backend = (_getenv("STORE_BACKEND", "memory") or "memory").lower()
    if backend not in STORE_BACKENDS:
        backend = "memory"

    return AppConfig(
        store_backend=backend,
        store_url=_getenv("STORE_URL"),
        store_token=_getenv("STORE_TOKEN"),
        store_path=_getenv("STORE_PATH", ".gwas_store.json") or ".gwas_store.json",
        store_timeout_s=_getfloat("STORE_TIMEOUT_S", 30.0),
        contract_address=_getenv("CONTRACT_ADDRESS") or "",
        chain_id=_getint("CHAIN_ID", 0),
        signature_duration_days=_getint("SIGNATURE_DURATION_DAYS", 30),
        signer_private_key=_getenv("SIGNER_PRIVATE_KEY"),
        default_use_mock=(_getenv("USE_MOCK_DATA", "true") or "true").lower() == "true",
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
