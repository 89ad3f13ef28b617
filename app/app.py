"""
Routing only.

All view logic lives in app/views/.
All env reads happen ONLY in config.py.
"""

from __future__ import annotations

import logging
import os
import sys

# Make `app/` importable as a flat module path when running:
#   streamlit run app/app.py
APP_DIR = os.path.dirname(__file__)
if APP_DIR not in sys.path:
    sys.path.insert(0, APP_DIR)

import streamlit as st  # noqa: E402

from components.header import render_header  # noqa: E402
from components.sidebar import render_sidebar  # noqa: E402
from components.styles import apply_theme  # noqa: E402
from config import get_config  # noqa: E402

from views import landing, records, upload  # noqa: E402


def main() -> None:
    apply_theme()
    cfg = get_config()
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    state = render_sidebar(cfg)

    # Switching data mode invalidates loaded records
    if st.session_state.get("active_use_mock") != state.use_mock:
        st.session_state["active_use_mock"] = state.use_mock
        st.session_state.pop("view_state", None)

    render_header(
        app_name="FHEN011 Private GWAS",
        subtitle="Genome-wide association records on a key/value contract (demo)",
        right_pill=f"Store: {'Mock' if state.use_mock else cfg.store_label}",
    )

    # Routing only
    if state.view == "landing":
        landing.render(cfg, state.use_mock)
    elif state.view == "records":
        records.render(cfg, state.use_mock, state.signer)
    elif state.view == "upload":
        upload.render(cfg, state.use_mock, state.signer)
    else:
        st.error("Unknown view")


if __name__ == "__main__":
    main()
