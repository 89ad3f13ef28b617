from __future__ import annotations

from dataclasses import dataclass

import streamlit as st

from config import AppConfig
from data.signer import Signer, load_signer


@dataclass(frozen=True)
class SidebarState:
    view: str
    use_mock: bool
    signer: Signer


NAV_ITEMS = [
    ("🏠 Overview", "landing"),
    ("🧬 GWAS Datasets", "records"),
    ("⬆️ Upload Data", "upload"),
]


def _session_signer(cfg: AppConfig) -> Signer:
    if "signer" not in st.session_state:
        st.session_state["signer"] = load_signer(cfg.signer_private_key)
    return st.session_state["signer"]


def render_sidebar(cfg: AppConfig) -> SidebarState:
    with st.sidebar:
        st.markdown("### 🧬 FHEN011")
        st.caption("Private GWAS on a key/value contract (demo)")

        labels = [l for l, _ in NAV_ITEMS]
        default_label = st.session_state.get("nav_label", "🏠 Overview")
        idx = labels.index(default_label) if default_label in labels else 0

        label = st.radio(
            "Nav",
            labels,
            index=idx,
            label_visibility="collapsed",
        )
        st.session_state["nav_label"] = label
        view = dict(NAV_ITEMS)[label]

        signer = _session_signer(cfg)
        with st.expander("🔑 Institution", expanded=False):
            st.code(signer.address, language="text")
            if not cfg.signer_private_key and st.button("New demo account", use_container_width=True):
                st.session_state["signer"] = load_signer(None)
                st.rerun()

        with st.expander("⚙️ Settings", expanded=False):
            use_mock = st.toggle(
                "Use mock data",
                value=st.session_state.get("use_mock", cfg.default_use_mock),
                help="When on, a seeded in-memory store is used. When off, the configured store backend is used.",
            )
            st.session_state["use_mock"] = use_mock

            st.markdown("**Store backend**")
            st.code(cfg.store_label, language="text")
    use_mock = st.session_state.get("use_mock", cfg.default_use_mock)

    return SidebarState(view=view, use_mock=use_mock, signer=_session_signer(cfg))
