from __future__ import annotations

from datetime import datetime

import streamlit as st

from components.metrics import Kpi, render_kpi_row, status_badge, status_bar_chart
from components.narrative import render_tab_intro, render_tx_status
from components.session import dispatch, refresh, view_state
from config import AppConfig
from data.codec import GwasRecord
from data.service import filter_records, get_repository, process_record, reveal_record, status_counts
from data.signer import SignatureRequest, Signer, generate_public_key, is_owner
from state import (
    TABS,
    RecordDeselected,
    RecordSelected,
    RevealStarted,
    SearchChanged,
    TabChanged,
    TxCleared,
    TxFinished,
    TxStarted,
    ValueRevealed,
)


def _signature_request(cfg: AppConfig) -> SignatureRequest:
    # one request per session, like a wallet session
    if "signature_request" not in st.session_state:
        st.session_state["signature_request"] = SignatureRequest(
            public_key=generate_public_key(),
            contract_address=cfg.contract_address,
            chain_id=cfg.chain_id,
            duration_days=cfg.signature_duration_days,
        )
    return st.session_state["signature_request"]


def _fmt_ts(ts: int) -> str:
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M")


def _short(address: str) -> str:
    return f"{address[:6]}...{address[-4:]}" if len(address) > 12 else address


def _render_record(cfg: AppConfig, use_mock: bool, record: GwasRecord, signer: Signer) -> None:
    state = view_state()
    owner = is_owner(signer.address, record.institution)
    with st.container(border=True):
        c1, c2, c3, c4, c5 = st.columns([2, 3, 2, 2, 3])
        c1.markdown(f"**#{record.id[-6:]}**")
        c2.markdown(f"{record.phenotype or 'Untitled'}  \n<span class='subtle'>{_short(record.institution)}</span>", unsafe_allow_html=True)
        c3.markdown(f"{record.snp_count:,} SNPs  \n<span class='subtle'>{_fmt_ts(record.timestamp)}</span>", unsafe_allow_html=True)
        c4.markdown(status_badge(record.status), unsafe_allow_html=True)

        with c5:
            b1, b2 = st.columns(2)
            if owner and record.status == "pending" and b1.button("Process", key=f"process_{record.id}"):
                dispatch(TxStarted("Processing encrypted GWAS data with FHE..."))
                res = process_record(get_repository(cfg, use_mock), record.id, signer.address)
                if res.message:
                    dispatch(TxFinished(ok=res.ok, message=res.message))
                refresh(cfg, use_mock)
                st.rerun()
            if b2.button("Details", key=f"details_{record.id}"):
                dispatch(RecordSelected(record.id))
                st.rerun()

        if state.selected_id == record.id:
            _render_details(cfg, use_mock, record, signer)


def _render_details(cfg: AppConfig, use_mock: bool, record: GwasRecord, signer: Signer) -> None:
    state = view_state()
    st.divider()
    d1, d2 = st.columns(2)
    with d1:
        st.markdown("**Record ID**")
        st.code(record.id, language="text")
        st.markdown("**Institution**")
        st.code(record.institution, language="text")
    with d2:
        st.markdown("**Encoded payload**")
        st.code(record.data[:60] + ("..." if len(record.data) > 60 else ""), language="text")
        label = "Hide value" if state.revealed_value is not None else "Reveal with signature"
        if st.button(label, key=f"reveal_{record.id}", disabled=state.revealing):
            if state.revealed_value is not None:
                dispatch(ValueRevealed(None))
            else:
                dispatch(RevealStarted())
                res = reveal_record(get_repository(cfg, use_mock), record, signer, _signature_request(cfg))
                dispatch(ValueRevealed(res.value))
                if res.message:
                    st.error(f"Decryption failed: {res.message}")
            st.rerun()
        if state.revealed_value is not None:
            st.metric("p-value" if record.status == "processed" else "Effect size", f"{state.revealed_value:.6g}")
    if st.button("Close", key=f"close_{record.id}"):
        dispatch(RecordDeselected())
        st.rerun()


def render(cfg: AppConfig, use_mock: bool, signer: Signer) -> None:
    st.title("GWAS Datasets")
    render_tab_intro(
        persona="Persona: Institution analyst",
        question="Which datasets are waiting for processing, and what did processed ones return?",
        context="Only the owning institution can process a pending dataset or reveal its value.",
    )

    state = view_state()
    if state.loading:
        res = refresh(cfg, use_mock)
        if res.warning:
            st.warning(res.warning)
        state = view_state()

    if render_tx_status(state.tx, key="records"):
        dispatch(TxCleared())
        st.rerun()

    records = list(state.records)
    counts = status_counts(records)
    render_kpi_row(
        [
            Kpi("Total datasets", f"{counts.total}"),
            Kpi("Processed", f"{counts.processed}", tone="processed"),
            Kpi("Pending", f"{counts.pending}", tone="pending"),
            Kpi("Errors", f"{counts.error}", tone="error", help="Records with an error status"),
        ]
    )
    status_bar_chart(counts)

    st.divider()
    c1, c2, c3 = st.columns([3, 3, 1])
    search = c1.text_input("Search phenotypes or institutions", value=state.search, placeholder="Search phenotypes...")
    if search != state.search:
        state = dispatch(SearchChanged(search))
    tab = c2.radio("Status", TABS, index=TABS.index(state.tab), horizontal=True)
    if tab != state.tab:
        state = dispatch(TabChanged(tab))
    with c3:
        st.write("")
        if st.button("Refresh", disabled=state.refreshing, use_container_width=True):
            res = refresh(cfg, use_mock)
            if res.warning:
                st.warning(res.warning)
            state = view_state()

    visible = filter_records(list(state.records), state.search, state.tab)
    st.caption(f"Data source: **{'mock' if use_mock else cfg.store_backend}**; showing {len(visible)} of {counts.total}")
    if not visible:
        st.info("No GWAS datasets found. Upload one from the Upload Data page.")
        return
    for record in visible:
        _render_record(cfg, use_mock, record, signer)
