from __future__ import annotations

import streamlit as st

from components.narrative import render_callout, render_tab_intro, render_tx_status
from components.session import dispatch, refresh, view_state
from config import AppConfig
from data.service import UploadForm, get_repository, upload_record
from data.signer import Signer
from state import TxCleared, TxFinished, UploadClosed, UploadOpened, UploadStarted


def render(cfg: AppConfig, use_mock: bool, signer: Signer) -> None:
    st.title("Upload GWAS Data")
    render_tab_intro(
        persona="Persona: Data steward at a member institution",
        question="Add a dataset summary for the consortium to process.",
        context=f"The record will be owned by {signer.address}.",
    )

    state = view_state()
    if not state.upload_open:
        state = dispatch(UploadOpened())

    if render_tx_status(state.tx, key="upload"):
        dispatch(TxCleared())
        st.rerun()
    render_callout(
        title="Before you submit",
        body="The effect size is stored as an encoded string. Anyone with store access can decode it.",
    )

    with st.form("upload_form", clear_on_submit=True):
        phenotype = st.text_input("Phenotype *", placeholder="e.g. Type 2 diabetes")
        description = st.text_area("Description", placeholder="Study description...")
        c1, c2 = st.columns(2)
        snp_count = c1.number_input("SNP count", min_value=0, step=1, value=0)
        effect_size = c2.number_input("Effect size", step=0.01, value=0.0, format="%.4f")
        submitted = st.form_submit_button("Submit securely", disabled=state.uploading)

    if submitted:
        dispatch(UploadStarted())
        form = UploadForm(
            phenotype=phenotype,
            description=description,
            snp_count=int(snp_count),
            effect_size=float(effect_size),
        )
        res = upload_record(get_repository(cfg, use_mock), signer, form)
        if res.message:
            dispatch(TxFinished(ok=res.ok, message=res.message))
        else:
            dispatch(UploadClosed())
        if res.ok:
            refresh(cfg, use_mock)
        st.rerun()
