from __future__ import annotations

import streamlit as st

from components.narrative import render_callout, render_tab_intro
from components.session import dispatch, view_state
from config import AppConfig
from state import TutorialToggled


TUTORIAL_STEPS = [
    ("🔗 Connect an institution", "Each upload is owned by the address that signs it.", None),
    (
        "🔒 Upload encoded data",
        "The effect size is encoded client-side before it is written to the key/value contract.",
        "The encoding is a reversible placeholder, not encryption.",
    ),
    (
        "🧬 Process",
        "The owner runs the stand-in association statistic on the stored value.",
        "Only the owning institution can move a dataset from pending to processed.",
    ),
    ("📊 Reveal results", "Sign a request with the owner's key to display the decoded value.", None),
]

FLOW = ["🧬 Raw genomic data", "🔒 Placeholder encoding", "⚙️ GWAS stand-in", "📊 Results"]


def render(cfg: AppConfig, use_mock: bool) -> None:
    render_tab_intro(
        persona="Persona: Consortium analyst at a member institution",
        question="How do member institutions share GWAS summary data through one key/value contract?",
        context="Use GWAS Datasets to browse, process and reveal records, and Upload Data to add one.",
    )

    st.markdown(
        """
<div class="hero">
  <div class="hero-title">FHE-style Genome-Wide Association Studies</div>
  <p class="hero-narrative">
    Multi-institution GWAS records stored as JSON documents on a generic key/value contract.<br/>
    Records are owned by the uploading address; only the owner can process or reveal them.
  </p>
</div>
        """,
        unsafe_allow_html=True,
    )

    render_callout(
        title="Not real encryption",
        body="Values are base64 text behind an <code>FHE-</code> tag and can be read back by anyone. "
        "Processing decodes the value before computing <code>exp(-0.1·x)</code>. No privacy property holds.",
        kind="action",
    )

    state = view_state()
    if st.button("Hide tutorial" if state.show_tutorial else "Show how it works"):
        state = dispatch(TutorialToggled())

    if state.show_tutorial:
        st.markdown('<div class="section-title">How it works</div>', unsafe_allow_html=True)
        cols = st.columns(len(TUTORIAL_STEPS))
        for col, (title, body, details) in zip(cols, TUTORIAL_STEPS):
            with col:
                extra = f"<br/><em>{details}</em>" if details else ""
                st.markdown(
                    f"""
<div class="how-step">
  <div class="how-step-title">{title}</div>
  <div class="how-step-body">{body}{extra}</div>
</div>
                    """,
                    unsafe_allow_html=True,
                )
        steps = '<div class="flow-arrow">→</div>'.join(f'<div class="flow-step">{s}</div>' for s in FLOW)
        st.markdown(f'<div class="flow">{steps}</div>', unsafe_allow_html=True)

    st.markdown('<div class="section-title">Connection status</div>', unsafe_allow_html=True)
    s1, s2, s3 = st.columns([1, 1, 2])
    with s1:
        st.markdown("**Data mode**")
        st.write("Mock (seeded in-memory store)" if use_mock else "Configured store")
    with s2:
        st.markdown("**Store backend**")
        st.code(cfg.store_label, language="text")
    with s3:
        st.markdown("**Contract**")
        st.code(f"{cfg.contract_address or 'unset'} (chain {cfg.chain_id})", language="text")

    if cfg.store_backend == "http" and not cfg.store_url:
        st.info("The http backend needs `STORE_URL`. Mock mode always works.")
