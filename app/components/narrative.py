from __future__ import annotations

import streamlit as st

from state import TxStatus


def render_tab_intro(persona: str, question: str, context: str | None = None) -> None:
    """
    Top-of-page framing: who the page is for, what it answers, optional context.
    """
    st.markdown(
        f"""
<div class="tab-intro">
  <div class="tab-intro-persona">{persona}</div>
  <div class="tab-intro-question">{question}</div>
  {f'<div class="tab-intro-context">{context}</div>' if context else ''}
</div>
        """,
        unsafe_allow_html=True,
    )


def render_callout(title: str, body: str, kind: str = "annot") -> None:
    st.markdown(
        f"""
<div class="callout callout-{kind}">
  <div class="callout-title">{title}</div>
  <div class="callout-body">{body}</div>
</div>
        """,
        unsafe_allow_html=True,
    )


def render_tx_status(tx: TxStatus, key: str) -> bool:
    """Show the last transaction message. Returns True when dismissed."""
    if not tx.visible:
        return False
    if tx.status == "success":
        st.success(tx.message, icon="✅")
    elif tx.status == "error":
        st.error(tx.message, icon="❌")
    else:
        st.info(tx.message, icon="⏳")
    return st.button("Dismiss", key=f"dismiss_{key}")
