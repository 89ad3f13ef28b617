from __future__ import annotations

import streamlit as st


def render_header(app_name: str, subtitle: str, right_pill: str) -> None:
    st.markdown(
        f"""
<div class="gwas-header">
  <div class="gwas-header-left">
    <div>
      <div class="gwas-title">{app_name}</div>
      <div class="gwas-subtitle">{subtitle}</div>
    </div>
  </div>
  <div class="pill"><span class="dot"></span>{right_pill}</div>
</div>
        """,
        unsafe_allow_html=True,
    )
