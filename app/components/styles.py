from __future__ import annotations

import streamlit as st

from config import THEME


APP_TITLE = "FHEN011 Private GWAS (Demo)"

_FONT = '"DM Sans", system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif'


def _css() -> str:
    t = THEME
    return f"""
<style>
@import url('https://fonts.googleapis.com/css2?family=DM+Sans:wght@400;500;600;700&display=swap');

:root{{
  --accent: {t['accent_primary']};
  --accent-hover: {t['accent_secondary']};
  --ink: {t['navy_900']};
  --ink-soft: {t['navy_800']};
  --page: {t['bg_primary']};
  --surface: {t['bg_secondary']};
  --card: {t['bg_card']};
  --line: {t['border_color']};
  --text: {t['text_primary']};
  --muted: {t['text_secondary']};
  --shadow: {t['shadow']};
  --radius: {int(t['radius_px'])}px;
}}

#MainMenu, header, footer {{ visibility: hidden; }}
.block-container{{ padding-top: 0.75rem !important; padding-bottom: 2rem !important; }}

html, body, [data-testid="stAppViewContainer"], [data-testid="stSidebar"] *{{
  font-family: {_FONT} !important;
}}
html, body, [data-testid="stAppViewContainer"]{{
  background: var(--page) !important;
  color: var(--text) !important;
}}
[data-testid="stSidebar"]{{
  background: var(--surface) !important;
  border-right: 1px solid var(--line) !important;
}}
[data-testid="stSidebar"] div[role="radiogroup"] > label{{
  background: var(--card) !important;
  border: 1px solid var(--line) !important;
  border-radius: 12px !important;
  padding: 10px 12px !important;
  margin: 0 0 10px 0 !important;
}}
[data-testid="stSidebar"] div[role="radiogroup"] > label:has(input:checked){{
  border-color: var(--accent) !important;
}}

/* Shared card surface */
.gwas-header, .hero, .how-step, .metric-card, .tab-intro, .callout, details,
div[data-testid="stPlotlyChart"]{{
  background: var(--card);
  border: 1px solid var(--line);
  border-radius: var(--radius);
  box-shadow: var(--shadow);
  padding: 12px 14px;
}}

.gwas-header{{ display:flex; align-items:center; justify-content:space-between; margin-bottom: 14px; }}
.gwas-title{{ font-size: 20px; font-weight: 700; color: var(--ink); }}
.gwas-subtitle{{ font-size: 14px; color: var(--muted); }}
.pill{{
  display:inline-flex; align-items:center; gap:6px;
  border: 1px solid var(--line); border-radius: 999px;
  padding: 6px 10px; font-size: 13px; font-weight: 600; color: var(--ink-soft);
}}
.pill .dot{{ width:8px; height:8px; border-radius:999px; background: var(--accent); }}

.hero{{ padding: 18px; margin-bottom: 14px; }}
.hero-title{{ font-size: 34px; font-weight: 700; color: var(--ink); margin-bottom: 6px; }}
.hero-narrative{{ font-size: 16px; color: var(--muted); line-height: 1.5; margin: 0; }}
.section-title{{ font-size: 22px; font-weight: 600; color: var(--ink); margin: 14px 0 10px 0; }}
.how-step-title{{ font-size: 16px; font-weight: 600; color: var(--ink); margin-bottom: 6px; }}
.how-step-body, .tab-intro-context, .callout-body{{ font-size: 14px; color: var(--muted); line-height: 1.5; }}

.metric-label{{ font-size: 14px; font-weight: 500; color: var(--muted); margin-bottom: 6px; }}
.metric-value{{ font-size: 24px; font-weight: 700; color: var(--text); }}
.metric-delta{{ margin-top: 6px; }}

.tab-intro{{ margin-bottom: 14px; }}
.tab-intro-persona{{ font-size: 14px; font-weight: 600; color: var(--ink-soft); margin-bottom: 6px; }}
.tab-intro-question{{ font-size: 18px; font-weight: 700; color: var(--ink); margin-bottom: 6px; }}

.callout{{ margin: 10px 0; }}
.callout-title{{ font-size: 14px; font-weight: 700; color: var(--ink); margin-bottom: 6px; }}
.callout-annot{{ border-left: 4px solid var(--ink-soft); }}
.callout-action{{ border-left: 4px solid var(--accent); }}

div.stButton > button, div.stFormSubmitButton > button{{
  border-radius: 10px !important;
  font-weight: 600 !important;
  background: var(--accent) !important;
  color: white !important;
}}
div.stButton > button:hover, div.stFormSubmitButton > button:hover{{ background: var(--accent-hover) !important; }}

.subtle{{ color: var(--muted); font-size: 13px; }}

.status-badge{{
  display:inline-block; border-radius: 999px; padding: 2px 10px;
  font-size: 12px; font-weight: 700; color: white;
}}
.status-badge.processed{{ background: {t['success']}; }}
.status-badge.pending{{ background: {t['warning']}; }}
.status-badge.error{{ background: {t['danger']}; }}

.flow{{ display:flex; align-items:center; gap: 8px; margin: 10px 0; }}
.flow-step{{
  flex: 1; text-align:center; background: var(--card);
  border: 1px solid var(--line); border-radius: var(--radius);
  padding: 10px; font-weight: 600; color: var(--ink-soft);
}}
.flow-arrow{{ color: var(--muted); font-weight: 700; }}
</style>
"""


def apply_theme() -> None:
    st.set_page_config(
        page_title=APP_TITLE,
        page_icon="🧬",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    st.markdown(_css(), unsafe_allow_html=True)
