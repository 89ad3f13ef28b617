from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import plotly.graph_objects as go
import streamlit as st

from config import THEME
from data.service import StatusCounts


@dataclass(frozen=True)
class Kpi:
    label: str
    value: str
    help: Optional[str] = None
    tone: str = ""  # "" | "processed" | "pending" | "error"


def render_kpi_row(kpis: list[Kpi]) -> None:
    cols = st.columns(len(kpis))
    for c, k in zip(cols, kpis):
        with c:
            badge = f'<div class="metric-delta">{status_badge(k.tone)}</div>' if k.tone else ""
            st.markdown(
                f"""
<div class="metric-card" title="{k.help or ''}">
  <div class="metric-label">{k.label}</div>
  <div class="metric-value">{k.value}</div>
  {badge}
</div>
                """,
                unsafe_allow_html=True,
            )


def create_plotly_theme() -> dict:
    """
    Shared Plotly styling: white card surface, DM Sans, soft grids.
    Status colors come from THEME so charts match the badges.
    """
    return {
        "font_family": "DM Sans, system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif",
        "font_color": THEME["text_primary"],
        "paper_bgcolor": THEME["bg_card"],
        "plot_bgcolor": THEME["bg_card"],
        "gridcolor": THEME["grid"],
        "axis_linecolor": THEME["border_color"],
        "legend": {
            "orientation": "h",
            "yanchor": "bottom",
            "y": 1.02,
            "xanchor": "left",
            "x": 0,
            "font": {"color": THEME["text_secondary"]},
        },
        "title_font": {"color": THEME["navy_900"], "size": 16},
    }


def apply_plotly_theme(fig: go.Figure, x_title: str, y_title: str) -> go.Figure:
    theme = create_plotly_theme()
    fig.update_layout(
        margin=dict(l=10, r=10, t=44, b=10),
        font=dict(family=theme["font_family"], color=theme["font_color"]),
        paper_bgcolor=theme["paper_bgcolor"],
        plot_bgcolor=theme["plot_bgcolor"],
        legend=theme["legend"],
        title_font=theme["title_font"],
    )
    for axis_update in (fig.update_xaxes, fig.update_yaxes):
        axis_update(
            gridcolor=theme["gridcolor"],
            zeroline=False,
            linecolor=theme["axis_linecolor"],
            tickfont=dict(color=THEME["text_secondary"]),
            title_font=dict(color=THEME["text_secondary"]),
        )
    fig.update_xaxes(title_text=x_title)
    fig.update_yaxes(title_text=y_title)
    return fig


def status_badge(status: str) -> str:
    return f'<span class="status-badge {status}">{status}</span>'


def status_bar_chart(counts: StatusCounts, title: str = "Dataset status") -> None:
    """Single stacked bar: processed / pending / error shares of all records."""
    shares = counts.shares()
    colors = {"processed": THEME["success"], "pending": THEME["warning"], "error": THEME["danger"]}
    raw = {"processed": counts.processed, "pending": counts.pending, "error": counts.error}

    fig = go.Figure()
    for status, pct in shares.items():
        fig.add_trace(
            go.Bar(
                y=["records"],
                x=[pct],
                name=f"{status.capitalize()}: {raw[status]}",
                orientation="h",
                marker_color=colors[status],
                hovertemplate=f"{status}: %{{x:.0f}}%<extra></extra>",
            )
        )
    fig.update_layout(barmode="stack", height=170, title=title)
    fig = apply_plotly_theme(fig, x_title="% of datasets", y_title="")
    fig.update_yaxes(showticklabels=False)
    fig.update_xaxes(range=[0, 100])
    st.plotly_chart(fig, use_container_width=True)
