from __future__ import annotations

import streamlit as st

from config import AppConfig
from data.service import RecordsResult, get_records
from state import RecordsLoaded, RefreshStarted, ViewState, reduce


_KEY = "view_state"


def view_state() -> ViewState:
    if _KEY not in st.session_state:
        st.session_state[_KEY] = ViewState()
    return st.session_state[_KEY]


def dispatch(action: object) -> ViewState:
    st.session_state[_KEY] = reduce(view_state(), action)
    return st.session_state[_KEY]


def refresh(cfg: AppConfig, use_mock: bool) -> RecordsResult:
    dispatch(RefreshStarted())
    res = get_records(cfg, use_mock)
    dispatch(RecordsLoaded(tuple(res.records)))
    return res
