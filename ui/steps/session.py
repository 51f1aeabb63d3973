# ui/steps/session.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import streamlit as st

from adcraft_app import wizard
from adcraft_app.models import CampaignState
from adcraft_app.storage import load_state, reset_state, save_state

logger = logging.getLogger(__name__)

STATE_KEY = "campaign_state"


def get_state() -> CampaignState:
    """Current wizard state; loaded from disk once per browser session."""
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = load_state()
    return st.session_state[STATE_KEY]


def commit(state: CampaignState) -> CampaignState:
    """Replace the session state and persist it immediately."""
    st.session_state[STATE_KEY] = state
    save_state(state)
    return state


@contextmanager
def processing(state: CampaignState, status: str) -> Iterator[CampaignState]:
    """
    Hold the processing flag (and a spinner) for the duration of an AI call.

    The flag is cleared on the way out however the block ends, including
    Streamlit's own rerun/stop interrupts, which are BaseExceptions. A block
    that already committed a result with the flag cleared is left alone.
    """
    state = commit(wizard.begin_processing(state, status))
    try:
        with st.spinner(status):
            yield state
    finally:
        current = st.session_state.get(STATE_KEY)
        if current is not None and current.is_processing:
            commit(wizard.end_processing(current))


def start_over() -> CampaignState:
    state = reset_state()
    st.session_state[STATE_KEY] = state
    # Drop per-step widget state (editors, forms) along with the campaign
    for key in list(st.session_state.keys()):
        if key != STATE_KEY:
            del st.session_state[key]
    return state


def notify(kind: str, message: str) -> None:
    """Toast that survives the st.rerun() following most actions."""
    st.session_state.setdefault("_toasts", []).append((kind, message))


def flush_notifications() -> None:
    for kind, message in st.session_state.pop("_toasts", []):
        icon = "✅" if kind == "success" else "⚠️"
        st.toast(message, icon=icon)
