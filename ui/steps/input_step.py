# ui/steps/input_step.py
from __future__ import annotations

import logging

import streamlit as st

from adcraft_app import wizard
from adcraft_app.models import CampaignState
from adcraft_app.scraper import normalize_url
from adcraft_app.text_gen import analyze_site

from .session import commit, notify, processing

logger = logging.getLogger(__name__)


def _analyze(state: CampaignState) -> None:
    """Step 1 -> 2: analyze the site and research keywords."""
    try:
        with processing(state, "Analyzing website & gathering currency data...") as state:
            analysis = analyze_site(state.url, state.location)
            commit(wizard.apply_site_analysis(state, analysis))
    except Exception:
        logger.exception("Site analysis failed for %s", state.url)
        notify("error", "Failed to analyze website. Please check the URL or API key.")
        return

    notify("success", f"Found {len(analysis.keywords)} keyword ideas")


def render(state: CampaignState) -> None:
    st.markdown("### 🌐 Start with your website")
    st.caption(
        "We'll read the page, summarise the business and propose keywords "
        "with estimated volume, competition and CPC for your location."
    )

    with st.form("setup_form"):
        url = st.text_input(
            "Website URL",
            value=state.url,
            placeholder="https://example.com",
        )
        location = st.text_input(
            "Target location",
            value=state.location,
            placeholder="e.g. New York, NY or United States",
        )
        submitted = st.form_submit_button(
            "Analyze website 🚀",
            type="primary",
            disabled=state.is_processing,
        )

    if not submitted:
        return

    if not url.strip() or not location.strip():
        st.error("Please provide both a **website URL** and a **target location**.")
        return

    state = commit(
        state.model_copy(update={"url": normalize_url(url), "location": location.strip()})
    )
    _analyze(state)
    st.rerun()
