# ui/steps/keyword_step.py
from __future__ import annotations

import logging

import streamlit as st

from adcraft_app import wizard
from adcraft_app.models import KEYWORD_TYPES, CampaignState
from adcraft_app.text_gen import analyze_site, structure_ad_groups

from .session import commit, notify, processing

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


def _refine(state: CampaignState, location: str, currency: str) -> None:
    try:
        with processing(state, "Refining targeting & updating metrics...") as state:
            analysis = analyze_site(state.url, location, currency_override=currency)
            commit(wizard.apply_refined_targeting(state, location, analysis))
    except Exception:
        logger.exception("Targeting refresh failed")
        notify("error", "Failed to update targeting")
        return

    notify("success", "Targeting updated successfully")


def _generate_groups(state: CampaignState) -> None:
    """Step 2 -> 3."""
    try:
        with processing(state, "Structuring ad groups...") as state:
            groups = structure_ad_groups(state.keywords, state.summary)
            commit(wizard.apply_ad_groups(state, groups))
    except Exception:
        logger.exception("Ad group generation failed")
        notify("error", "Failed to generate groups. Please try again.")
        return

    notify("success", f"Created {len(groups)} ad groups")


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def _render_targeting(state: CampaignState) -> None:
    with st.container(border=True):
        if not st.session_state.get("editing_target"):
            col_loc, col_cur, col_btn = st.columns([2, 2, 1])
            with col_loc:
                st.caption("TARGET LOCATION")
                st.markdown(f"📍 **{state.location}**")
            with col_cur:
                st.caption("CURRENCY")
                st.markdown(f"💱 **{state.currency} ({state.currency_symbol})**")
            with col_btn:
                if st.button("Change settings", disabled=state.is_processing):
                    st.session_state["editing_target"] = True
                    st.rerun()
            return

        with st.form("refine_form"):
            col_loc, col_cur = st.columns([3, 1])
            with col_loc:
                location = st.text_input(
                    "Target location", value=state.location, placeholder="e.g. London, UK"
                )
            with col_cur:
                currency = st.text_input(
                    "Currency (code)", value=state.currency, placeholder="e.g. USD, GBP"
                )
            col_submit, col_cancel, _ = st.columns([1, 1, 3])
            with col_submit:
                submitted = st.form_submit_button("Update & refresh", type="primary")
            with col_cancel:
                cancelled = st.form_submit_button("Cancel")

        if cancelled:
            st.session_state["editing_target"] = False
            st.rerun()
        if submitted:
            if not location.strip() or not currency.strip():
                st.error("Location and currency are both required.")
                return
            st.session_state["editing_target"] = False
            _refine(state, location.strip(), currency.strip().upper())
            st.rerun()


def _render_add_form(state: CampaignState) -> None:
    with st.form("add_keyword_form", clear_on_submit=True):
        col_term, col_type, col_btn = st.columns([4, 2, 1])
        with col_term:
            term = st.text_input(
                "Add manual keyword",
                placeholder="Add manual keyword...",
                label_visibility="collapsed",
            )
        with col_type:
            category = st.selectbox(
                "Type",
                options=list(KEYWORD_TYPES),
                index=list(KEYWORD_TYPES).index("Generic"),
                label_visibility="collapsed",
            )
        with col_btn:
            added = st.form_submit_button("➕ Add", use_container_width=True)

    if added and term.strip():
        try:
            commit(wizard.add_keyword(state, term, category))
        except ValueError as e:
            st.error(str(e))
            return
        notify("success", "Keyword added")
        st.rerun()


def _render_keyword_table(state: CampaignState) -> None:
    header = st.columns([0.7, 4, 1.5, 1.2, 1.2, 1.2, 0.7])
    for col, label in zip(header, ["", "Keyword", "Type", "Vol", "CPC", "Comp", ""]):
        col.caption(label.upper())

    for kw in state.keywords:
        cols = st.columns([0.7, 4, 1.5, 1.2, 1.2, 1.2, 0.7])
        with cols[0]:
            checked = st.checkbox(
                "Select",
                value=kw.selected,
                key=f"kw_sel_{kw.term}_{kw.selected}",
                label_visibility="collapsed",
            )
            if checked != kw.selected:
                commit(wizard.toggle_keyword(state, kw.term))
                st.rerun()
        cols[1].markdown(f"**{kw.term}**")
        cols[2].markdown(
            f"<span class='adc-pill {kw.category.lower()}'>{kw.category}</span>",
            unsafe_allow_html=True,
        )
        cols[3].write(f"{kw.volume:,}")
        cols[4].write(f"{state.currency_symbol}{kw.cpc:.2f}")
        cols[5].progress(kw.competition / 100, text=str(kw.competition))
        with cols[6]:
            if st.button("🗑", key=f"kw_del_{kw.term}", help="Remove keyword"):
                commit(wizard.remove_keyword(state, kw.term))
                st.rerun()


def _render_chart(state: CampaignState) -> None:
    st.markdown("#### Competition vs Volume")
    if not state.keywords:
        st.caption("No keywords to plot yet.")
        return
    st.scatter_chart(
        {
            "Competition": [k.competition for k in state.keywords],
            "Volume": [k.volume for k in state.keywords],
        },
        x="Competition",
        y="Volume",
        height=420,
    )
    st.info(
        "**Insight:** look for keywords in the top-left quadrant "
        "(high volume, low competition) for quick wins."
    )


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def render(state: CampaignState) -> None:
    selected_count = len(wizard.selected_keywords(state))

    col_title, col_back, col_next = st.columns([4, 1, 2])
    with col_title:
        st.markdown("### 🔑 Keyword research")
        st.caption("Select keywords to build your ad groups. Metrics are AI estimates.")
    with col_back:
        if st.button("Back", disabled=state.is_processing):
            commit(wizard.go_to_step(state, 1))
            st.rerun()
    with col_next:
        if st.button(
            f"Generate ad groups ({selected_count})",
            type="primary",
            disabled=selected_count == 0 or state.is_processing,
        ):
            _generate_groups(state)
            st.rerun()

    _render_targeting(state)

    col_table, col_chart = st.columns([2, 1])
    with col_table:
        _render_add_form(state)
        _render_keyword_table(state)
    with col_chart:
        _render_chart(state)
