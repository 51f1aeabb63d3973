# ui/steps/ad_group_step.py
from __future__ import annotations

import streamlit as st

from adcraft_app import wizard
from adcraft_app.models import CampaignState

from .session import commit

PREVIEW_KEYWORDS = 5


def render(state: CampaignState) -> None:
    col_title, col_back, col_next = st.columns([4, 1, 2])
    with col_title:
        st.markdown("### 🧱 Ad group structure")
        st.caption("Review how the AI has grouped your keywords.")
    with col_back:
        if st.button("Back"):
            commit(wizard.go_to_step(state, 2))
            st.rerun()
    with col_next:
        if st.button("Review assets", type="primary", disabled=not state.ad_groups):
            commit(wizard.go_to_step(state, 4))
            st.rerun()

    if not state.ad_groups:
        st.info("No ad groups yet. Go back to **Keywords** and generate them.")
        return

    grid_cols = st.columns(3)
    for idx, group in enumerate(state.ad_groups):
        with grid_cols[idx % 3]:
            with st.container(border=True):
                new_name = st.text_input(
                    "Ad group name",
                    value=group.name,
                    key=f"group_name_{group.id}",
                )
                if new_name != group.name:
                    commit(wizard.rename_ad_group(state, group.id, new_name))
                    st.rerun()

                st.caption(f"TARGET KEYWORDS ({len(group.keywords)})")
                pills = "".join(
                    f"<span class='adc-pill'>{k}</span>"
                    for k in group.keywords[:PREVIEW_KEYWORDS]
                )
                extra = len(group.keywords) - PREVIEW_KEYWORDS
                if extra > 0:
                    pills += f"<span class='adc-pill'>+{extra} more</span>"
                st.markdown(pills or "_No keywords assigned._", unsafe_allow_html=True)

                st.caption(
                    f"Includes {len(group.headlines)} headlines & "
                    f"{len(group.descriptions)} descriptions."
                )

                if st.button("🗑 Remove group", key=f"group_del_{group.id}"):
                    commit(wizard.remove_ad_group(state, group.id))
                    st.rerun()
