# ui/steps/export_step.py
from __future__ import annotations

import streamlit as st

from adcraft_app import wizard
from adcraft_app.csv_export import EXPORT_FILENAME, build_csv
from adcraft_app.export_package import build_export_zip, export_zip_filename
from adcraft_app.models import CampaignState

from .session import commit, notify, start_over


def render(state: CampaignState) -> None:
    st.markdown("## ✅ Campaign ready!")

    keyword_count = len(wizard.selected_keywords(state))
    st.write(
        f"Your Google Ads campaign for **{state.url or 'your website'}** has been "
        f"structured with **{len(state.ad_groups)}** ad groups and "
        f"**{keyword_count}** targeted keywords."
    )

    if st.button("Back to assets"):
        commit(wizard.go_to_step(state, 4))
        st.rerun()

    st.markdown("---")

    col_csv, col_zip = st.columns(2)

    with col_csv:
        with st.container(border=True):
            st.markdown("#### 📄 Google Ads Editor (CSV)")
            st.caption("A CSV file formatted for direct import into Google Ads Editor.")
            st.download_button(
                "⬇️ Download CSV",
                data=build_csv(state).encode("utf-8"),
                file_name=EXPORT_FILENAME,
                mime="text/csv",
                type="primary",
                on_click=notify,
                args=("success", "CSV exported successfully"),
            )

    with col_zip:
        with st.container(border=True):
            st.markdown("#### 📦 Client approval package")
            st.caption(
                "A ZIP with the CSV, a markdown summary of every asset for review, "
                "and the generated images."
            )
            if st.button("Build export ZIP"):
                with st.spinner("Building ZIP package..."):
                    zip_bytes = build_export_zip(state)

                st.download_button(
                    "⬇️ Download ZIP",
                    data=zip_bytes,
                    file_name=export_zip_filename(state),
                    mime="application/zip",
                )

    st.markdown("---")

    confirm = st.checkbox(
        "I understand all current progress will be lost",
        key="confirm_reset_export",
    )
    if st.button("↺ Start new campaign", disabled=not confirm):
        start_over()
        notify("success", "Started new campaign")
        st.rerun()
