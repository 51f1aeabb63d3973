from __future__ import annotations

from dotenv import load_dotenv
load_dotenv()

import streamlit as st

from config.settings import configure_logging
from adcraft_app.models import STEPS
from adcraft_app import wizard

from steps import ad_group_step, asset_step, export_step, input_step, keyword_step
from steps.session import commit, flush_notifications, get_state, start_over, notify

configure_logging()


# ---------- Page config ----------

st.set_page_config(
    page_title="AdCraft AI",
    page_icon="🎯",
    layout="wide",
)


# ---------- Global Styles (simple CSS) ----------

st.markdown(
    """
    <style>
    .block-container {
        padding-top: 1.5rem;
        padding-bottom: 3rem;
        max-width: 1300px;
    }

    /* Top banner */
    .adc-hero-banner {
        background: linear-gradient(90deg, #312e81, #4338ca, #6366f1);
        border-radius: 18px;
        padding: 16px 22px;
        margin-bottom: 14px;
        color: white;
        display: flex;
        align-items: center;
        gap: 14px;
    }
    .adc-hero-icon {
        font-size: 1.9rem;
    }
    .adc-hero-title {
        font-size: 1.4rem;
        font-weight: 600;
        margin: 0;
    }
    .adc-hero-subtitle {
        font-size: 0.9rem;
        margin: 2px 0 0 0;
        opacity: 0.85;
    }

    /* Small tag/pill */
    .adc-pill {
        display: inline-flex;
        align-items: center;
        padding: 2px 9px;
        border-radius: 999px;
        font-size: 0.75rem;
        border: 1px solid #e5e7eb;
        background: #f9fafb;
        color: #4b5563;
        margin-right: 6px;
        margin-bottom: 4px;
    }
    .adc-pill.brand { background: #f3e8ff; color: #6b21a8; }
    .adc-pill.competitor { background: #fee2e2; color: #991b1b; }
    .adc-pill.generic { background: #dcfce7; color: #166534; }

    /* Mock search ad preview */
    .adc-ad-preview {
        border: 1px solid #e5e7eb;
        border-radius: 10px;
        padding: 12px 14px;
        background: #ffffff;
        font-family: arial, sans-serif;
    }
    .adc-ad-url { font-size: 0.8rem; color: #202124; }
    .adc-ad-headline { font-size: 1.1rem; color: #1a0dab; margin: 2px 0 4px 0; }
    .adc-ad-body { font-size: 0.85rem; color: #4d5156; }
    .adc-ad-sitelinks { font-size: 0.85rem; color: #1a0dab; margin-top: 6px; }
    </style>
    """,
    unsafe_allow_html=True,
)


# ---------- Top banner ----------

st.markdown(
    """
    <div class="adc-hero-banner">
      <div class="adc-hero-icon">🎯</div>
      <div>
        <p class="adc-hero-title">AdCraft AI</p>
        <p class="adc-hero-subtitle">
          From website to a Google Ads Editor import: keywords, ad groups,
          responsive search ads and extensions.
        </p>
      </div>
    </div>
    """,
    unsafe_allow_html=True,
)


# ---------- Sidebar: start over ----------

state = get_state()

with st.sidebar:
    st.title("⚙️ Campaign")
    if state.url:
        st.caption(f"Website: `{state.url}`")
    if state.location:
        st.caption(f"Location: {state.location}")

    if state.step > 1:
        confirm = st.checkbox(
            "I understand all current progress will be lost",
            key="confirm_reset",
        )
        if st.button("Start new campaign", disabled=not confirm, use_container_width=True):
            start_over()
            notify("success", "Started new campaign")
            st.rerun()

    st.markdown("---")
    st.caption("Progress is saved automatically after every change.")


# ---------- Step indicator ----------

step_cols = st.columns(len(STEPS))
for idx, (col, label) in enumerate(zip(step_cols, STEPS), start=1):
    with col:
        if idx < state.step:
            text = f"✓ {idx}. {label}"
        elif idx == state.step:
            text = f"● {idx}. {label}"
        else:
            text = f"{idx}. {label}"
        if st.button(
            text,
            key=f"step_nav_{idx}",
            type="primary" if idx == state.step else "secondary",
            disabled=state.is_processing,
            use_container_width=True,
        ):
            commit(wizard.go_to_step(state, idx))
            st.rerun()

st.markdown("")

flush_notifications()


# ---------- Processing banner ----------

if state.is_processing:
    st.info(f"⏳ {state.process_status or 'Working...'}")


# ---------- Current step ----------

RENDERERS = {
    1: input_step.render,
    2: keyword_step.render,
    3: ad_group_step.render,
    4: asset_step.render,
    5: export_step.render,
}

RENDERERS.get(state.step, input_step.render)(state)
