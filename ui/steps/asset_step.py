# ui/steps/asset_step.py
from __future__ import annotations

import html
import logging

import streamlit as st

from adcraft_app import wizard
from adcraft_app.image_gen import from_data_url, generate_ad_image
from adcraft_app.models import (
    ASSET_LIMIT,
    DESCRIPTION_LIMIT,
    HEADLINE_LIMIT,
    MAX_DESCRIPTIONS,
    MAX_EXTENSIONS,
    MAX_HEADLINES,
    AdGroup,
    CampaignState,
)
from adcraft_app.utils import char_count_label

from .session import commit, notify, processing

logger = logging.getLogger(__name__)

# (title, field, char limit, slots, placeholder)
SECTIONS = [
    ("Headlines (15)", "headlines", HEADLINE_LIMIT, MAX_HEADLINES, "Headline"),
    ("Descriptions (4)", "descriptions", DESCRIPTION_LIMIT, MAX_DESCRIPTIONS, "Description"),
    ("Sitelinks", "sitelinks", ASSET_LIMIT, MAX_EXTENSIONS, "Sitelink"),
    ("Callouts", "callouts", ASSET_LIMIT, MAX_EXTENSIONS, "Callout"),
    ("Structured snippets", "structured_snippets", ASSET_LIMIT, MAX_EXTENSIONS, "Snippet"),
]


def _render_section(
    state: CampaignState,
    group: AdGroup,
    title: str,
    field: str,
    limit: int,
    slots: int,
    placeholder: str,
) -> CampaignState:
    items = list(getattr(group, field))
    if len(items) < slots:
        items.extend([""] * (slots - len(items)))

    st.markdown(f"**{title}**")
    for idx, value in enumerate(items):
        col_input, col_count = st.columns([6, 1])
        with col_input:
            new_value = st.text_input(
                f"{placeholder} {idx + 1}",
                value=value,
                key=f"asset_{group.id}_{field}_{idx}",
                placeholder=f"{placeholder} {idx + 1}",
                label_visibility="collapsed",
            )
        with col_count:
            st.caption(char_count_label(new_value, limit))
        if new_value != value:
            state = commit(wizard.update_asset(state, group.id, field, idx, new_value))

    filled = [v for v in items if v]
    if filled:
        with st.expander(f"Copy {title.lower()}"):
            st.caption("All")
            st.code("\n".join(filled), language=None)
            st.caption("One at a time")
            for value in filled:
                st.code(value, language=None)
    return state


def _generate_image(state: CampaignState, group: AdGroup) -> None:
    try:
        with processing(state, f"Generating image for {group.name}...") as state:
            image = generate_ad_image(group, state.summary)
            state = wizard.end_processing(state)
            if image is not None:
                state = wizard.set_generated_image(state, group.id, image)
            commit(state)
    except Exception:
        logger.exception("Image generation failed for %s", group.name)
        notify("error", "Failed to generate image.")
        return

    if image is None:
        notify("error", "The image service returned no image.")
    else:
        notify("success", "Image generated")


def _render_preview(state: CampaignState, group: AdGroup) -> None:
    st.markdown("#### 📱 Ad preview")
    headlines = [h for h in group.headlines if h][:3] or ["Headline 1"]
    description = next((d for d in group.descriptions if d), "Description line...")
    callouts = " · ".join(c for c in group.callouts if c)
    snippets = ", ".join([s for s in group.structured_snippets if s][:4])
    sitelinks = " · ".join([s for s in group.sitelinks if s][:4])

    body = html.escape(description)
    if callouts:
        body += f"<br/>{html.escape(callouts)}"
    if snippets:
        body += f"<br/><em>Types: {html.escape(snippets)}</em>"

    st.markdown(
        f"""
        <div class="adc-ad-preview">
          <div class="adc-ad-url"><strong>Sponsored</strong> · {html.escape(state.url)}</div>
          <div class="adc-ad-headline">{html.escape(" | ".join(headlines))}</div>
          <div class="adc-ad-body">{body}</div>
          {f'<div class="adc-ad-sitelinks">{html.escape(sitelinks)}</div>' if sitelinks else ''}
        </div>
        """,
        unsafe_allow_html=True,
    )

    st.markdown("")
    if group.generated_image:
        st.image(from_data_url(group.generated_image), caption="Display ad image")
    else:
        st.caption("No image generated yet.")


def render(state: CampaignState) -> None:
    col_title, col_back, col_next = st.columns([4, 1, 2])
    with col_title:
        st.markdown("### ✍️ Ad assets")
        st.caption("Edit headlines, descriptions and extensions for each ad group.")
    with col_back:
        if st.button("Back", disabled=state.is_processing):
            commit(wizard.go_to_step(state, 3))
            st.rerun()
    with col_next:
        if st.button("Finish & export", type="primary", disabled=state.is_processing):
            commit(wizard.go_to_step(state, 5))
            st.rerun()

    if not state.ad_groups:
        st.info("No ad groups. Go back and generate them first.")
        return

    group_ids = [g.id for g in state.ad_groups]
    names = {g.id: g.name for g in state.ad_groups}
    active_id = st.session_state.get("active_group_id")
    if active_id not in group_ids:
        active_id = group_ids[0]

    col_list, col_editor, col_preview = st.columns([1, 2.2, 1.5])

    with col_list:
        st.markdown("#### Ad groups")
        active_id = st.radio(
            "Ad groups",
            options=group_ids,
            index=group_ids.index(active_id),
            format_func=lambda gid: names[gid],
            label_visibility="collapsed",
        )
        st.session_state["active_group_id"] = active_id

    group = wizard.find_ad_group(state, active_id)

    with col_editor:
        with st.container(border=True):
            for title, field, limit, slots, placeholder in SECTIONS:
                state = _render_section(state, group, title, field, limit, slots, placeholder)
                group = wizard.find_ad_group(state, active_id)

        label = "Regenerate image" if group.generated_image else "Generate AI image"
        if st.button(f"🖼 {label}", disabled=state.is_processing):
            _generate_image(state, group)
            st.rerun()

    with col_preview:
        _render_preview(state, group)
