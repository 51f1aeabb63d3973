# adcraft_app/wizard.py
"""
State transitions for the campaign wizard.

Every function takes a CampaignState and returns a new one; the input is
never mutated, so the UI can compare, persist, and re-render predictably.
"""
from __future__ import annotations

from typing import Iterable, List

from .models import (
    ASSET_FIELDS,
    STEPS,
    AdGroup,
    CampaignState,
    Keyword,
    KeywordType,
    SiteAnalysis,
)


def default_state() -> CampaignState:
    return CampaignState()


def go_to_step(state: CampaignState, step: int) -> CampaignState:
    step = max(1, min(len(STEPS), int(step)))
    return state.model_copy(update={"step": step})


# ---------------------------------------------------------------------------
# Processing flag
# ---------------------------------------------------------------------------


def begin_processing(state: CampaignState, status: str) -> CampaignState:
    return state.model_copy(update={"is_processing": True, "process_status": status})


def end_processing(state: CampaignState) -> CampaignState:
    return state.model_copy(update={"is_processing": False, "process_status": ""})


# ---------------------------------------------------------------------------
# Site analysis results
# ---------------------------------------------------------------------------


def _unique_selected(keywords: Iterable[Keyword]) -> List[Keyword]:
    """Fresh copies of keywords, all selected, first occurrence of a term wins."""
    seen = set()
    result: List[Keyword] = []
    for kw in keywords:
        key = kw.term.strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(kw.model_copy(update={"selected": True}))
    return result


def apply_site_analysis(state: CampaignState, analysis: SiteAnalysis) -> CampaignState:
    """Setup -> Keywords."""
    return state.model_copy(
        update={
            "step": 2,
            "is_processing": False,
            "process_status": "",
            "extracted_info": analysis.info(),
            "keywords": _unique_selected(analysis.keywords),
        }
    )


def apply_refined_targeting(
    state: CampaignState,
    location: str,
    analysis: SiteAnalysis,
) -> CampaignState:
    """Re-analysis with a new location / currency; stays on the current step."""
    return state.model_copy(
        update={
            "location": location,
            "is_processing": False,
            "process_status": "",
            "extracted_info": analysis.info(),
            "keywords": _unique_selected(analysis.keywords),
        }
    )


def apply_ad_groups(state: CampaignState, groups: List[AdGroup]) -> CampaignState:
    """Keywords -> Ad Groups."""
    return state.model_copy(
        update={
            "step": 3,
            "is_processing": False,
            "process_status": "",
            "ad_groups": list(groups),
        }
    )


# ---------------------------------------------------------------------------
# Keywords
# ---------------------------------------------------------------------------


def selected_keywords(state: CampaignState) -> List[Keyword]:
    return [k for k in state.keywords if k.selected]


def toggle_keyword(state: CampaignState, term: str) -> CampaignState:
    keywords = [
        k.model_copy(update={"selected": not k.selected}) if k.term == term else k
        for k in state.keywords
    ]
    return state.model_copy(update={"keywords": keywords})


def add_keyword(state: CampaignState, term: str, category: KeywordType) -> CampaignState:
    """
    Prepend a manually entered keyword.

    Manual keywords carry no estimates: full relevance, zero volume,
    competition and CPC, selected by default.
    """
    term = (term or "").strip()
    if not term:
        raise ValueError("Keyword cannot be empty.")
    if any(k.term.lower() == term.lower() for k in state.keywords):
        raise ValueError(f"Keyword '{term}' is already in the list.")

    new_kw = Keyword(
        term=term,
        category=category,
        volume=0,
        competition=0,
        relevance=100,
        cpc=0.0,
        selected=True,
    )
    return state.model_copy(update={"keywords": [new_kw, *state.keywords]})


def remove_keyword(state: CampaignState, term: str) -> CampaignState:
    return state.model_copy(
        update={"keywords": [k for k in state.keywords if k.term != term]}
    )


# ---------------------------------------------------------------------------
# Ad groups
# ---------------------------------------------------------------------------


def _replace_group(state: CampaignState, group_id: str, **changes) -> CampaignState:
    groups = [
        g.model_copy(update=changes) if g.id == group_id else g
        for g in state.ad_groups
    ]
    return state.model_copy(update={"ad_groups": groups})


def find_ad_group(state: CampaignState, group_id: str) -> AdGroup | None:
    for g in state.ad_groups:
        if g.id == group_id:
            return g
    return None


def rename_ad_group(state: CampaignState, group_id: str, name: str) -> CampaignState:
    return _replace_group(state, group_id, name=name)


def remove_ad_group(state: CampaignState, group_id: str) -> CampaignState:
    return state.model_copy(
        update={"ad_groups": [g for g in state.ad_groups if g.id != group_id]}
    )


def update_asset(
    state: CampaignState,
    group_id: str,
    field: str,
    index: int,
    value: str,
) -> CampaignState:
    """Set one headline / description / extension slot, padding with blanks."""
    if field not in ASSET_FIELDS:
        raise ValueError(f"Unknown asset field '{field}'.")
    if index < 0:
        raise ValueError("Asset index must be non-negative.")

    group = find_ad_group(state, group_id)
    if group is None:
        return state

    items = list(getattr(group, field))
    if len(items) <= index:
        items.extend([""] * (index + 1 - len(items)))
    items[index] = value
    return _replace_group(state, group_id, **{field: items})


def set_generated_image(state: CampaignState, group_id: str, image: str | None) -> CampaignState:
    return _replace_group(state, group_id, generated_image=image)
