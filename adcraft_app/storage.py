# adcraft_app/storage.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from config import settings

from .models import AdGroup, CampaignState, Keyword

logger = logging.getLogger(__name__)

# Array fields added to ad groups over time; older saves may lack them
AD_GROUP_LIST_FIELDS = (
    "keywords",
    "headlines",
    "descriptions",
    "callouts",
    "sitelinks",
    "structured_snippets",
)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def state_path(path: Optional[Path] = None) -> Path:
    """
    Path to the single JSON record holding the wizard state.

    Defaults to settings.STATE_PATH (ADCRAFT_STATE_PATH in .env).
    """
    return Path(path) if path is not None else settings.STATE_PATH


# ---------------------------------------------------------------------------
# Shape migration
# ---------------------------------------------------------------------------


def _valid_entries(entries: List[Any], model: Type[BaseModel], label: str) -> List[Dict[str, Any]]:
    """Keep the entries that validate on their own; log and drop the rest."""
    kept = []
    for idx, entry in enumerate(entries):
        try:
            model.model_validate(entry)
        except ValidationError as e:
            logger.warning("Dropping unreadable %s #%d from saved state: %s", label, idx, e)
            continue
        kept.append(entry)
    return kept


def _backfill(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fill in fields missing from older saved shapes.

    Absent or null list fields become empty lists, both at the top level
    and on every ad group entry. Nested entries are checked one at a time,
    so a single bad keyword or ad group is dropped instead of the whole
    campaign.
    """
    for key in ("keywords", "ad_groups"):
        if not isinstance(data.get(key), list):
            data[key] = []

    keywords = [k for k in data["keywords"] if isinstance(k, dict)]
    data["keywords"] = _valid_entries(keywords, Keyword, "keyword")

    groups = []
    for group in data["ad_groups"]:
        if not isinstance(group, dict):
            continue
        group = dict(group)
        for field in AD_GROUP_LIST_FIELDS:
            values = group.get(field)
            if not isinstance(values, list):
                values = []
            group[field] = [v for v in values if isinstance(v, str)]
        groups.append(group)
    data["ad_groups"] = _valid_entries(groups, AdGroup, "ad group")

    # No request can still be in flight after a restart
    data["is_processing"] = False
    data["process_status"] = ""
    return data


# ---------------------------------------------------------------------------
# Load / save / reset
# ---------------------------------------------------------------------------


def load_state(path: Optional[Path] = None) -> CampaignState:
    """
    Load the persisted wizard state.

    If the file doesn't exist yet, or is corrupted, start from defaults
    rather than crashing the app.
    """
    json_path = state_path(path)
    if not json_path.exists():
        return CampaignState()

    try:
        with json_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable state file %s: %s", json_path, e)
        return CampaignState()

    if not isinstance(data, dict):
        logger.warning("Ignoring state file %s: expected an object", json_path)
        return CampaignState()

    data = _backfill(data)
    try:
        return CampaignState.model_validate(data)
    except ValidationError as e:
        bad_fields = {err["loc"][0] for err in e.errors() if err["loc"]}
        logger.warning("Resetting invalid fields %s in %s: %s", sorted(bad_fields), json_path, e)

    for field in bad_fields:
        data.pop(field, None)
    try:
        return CampaignState.model_validate(data)
    except ValidationError as e:
        logger.warning("Ignoring invalid state file %s: %s", json_path, e)
        return CampaignState()


def save_state(state: CampaignState, path: Optional[Path] = None) -> Path:
    """Write the whole state record, replacing what was there."""
    json_path = state_path(path)
    json_path.parent.mkdir(parents=True, exist_ok=True)

    with json_path.open("w", encoding="utf-8") as f:
        json.dump(state.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
    return json_path


def reset_state(path: Optional[Path] = None) -> CampaignState:
    """Erase the persisted record and return fresh defaults."""
    json_path = state_path(path)
    if json_path.exists():
        json_path.unlink()
        logger.info("Removed saved state %s", json_path)
    return CampaignState()
