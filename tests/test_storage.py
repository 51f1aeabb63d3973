"""
Tests for the persisted wizard state: load with shape back-fill,
save, and reset.
"""

import json

from adcraft_app.models import CampaignState
from adcraft_app.storage import AD_GROUP_LIST_FIELDS, load_state, reset_state, save_state


def _write(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")


# ============================================================================
# Loading
# ============================================================================

class TestLoadState:

    def test_missing_file_gives_defaults(self, state_file):
        assert load_state(state_file) == CampaignState()

    def test_old_ad_groups_get_empty_asset_lists(self, state_file):
        """Saves from before extensions existed only carry name + headlines."""
        _write(state_file, {
            "step": 4,
            "url": "https://example.com",
            "ad_groups": [
                {"id": "g1", "name": "Old group", "headlines": ["H1"]},
                {"id": "g2", "name": "Nulls", "callouts": None, "keywords": None},
            ],
        })

        state = load_state(state_file)

        assert [g.id for g in state.ad_groups] == ["g1", "g2"]
        old = state.ad_groups[0]
        assert old.headlines == ["H1"]
        for field in AD_GROUP_LIST_FIELDS:
            if field != "headlines":
                assert getattr(old, field) == []
        for field in AD_GROUP_LIST_FIELDS:
            assert getattr(state.ad_groups[1], field) == []

    def test_missing_top_level_lists_default_to_empty(self, state_file):
        _write(state_file, {"step": 2, "url": "https://example.com", "keywords": None})

        state = load_state(state_file)

        assert state.step == 2
        assert state.keywords == []
        assert state.ad_groups == []

    def test_processing_flag_is_cleared(self, state_file):
        _write(state_file, {"step": 1, "is_processing": True, "process_status": "Working"})

        state = load_state(state_file)

        assert state.is_processing is False
        assert state.process_status == ""

    def test_bad_nested_entries_are_dropped_individually(self, state_file):
        _write(state_file, {
            "step": 4,
            "url": "https://example.com",
            "keywords": [{"term": "ok"}, {"category": "Brand"}, "junk"],
            "ad_groups": [
                {"id": "g1", "name": "Keep me", "headlines": "not a list"},
                {"id": "g2", "name": "Mixed", "headlines": ["H1", 7, None]},
                {"id": 5, "name": {"bad": "name"}},
            ],
        })

        state = load_state(state_file)

        assert state.step == 4
        assert state.url == "https://example.com"
        assert [k.term for k in state.keywords] == ["ok"]
        assert [g.id for g in state.ad_groups] == ["g1", "g2"]
        assert state.ad_groups[0].headlines == []
        assert state.ad_groups[1].headlines == ["H1"]

    def test_bad_top_level_field_falls_back_alone(self, state_file):
        _write(state_file, {
            "step": "four",
            "url": "https://example.com",
            "extracted_info": "garbage",
            "ad_groups": [{"id": "g1", "name": "Survivor"}],
        })

        state = load_state(state_file)

        assert state.step == 1
        assert state.extracted_info is None
        assert state.url == "https://example.com"
        assert [g.name for g in state.ad_groups] == ["Survivor"]

    def test_corrupted_file_gives_defaults(self, state_file):
        state_file.parent.mkdir(parents=True)
        state_file.write_text("{not json", encoding="utf-8")

        assert load_state(state_file) == CampaignState()

    def test_non_object_file_gives_defaults(self, state_file):
        _write(state_file, ["a", "list"])

        assert load_state(state_file) == CampaignState()


# ============================================================================
# Save / reset
# ============================================================================

class TestSaveAndReset:

    def test_saved_state_loads_back_equal(self, campaign, state_file):
        save_state(campaign, state_file)

        assert load_state(state_file) == campaign

    def test_save_overwrites_whole_record(self, campaign, state_file):
        save_state(campaign, state_file)
        save_state(CampaignState(url="https://other.example"), state_file)

        data = json.loads(state_file.read_text(encoding="utf-8"))
        assert data["url"] == "https://other.example"
        assert data["ad_groups"] == []

    def test_reset_removes_file_and_returns_defaults(self, campaign, state_file):
        save_state(campaign, state_file)

        state = reset_state(state_file)

        assert state == CampaignState()
        assert not state_file.exists()
        assert load_state(state_file) == CampaignState()

    def test_reset_without_saved_state(self, state_file):
        assert reset_state(state_file) == CampaignState()
