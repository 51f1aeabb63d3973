"""
Tests for wizard state transitions. Every transition must leave the
input state untouched.
"""

import pytest

from adcraft_app import wizard
from adcraft_app.models import AdGroup, Keyword, SiteAnalysis


# ============================================================================
# Keywords
# ============================================================================

class TestToggleKeyword:

    def test_flips_only_that_keyword(self, campaign):
        before = [k.model_dump() for k in campaign.keywords]

        state = wizard.toggle_keyword(campaign, "boiler repair")

        after = [k.model_dump() for k in state.keywords]
        assert [k["term"] for k in after] == [k["term"] for k in before]
        for old, new in zip(before, after):
            if old["term"] == "boiler repair":
                assert new["selected"] is True
                assert {**new, "selected": False} == old
            else:
                assert new == old

    def test_does_not_mutate_input(self, campaign):
        wizard.toggle_keyword(campaign, "acme plumbing")

        assert campaign.keywords[0].selected is True

    def test_unknown_term_is_noop(self, campaign):
        state = wizard.toggle_keyword(campaign, "nope")

        assert state.keywords == campaign.keywords


class TestAddKeyword:

    def test_prepends_manual_keyword(self, campaign):
        state = wizard.add_keyword(campaign, "  drain unblocking ", "Competitor")

        new = state.keywords[0]
        assert new.term == "drain unblocking"
        assert new.category == "Competitor"
        assert new.relevance == 100
        assert new.volume == 0
        assert new.competition == 0
        assert new.cpc == 0
        assert new.selected is True
        assert state.keywords[1:] == campaign.keywords
        assert len(campaign.keywords) == 4

    def test_rejects_empty_term(self, campaign):
        with pytest.raises(ValueError):
            wizard.add_keyword(campaign, "   ", "Generic")

    def test_rejects_duplicate_term(self, campaign):
        with pytest.raises(ValueError):
            wizard.add_keyword(campaign, "Emergency Plumber", "Generic")


class TestRemoveKeyword:

    def test_removes_by_term(self, campaign):
        state = wizard.remove_keyword(campaign, "boiler repair")

        assert [k.term for k in state.keywords] == [
            "acme plumbing", "emergency plumber", "rival plumbing",
        ]
        assert len(campaign.keywords) == 4

    def test_selected_keywords(self, campaign):
        terms = [k.term for k in wizard.selected_keywords(campaign)]

        assert terms == ["acme plumbing", "emergency plumber", "rival plumbing"]


# ============================================================================
# Analysis / processing
# ============================================================================

class TestAnalysisTransitions:

    def _analysis(self):
        return SiteAnalysis(
            title="Acme",
            summary="Plumbing",
            currency="USD",
            currency_symbol="$",
            keywords=[
                Keyword(term="plumber", selected=False),
                Keyword(term="Plumber"),
                Keyword(term="drain repair"),
            ],
        )

    def test_apply_site_analysis_moves_to_keywords_step(self):
        state = wizard.begin_processing(wizard.default_state(), "Analyzing...")

        state = wizard.apply_site_analysis(state, self._analysis())

        assert state.step == 2
        assert state.is_processing is False
        assert state.extracted_info.currency == "USD"
        assert state.currency_symbol == "$"
        assert [k.term for k in state.keywords] == ["plumber", "drain repair"]
        assert all(k.selected for k in state.keywords)

    def test_refined_targeting_keeps_step_and_updates_location(self, campaign):
        state = wizard.go_to_step(campaign, 2)

        state = wizard.apply_refined_targeting(state, "Austin, TX", self._analysis())

        assert state.step == 2
        assert state.location == "Austin, TX"
        assert state.currency == "USD"
        assert len(state.keywords) == 2

    def test_begin_and_end_processing(self, campaign):
        busy = wizard.begin_processing(campaign, "Structuring ad groups...")
        assert busy.is_processing is True
        assert busy.process_status == "Structuring ad groups..."

        idle = wizard.end_processing(busy)
        assert idle.is_processing is False
        assert idle.process_status == ""
        assert campaign.is_processing is False

    def test_apply_ad_groups(self, campaign):
        groups = [AdGroup(name="New")]

        state = wizard.apply_ad_groups(wizard.begin_processing(campaign, "x"), groups)

        assert state.step == 3
        assert state.is_processing is False
        assert [g.name for g in state.ad_groups] == ["New"]

    @pytest.mark.parametrize("requested,expected", [(0, 1), (3, 3), (9, 5)])
    def test_go_to_step_clamps(self, campaign, requested, expected):
        assert wizard.go_to_step(campaign, requested).step == expected


# ============================================================================
# Ad groups
# ============================================================================

class TestAdGroupEdits:

    def test_rename(self, campaign):
        state = wizard.rename_ad_group(campaign, "group-brand", "Brand - Core")

        assert state.ad_groups[0].name == "Brand - Core"
        assert campaign.ad_groups[0].name == "Brand - Acme"

    def test_remove(self, campaign):
        state = wizard.remove_ad_group(campaign, "group-brand")

        assert [g.id for g in state.ad_groups] == ["group-generic"]

    def test_update_asset_replaces_slot(self, campaign):
        state = wizard.update_asset(campaign, "group-brand", "headlines", 1, "Trusted Plumbers")

        assert state.ad_groups[0].headlines == ["Acme Plumbing", "Trusted Plumbers", "Call Acme Today"]
        assert campaign.ad_groups[0].headlines[1] == "Local Plumbers"

    def test_update_asset_pads_with_blanks(self, campaign):
        state = wizard.update_asset(campaign, "group-brand", "callouts", 3, "Fixed Prices")

        assert state.ad_groups[0].callouts == ["24/7 Service", "No Call-Out Fee", "", "Fixed Prices"]

    def test_update_asset_rejects_unknown_field(self, campaign):
        with pytest.raises(ValueError):
            wizard.update_asset(campaign, "group-brand", "keywords", 0, "x")

    def test_update_asset_unknown_group_is_noop(self, campaign):
        assert wizard.update_asset(campaign, "missing", "headlines", 0, "x") == campaign

    def test_set_generated_image(self, campaign):
        state = wizard.set_generated_image(campaign, "group-generic", "data:image/png;base64,AAAA")

        assert state.ad_groups[1].generated_image == "data:image/png;base64,AAAA"
        assert state.ad_groups[0].generated_image is None
