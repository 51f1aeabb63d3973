"""Shared fixtures. No network or API key needed."""

import pytest

from adcraft_app.models import AdGroup, CampaignState, ExtractedInfo, Keyword


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "state" / "adcraft_state_v1.json"


@pytest.fixture
def keywords():
    return [
        Keyword(term="acme plumbing", category="Brand", volume=900, competition=20,
                relevance=95, cpc=1.2, selected=True),
        Keyword(term="emergency plumber", category="Generic", volume=5400, competition=80,
                relevance=90, cpc=6.5, selected=True),
        Keyword(term="boiler repair", category="Generic", volume=3200, competition=60,
                relevance=70, cpc=4.1, selected=False),
        Keyword(term="rival plumbing", category="Competitor", volume=400, competition=35,
                relevance=40, cpc=2.0, selected=True),
    ]


@pytest.fixture
def ad_groups():
    return [
        AdGroup(
            id="group-brand",
            name="Brand - Acme",
            keywords=["acme plumbing"],
            headlines=["Acme Plumbing", "Local Plumbers", "Call Acme Today"],
            descriptions=["Fast, friendly plumbing across London."],
            callouts=["24/7 Service", "No Call-Out Fee"],
            sitelinks=["Contact Us", "Our Services"],
            structured_snippets=["Repairs", "Installs"],
        ),
        AdGroup(
            id="group-generic",
            name="Generic - Emergency",
            keywords=["emergency plumber", "rival plumbing"],
            headlines=[f"Headline {i}" for i in range(1, 16)],
            descriptions=["D1", "D2", "D3", "D4"],
        ),
    ]


@pytest.fixture
def campaign(keywords, ad_groups):
    return CampaignState(
        step=4,
        url="https://acme-plumbing.example",
        location="London, UK",
        extracted_info=ExtractedInfo(
            title="Acme Plumbing",
            summary="Emergency plumbing and boiler repairs in London.",
            currency="GBP",
            currency_symbol="£",
        ),
        keywords=keywords,
        ad_groups=ad_groups,
    )
