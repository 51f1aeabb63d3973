# adcraft_app/models.py
from __future__ import annotations

from typing import Any, List, Literal, Optional, get_args
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator


KeywordType = Literal["Brand", "Generic", "Competitor"]
KEYWORD_TYPES: tuple[str, ...] = get_args(KeywordType)

AssetField = Literal[
    "headlines", "descriptions", "callouts", "sitelinks", "structured_snippets"
]
ASSET_FIELDS: tuple[str, ...] = get_args(AssetField)

# Character limits per RSA asset type
HEADLINE_LIMIT = 30
DESCRIPTION_LIMIT = 90
ASSET_LIMIT = 25  # sitelinks, callouts, snippets

MAX_HEADLINES = 15
MAX_DESCRIPTIONS = 4
MAX_EXTENSIONS = 4

STEPS = ["Setup", "Keywords", "Ad Groups", "Assets", "Export"]

DEFAULT_CURRENCY = "GBP"
DEFAULT_CURRENCY_SYMBOL = "£"


def _clamp_percent(value: Any) -> int:
    try:
        number = int(round(float(value)))
    except (TypeError, ValueError):
        return 0
    return max(0, min(100, number))


class Keyword(BaseModel):
    """A search term with AI-estimated metrics."""

    term: str
    category: KeywordType = "Generic"
    volume: int = 0  # estimated monthly searches
    competition: int = 0  # 0-100
    relevance: int = 0  # 0-100
    cpc: float = 0.0
    selected: bool = True

    @field_validator("category", mode="before")
    @classmethod
    def _known_category(cls, value: Any) -> str:
        if isinstance(value, str):
            for kind in KEYWORD_TYPES:
                if value.strip().lower() == kind.lower():
                    return kind
        return "Generic"

    @field_validator("competition", "relevance", mode="before")
    @classmethod
    def _percent(cls, value: Any) -> int:
        return _clamp_percent(value)

    @field_validator("volume", mode="before")
    @classmethod
    def _volume(cls, value: Any) -> int:
        try:
            return max(0, int(round(float(value))))
        except (TypeError, ValueError):
            return 0

    @field_validator("cpc", mode="before")
    @classmethod
    def _cpc(cls, value: Any) -> float:
        try:
            return max(0.0, float(value))
        except (TypeError, ValueError):
            return 0.0


class AdGroup(BaseModel):
    """
    A themed cluster of keywords sharing one responsive search ad
    plus its extensions.
    """

    id: str = Field(default_factory=lambda: f"group-{uuid4().hex[:12]}")
    name: str = ""
    keywords: List[str] = Field(default_factory=list)

    headlines: List[str] = Field(default_factory=list, description="Max 15, 30 chars each.")
    descriptions: List[str] = Field(default_factory=list, description="Max 4, 90 chars each.")
    callouts: List[str] = Field(default_factory=list)
    sitelinks: List[str] = Field(default_factory=list)
    structured_snippets: List[str] = Field(default_factory=list)

    generated_image: Optional[str] = Field(
        default=None,
        description="data:image/png;base64,... URL of the generated image.",
    )


class ExtractedInfo(BaseModel):
    title: str = ""
    summary: str = ""
    currency: str = DEFAULT_CURRENCY
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL


class SiteAnalysis(BaseModel):
    """What the AI service returns for a site + location."""

    title: str = ""
    summary: str = ""
    currency: str = DEFAULT_CURRENCY
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    keywords: List[Keyword] = Field(default_factory=list)

    def info(self) -> ExtractedInfo:
        return ExtractedInfo(
            title=self.title,
            summary=self.summary,
            currency=self.currency,
            currency_symbol=self.currency_symbol,
        )


class CampaignState(BaseModel):
    """Whole wizard progress. Persisted wholesale after every change."""

    step: int = 1
    url: str = ""
    location: str = ""
    extracted_info: Optional[ExtractedInfo] = None

    keywords: List[Keyword] = Field(default_factory=list)
    ad_groups: List[AdGroup] = Field(default_factory=list)

    # Transient
    is_processing: bool = False
    process_status: str = ""

    @property
    def currency(self) -> str:
        return self.extracted_info.currency if self.extracted_info else DEFAULT_CURRENCY

    @property
    def currency_symbol(self) -> str:
        if self.extracted_info:
            return self.extracted_info.currency_symbol
        return DEFAULT_CURRENCY_SYMBOL

    @property
    def summary(self) -> str:
        return self.extracted_info.summary if self.extracted_info else ""
