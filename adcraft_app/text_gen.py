from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from openai import OpenAI, OpenAIError

from config import settings

from .models import (
    DEFAULT_CURRENCY,
    DEFAULT_CURRENCY_SYMBOL,
    AdGroup,
    Keyword,
    SiteAnalysis,
)
from .scraper import PageContent, fetch_page_text

logger = logging.getLogger(__name__)

SYSTEM_MESSAGE = (
    "You are a senior Google Ads strategist and copywriter. "
    "Return ONLY valid raw JSON that matches the requested shape exactly. "
    "Do not include markdown, code fences, or text outside JSON."
)


def _get_client() -> OpenAI:
    """
    Return an OpenAI client built from OPENAI_API_KEY.
    """
    if not settings.OPENAI_API_KEY:
        raise RuntimeError("OPENAI_API_KEY is not set in the environment.")
    return OpenAI(api_key=settings.OPENAI_API_KEY)


def _json_completion(prompt: str, label: str) -> Any:
    """
    One chat completion in JSON mode, parsed.

    Every failure (no key, API error, non-JSON reply) surfaces as RuntimeError.
    """
    client = _get_client()
    logger.info("%s: requesting %s", label, settings.TEXT_MODEL)

    try:
        response = client.chat.completions.create(
            model=settings.TEXT_MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_MESSAGE},
                {"role": "user", "content": prompt},
            ],
            response_format={"type": "json_object"},
            temperature=0.7,
        )
    except OpenAIError as e:
        logger.error("%s failed: %s", label, e)
        raise RuntimeError(f"{label} failed: {e}") from e

    content = response.choices[0].message.content or ""
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        logger.error("%s returned non-JSON content: %r", label, content[:200])
        raise RuntimeError(f"{label} returned malformed JSON.") from e


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


# ---------------------------------------------------------------------------
# Site analysis + keyword research
# ---------------------------------------------------------------------------


def _page_context(page: PageContent) -> str:
    if page.is_empty:
        return "The page could not be fetched; rely on the URL and your general knowledge."
    return (
        f"Page title: {page.title or '(none)'}\n"
        f"Meta description: {page.description or '(none)'}\n"
        f"Visible text (truncated):\n{page.text}"
    )


def _build_analysis_prompt(
    url: str,
    location: str,
    page: PageContent,
    currency_override: Optional[str],
) -> str:
    if currency_override:
        currency_instruction = (
            f"IMPORTANT: The user has explicitly requested '{currency_override}' as the currency. "
            f"You MUST estimate all CPC values in {currency_override}. "
            f"Return '{currency_override}' as the currency code and the matching symbol."
        )
    else:
        currency_instruction = (
            "Determine the local currency for the location provided. "
            f"Default to '{DEFAULT_CURRENCY}' ({DEFAULT_CURRENCY_SYMBOL}) if the location "
            "suggests the UK or is ambiguous. Return the currency code (e.g. USD, GBP) and symbol."
        )

    return (
        f"Analyze the website: {url}\n"
        f"The target location is: {location}\n\n"
        f"{_page_context(page)}\n\n"
        "1. Extract the likely page title and a brief summary of what the business offers.\n"
        f"2. {currency_instruction}\n"
        "3. Generate a comprehensive list of 20 Google Ads keywords suitable for this business.\n"
        "   - Include long-tail variations.\n"
        "   - Include specific competitor brand names if relevant.\n"
        "   - Categorize them strictly into 'Brand' (the domain/business name), "
        "'Generic' (industry terms/services) and 'Competitor' (likely competitors).\n"
        "   - Estimate 'volume' (0-10000), 'competition' (0-100), 'relevance' (0-100) and "
        "'cpc' (cost per click in the determined currency, e.g. 0.50 to 50.00).\n\n"
        "Return a JSON object with keys: title, summary, currency, currencySymbol, and "
        "keywords (a list of objects with keys term, type, volume, competition, relevance, cpc)."
    )


def _parse_keywords(raw: Any) -> List[Keyword]:
    keywords: List[Keyword] = []
    if not isinstance(raw, list):
        return keywords
    for item in raw:
        if not isinstance(item, dict):
            continue
        term = str(item.get("term") or "").strip()
        if not term:
            continue
        keywords.append(
            Keyword(
                term=term,
                category=item.get("type") or item.get("category"),
                volume=item.get("volume"),
                competition=item.get("competition"),
                relevance=item.get("relevance"),
                cpc=item.get("cpc"),
                selected=True,
            )
        )
    return keywords


def analyze_site(
    url: str,
    location: str,
    currency_override: Optional[str] = None,
) -> SiteAnalysis:
    """
    Analyze a website for a target location and propose keywords.

    Returns a SiteAnalysis with title, summary, currency code/symbol and
    keywords. Currency falls back to the override (or GBP) and the symbol
    to '£' when the service leaves them out.
    """
    page = fetch_page_text(url)
    prompt = _build_analysis_prompt(url, location, page, currency_override)
    data = _json_completion(prompt, "Site analysis")
    if not isinstance(data, dict):
        data = {}

    return SiteAnalysis(
        title=str(data.get("title") or page.title or ""),
        summary=str(data.get("summary") or ""),
        currency=str(data.get("currency") or currency_override or DEFAULT_CURRENCY),
        currency_symbol=str(data.get("currencySymbol") or DEFAULT_CURRENCY_SYMBOL),
        keywords=_parse_keywords(data.get("keywords")),
    )


# ---------------------------------------------------------------------------
# Ad group structure + RSA copy
# ---------------------------------------------------------------------------


def _build_structure_prompt(terms: List[str], summary: str) -> str:
    return (
        f'Based on the business summary: "{summary}" and these selected keywords: '
        f"{', '.join(terms)}.\n\n"
        "Create logical Google Ads Ad Groups.\n"
        "Theme strategy: strictly segregate ad groups by theme. Keep 'Brand' keywords in "
        "their own group, 'Competitor' keywords in their own, and split 'Generic' themes by "
        "specific service/product lines.\n\n"
        "For each ad group:\n"
        "1. Give it a campaign-compliant name.\n"
        "2. Assign relevant keywords from the list.\n"
        "3. Generate 15 headlines (max 30 chars). Aggressively insert the assigned keywords, "
        "aim for natural keyword density, and use as close to 30 characters as possible.\n"
        "4. Generate 4 descriptions (max 90 chars). Include keywords naturally, focus on "
        "benefits and calls to action, and use as close to 90 characters as possible.\n"
        "5. Write 4 callout texts (max 25 chars).\n"
        "6. Write 4 sitelink texts (max 25 chars).\n"
        "7. Write 4 structured snippet values (max 25 chars).\n\n"
        "Strictly adhere to character limits.\n\n"
        'Return a JSON object {"ad_groups": [...]} where each item has keys: name, '
        "assigned_keywords, headlines, descriptions, callouts, sitelinks, structuredSnippets."
    )


def _parse_ad_groups(data: Any) -> List[AdGroup]:
    if isinstance(data, dict):
        raw_groups = data.get("ad_groups") or data.get("adGroups") or []
    elif isinstance(data, list):
        raw_groups = data
    else:
        raw_groups = []

    groups: List[AdGroup] = []
    for idx, raw in enumerate(raw_groups, start=1):
        if not isinstance(raw, dict):
            continue
        groups.append(
            AdGroup(
                name=str(raw.get("name") or f"Ad Group {idx}"),
                keywords=_str_list(raw.get("assigned_keywords") or raw.get("keywords")),
                headlines=_str_list(raw.get("headlines")),
                descriptions=_str_list(raw.get("descriptions")),
                callouts=_str_list(raw.get("callouts")),
                sitelinks=_str_list(raw.get("sitelinks")),
                structured_snippets=_str_list(
                    raw.get("structuredSnippets") or raw.get("structured_snippets")
                ),
            )
        )
    return groups


def structure_ad_groups(keywords: List[Keyword], summary: str) -> List[AdGroup]:
    """
    Group the selected keywords into themed ad groups with RSA copy.

    Only selected keywords are sent. Groups are forwarded as returned;
    missing asset lists default to empty.
    """
    terms: List[str] = [k.term for k in keywords if k.selected]
    if not terms:
        raise ValueError("Select at least one keyword before generating ad groups.")

    data: Dict[str, Any] | List[Any] = _json_completion(
        _build_structure_prompt(terms, summary),
        "Ad group generation",
    )
    groups = _parse_ad_groups(data)
    logger.info("Ad group generation: %d groups for %d keywords", len(groups), len(terms))
    return groups
