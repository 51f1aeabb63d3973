# adcraft_app/csv_export.py
"""
Google Ads Editor CSV export.

Layout: one "Keyword" row per assigned keyword, followed by one
"Responsive Search Ad" row per ad group carrying the ad copy.
"""
from __future__ import annotations

import csv
import io
from datetime import date
from typing import Iterable, List, Optional

from .models import MAX_DESCRIPTIONS, MAX_HEADLINES, CampaignState

EXPORT_FILENAME = "campaign_export.csv"
EXTENSION_DELIMITER = "; "

CSV_HEADERS: List[str] = [
    "Campaign",
    "Ad Group",
    "Keyword",
    "Type",
    *[f"Headline {i}" for i in range(1, MAX_HEADLINES + 1)],
    *[f"Description {i}" for i in range(1, MAX_DESCRIPTIONS + 1)],
    "Sitelinks",
    "Callouts",
    "Structured Snippets",
]
AD_COLUMN_COUNT = len(CSV_HEADERS) - 4


def campaign_name(state: CampaignState, today: Optional[date] = None) -> str:
    title = state.extracted_info.title if state.extracted_info else ""
    day = (today or date.today()).isoformat()
    return f"Search - {title or 'Generated'} - {day}"


def _padded(values: List[str], size: int) -> List[str]:
    """First `size` values, blank-padded; anything beyond `size` is dropped."""
    values = [v or "" for v in values[:size]]
    return values + [""] * (size - len(values))


def build_rows(state: CampaignState, today: Optional[date] = None) -> List[List[str]]:
    """Data rows (no header), each exactly len(CSV_HEADERS) cells."""
    name = campaign_name(state, today)
    rows: List[List[str]] = []

    for group in state.ad_groups:
        for keyword in group.keywords:
            rows.append([name, group.name, keyword, "Keyword", *[""] * AD_COLUMN_COUNT])

        rows.append(
            [
                name,
                group.name,
                "",
                "Responsive Search Ad",
                *_padded(group.headlines, MAX_HEADLINES),
                *_padded(group.descriptions, MAX_DESCRIPTIONS),
                EXTENSION_DELIMITER.join(group.sitelinks),
                EXTENSION_DELIMITER.join(group.callouts),
                EXTENSION_DELIMITER.join(group.structured_snippets),
            ]
        )
    return rows


def _quoted_lines(rows: Iterable[List[str]]) -> List[str]:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    lines = []
    for row in rows:
        writer.writerow(row)
        lines.append(buffer.getvalue()[:-1])
        buffer.seek(0)
        buffer.truncate()
    return lines


def build_csv(state: CampaignState, today: Optional[date] = None) -> str:
    """
    Render the whole campaign as CSV text.

    Header is unquoted; every data cell is quoted, with embedded quotes
    doubled. Lines are joined with '\\n' and there is no trailing newline.
    """
    lines = [",".join(CSV_HEADERS), *_quoted_lines(build_rows(state, today))]
    return "\n".join(lines)
