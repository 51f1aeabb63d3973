# adcraft_app/export_package.py
from __future__ import annotations

import io
import logging
import zipfile
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from PIL import Image

from .csv_export import EXPORT_FILENAME, build_csv, campaign_name
from .image_gen import from_data_url
from .models import CampaignState
from .utils import slugify
from .wizard import selected_keywords

logger = logging.getLogger(__name__)

SUMMARY_FILENAME = "campaign_summary.md"


def image_filenames(state: CampaignState) -> Dict[str, str]:
    """Map ad group id -> unique archive path for groups that have an image."""
    names: Dict[str, str] = {}
    used = set()
    for group in state.ad_groups:
        if not group.generated_image:
            continue
        base = slugify(group.name)
        candidate, i = base, 1
        while candidate in used:
            i += 1
            candidate = f"{base}-{i}"
        used.add(candidate)
        names[group.id] = f"images/{candidate}.png"
    return names


def _bullets(lines: List[str], values: List[str]) -> None:
    filled = [v for v in values if v]
    if not filled:
        lines.append("_None._")
        return
    for v in filled:
        lines.append(f"- {v}")


def build_markdown_summary(state: CampaignState, today: Optional[date] = None) -> str:
    """Build a markdown review document of the campaign for client approval."""
    lines: List[str] = []
    info = state.extracted_info

    lines.append(f"# {campaign_name(state, today)}")
    lines.append("")
    lines.append(f"- Website: {state.url or '_not set_'}")
    lines.append(f"- Location: {state.location or '_not set_'}")
    lines.append(f"- Currency: {state.currency} ({state.currency_symbol})")
    lines.append("")

    lines.append("## Business summary")
    lines.append(info.summary if info and info.summary else "_No summary available._")
    lines.append("")

    keywords = selected_keywords(state)
    lines.append(f"## Keywords ({len(keywords)} selected)")
    lines.append("")
    if keywords:
        lines.append("| Keyword | Type | Volume | CPC | Competition |")
        lines.append("| --- | --- | ---: | ---: | ---: |")
        for k in keywords:
            lines.append(
                f"| {k.term} | {k.category} | {k.volume} | "
                f"{state.currency_symbol}{k.cpc:.2f} | {k.competition} |"
            )
    else:
        lines.append("_No keywords selected._")
    lines.append("")

    lines.append("## Ad groups")
    lines.append("")
    if not state.ad_groups:
        lines.append("_No ad groups._")

    images = image_filenames(state)

    for idx, group in enumerate(state.ad_groups, start=1):
        lines.append(f"### {idx}. {group.name}")
        lines.append("")
        lines.append(f"**Keywords:** {', '.join(group.keywords) or '_none_'}")
        lines.append("")
        for title, values in (
            ("Headlines", group.headlines),
            ("Descriptions", group.descriptions),
            ("Sitelinks", group.sitelinks),
            ("Callouts", group.callouts),
            ("Structured snippets", group.structured_snippets),
        ):
            lines.append(f"**{title}:**")
            lines.append("")
            _bullets(lines, values)
            lines.append("")
        if group.id in images:
            lines.append(f"Image: `{images[group.id]}`")
            lines.append("")

    return "\n".join(lines)


def _png_bytes(data_url: str) -> bytes:
    """Decode a stored image and re-encode it as PNG."""
    raw = from_data_url(data_url)
    with Image.open(io.BytesIO(raw)) as img:
        out = io.BytesIO()
        img.convert("RGBA").save(out, format="PNG")
        return out.getvalue()


def export_zip_filename(state: CampaignState, now: Optional[datetime] = None) -> str:
    """Download name for the ZIP package, stamped with the UTC build time."""
    now = now or datetime.now(timezone.utc)
    title = state.extracted_info.title if state.extracted_info else ""
    return f"{slugify(title, default='campaign')}_export_{now:%Y%m%d-%H%M%S}.zip"


def build_export_zip(state: CampaignState, today: Optional[date] = None) -> bytes:
    """Create an in-memory ZIP with the CSV, markdown summary and images."""
    buffer = io.BytesIO()

    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(EXPORT_FILENAME, build_csv(state, today))
        zf.writestr(SUMMARY_FILENAME, build_markdown_summary(state, today))

        images = image_filenames(state)
        for group in state.ad_groups:
            if group.id not in images:
                continue
            try:
                png = _png_bytes(group.generated_image)
            except (ValueError, OSError) as e:
                logger.warning("Skipping unreadable image for '%s': %s", group.name, e)
                continue
            zf.writestr(images[group.id], png)

    buffer.seek(0)
    return buffer.getvalue()
