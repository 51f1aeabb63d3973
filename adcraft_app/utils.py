from __future__ import annotations

import re


def slugify(value: str, default: str = "ad-group") -> str:
    """
    Convert a string into a filesystem-safe slug.
    """
    value = value.strip().lower()
    value = re.sub(r"[^a-z0-9]+", "-", value)
    value = re.sub(r"-{2,}", "-", value).strip("-")
    return value or default


def char_count_label(value: str, limit: int) -> str:
    """'12/30' style counter, flagged when the value runs over its limit."""
    count = len(value or "")
    label = f"{count}/{limit}"
    return f"{label} ⚠️" if count > limit else label
