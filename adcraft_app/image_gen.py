# adcraft_app/image_gen.py
from __future__ import annotations

import base64
import logging
from typing import Optional

import requests
from openai import OpenAI, OpenAIError

from config import settings

from .models import AdGroup

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = "data:image/png;base64,"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _get_client() -> OpenAI:
    if not settings.OPENAI_API_KEY:
        raise RuntimeError("OPENAI_API_KEY is not set in the environment.")
    return OpenAI(api_key=settings.OPENAI_API_KEY)


def build_image_prompt(ad_group: AdGroup, summary: str) -> str:
    return (
        "Create a professional, high-quality digital advertising image for a business "
        f"described as: {summary}\n"
        f"Focus on the theme: {ad_group.name}.\n"
        "The style should be modern, clean, and suitable for a social media or display ad.\n"
        "No text on the image."
    )


def to_data_url(image_bytes: bytes) -> str:
    return DATA_URL_PREFIX + base64.b64encode(image_bytes).decode("ascii")


def from_data_url(data_url: str) -> bytes:
    """Decode a data: URL (or bare base64) back into bytes."""
    payload = data_url.split(",", 1)[1] if data_url.startswith("data:") else data_url
    return base64.b64decode(payload)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def generate_ad_image(ad_group: AdGroup, summary: str) -> Optional[str]:
    """
    Generate one ad image for an ad group.

    Returns a data:image/png;base64 URL, or None when the response carries
    no image payload. API failures raise RuntimeError.

    Prefers the base64 field; if the API returns a URL instead we fetch it.
    """
    client = _get_client()
    prompt = build_image_prompt(ad_group, summary)
    logger.info("Image generation for '%s' via %s", ad_group.name, settings.IMAGE_MODEL)

    try:
        result = client.images.generate(
            model=settings.IMAGE_MODEL,
            prompt=prompt,
            size=settings.IMAGE_SIZE,
            n=1,
        )
    except OpenAIError as e:
        logger.error("Image generation failed: %s", e)
        raise RuntimeError(f"OpenAI image generation failed: {e}") from e

    if not result.data:
        return None

    image = result.data[0]
    b64 = getattr(image, "b64_json", None)
    if b64:
        return DATA_URL_PREFIX + b64

    url = getattr(image, "url", None)
    if not url:
        return None

    try:
        resp = requests.get(url, timeout=60)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise RuntimeError(f"Could not download generated image: {e}") from e
    return to_data_url(resp.content)
