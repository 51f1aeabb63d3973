"""Landing page fetcher: gives the AI service the actual site copy to work from.

Only the given URL is fetched; no crawling of subpages.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

import requests
from bs4 import BeautifulSoup

from config import settings

logger = logging.getLogger(__name__)

MAX_TEXT_CHARS = 6000

_REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/122.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


@dataclass
class PageContent:
    title: str = ""
    description: str = ""
    text: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.title or self.description or self.text)


def normalize_url(url: str) -> str:
    url = (url or "").strip()
    if url and not re.match(r"^https?://", url, re.IGNORECASE):
        url = "https://" + url
    return url


def fetch_page_text(url: str, timeout: float | None = None) -> PageContent:
    """
    Fetch `url` and return its title, meta description and visible text.
    On any failure (network, bad status, parse error) returns an empty PageContent.
    """
    url = normalize_url(url)
    if not url:
        return PageContent()

    try:
        response = requests.get(
            url,
            timeout=timeout or settings.SCRAPE_TIMEOUT,
            headers=_REQUEST_HEADERS,
        )
        response.raise_for_status()
        response.encoding = response.apparent_encoding or "utf-8"
        html = response.text
    except (requests.RequestException, ValueError, OSError) as e:
        logger.warning("Could not fetch %s: %s", url, e)
        return PageContent()

    soup = BeautifulSoup(html, "html.parser")

    title = soup.title.get_text(strip=True) if soup.title else ""
    meta = soup.find("meta", attrs={"name": re.compile(r"^description$", re.I)})
    description = (meta.get("content") or "").strip() if meta else ""

    for tag in soup(["script", "style", "noscript", "svg", "template"]):
        tag.decompose()
    text = " ".join(soup.get_text(separator=" ").split())

    return PageContent(
        title=title,
        description=description,
        text=text[:MAX_TEXT_CHARS],
    )
