"""Helpers for HTML message bodies: visible text and link extraction."""

from __future__ import annotations

import re
from typing import List

from bs4 import BeautifulSoup


_HTML_TAG = re.compile(r"<\s*(html|body|div|p|a|table|span|br|font|img)\b", re.IGNORECASE)
_PLAIN_LINK = re.compile(r"https?://[^\s<>\"')\]]+", re.IGNORECASE)


def looks_like_html(text: str) -> bool:
    return bool(text) and _HTML_TAG.search(text) is not None


def extract_text(html: str) -> str:
    """Return the visible text of an HTML document; scripts and styles are dropped."""
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    return soup.get_text(separator=" ", strip=True)


def extract_links(body: str) -> List[str]:
    """
    Returns the links found in a message body, in document order, deduplicated.

    HTML bodies contribute anchor hrefs (http/https only); plain-text bodies
    contribute every http(s):// token.
    """
    links: List[str] = []
    if looks_like_html(body):
        soup = BeautifulSoup(body, "html.parser")
        for a in soup.find_all("a", href=True):
            href = a.get("href", "").strip()
            if href.lower().startswith(("http://", "https://")):
                links.append(href)
    else:
        links.extend(m.group(0).rstrip(".,;:!?") for m in _PLAIN_LINK.finditer(body or ""))

    # deduplicate
    return list(dict.fromkeys(links))
