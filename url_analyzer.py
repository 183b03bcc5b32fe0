# url_analyzer.py
# Lexical URL checks: suspicious keywords, brand-hyphen impersonation, shorteners, scheme

import logging
from typing import List, Tuple
from urllib.parse import urlparse

from rules import DEFAULT_RULES, UrlRules
from signals import Reputation, UrlSignal

logger = logging.getLogger(__name__)


def parse_url(url: str) -> dict:
    """Normalize and parse a URL, ensure scheme exists for parsing."""
    url = (url or "").strip().lower()
    if not url.startswith("http://") and not url.startswith("https://"):
        url = "http://" + url
    try:
        parsed = urlparse(url)
        host = parsed.hostname or ""
        scheme = parsed.scheme or ""
    except ValueError:
        # e.g. unbalanced IPv6 brackets
        return {"normalized": url, "host": "", "scheme": ""}
    return {
        "normalized": url,
        "host": host,
        "scheme": scheme,
    }


def find_keywords(text: str, keywords: Tuple[str, ...]) -> Tuple[str, ...]:
    """Return keywords present in text, deduplicated, ordered by where they first appear."""
    hits: List[Tuple[int, int, str]] = []
    seen = set()
    for order, kw in enumerate(keywords):
        if kw in seen:
            continue
        pos = text.find(kw)
        if pos >= 0:
            seen.add(kw)
            hits.append((pos, order, kw))
    return tuple(kw for _, _, kw in sorted(hits))


def _is_shortener(host: str, shorteners: Tuple[str, ...]) -> bool:
    return any(host == d or host.endswith("." + d) for d in shorteners)


def analyze_url(url: str, rules: UrlRules = DEFAULT_RULES.url) -> UrlSignal:
    """Inspect a URL string; never raises, empty or broken URLs come back non-suspicious."""
    lowered = (url or "").strip().lower()
    p = parse_url(lowered)
    host = p["host"]

    matched = find_keywords(lowered, rules.suspicious_keywords + rules.brand_patterns)
    impersonation = any(kw in rules.brand_patterns for kw in matched)
    is_shortened = bool(host) and _is_shortener(host, rules.shortener_domains)

    if impersonation:
        reputation = Reputation.BAD
    elif is_shortened:
        reputation = Reputation.UNKNOWN
    else:
        reputation = Reputation.GOOD

    signal = UrlSignal(
        is_suspicious=bool(matched) or reputation is Reputation.BAD or is_shortened,
        matched_keywords=matched,
        has_secure_scheme=bool(host) and p["scheme"] == "https",
        reputation_hint=reputation,
        is_shortened=is_shortened,
    )
    logger.debug("URL %r -> %s", url, signal)
    return signal
