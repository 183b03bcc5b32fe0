"""Programmatic API entrypoint for the phishing risk scorer."""

from __future__ import annotations

from typing import Optional

from config import get_settings
from content_analyzer import analyze_content
from email_analyzer import analyze_email, analyze_sender_domain
from html_text import extract_links
from risk_aggregator import aggregate
from rules import RuleSet
from signals import RiskVerdict
from url_analyzer import analyze_url


def _supplied(value: Optional[str]) -> bool:
    return bool(value and value.strip())


def scan(
    url: Optional[str] = None,
    email: Optional[str] = None,
    subject: Optional[str] = None,
    body: Optional[str] = None,
    sender_domain: Optional[str] = None,
    rules: Optional[RuleSet] = None,
) -> RiskVerdict:
    """
    Run the analyzers for whichever inputs are supplied and aggregate them.

    Empty or whitespace-only inputs count as not supplied. ``sender_domain`` is
    only used when no full ``email`` address is given.
    """
    if rules is None:
        rules = get_settings().rules()

    url_signal = analyze_url(url, rules.url) if _supplied(url) else None

    email_signal = None
    if _supplied(email):
        email_signal = analyze_email(email, rules.email)
    elif _supplied(sender_domain):
        email_signal = analyze_sender_domain(sender_domain, rules.email)

    content_signal = None
    if _supplied(subject) or _supplied(body):
        content_signal = analyze_content(subject or "", body or "", rules.content)

    return aggregate(url_signal, email_signal, content_signal, rules.weights, rules.thresholds)


def scan_message(
    sender: Optional[str],
    subject: Optional[str],
    body: Optional[str],
    rules: Optional[RuleSet] = None,
) -> RiskVerdict:
    """Scan a whole message; the first link in the body is checked as the URL."""
    links = extract_links(body or "")
    return scan(
        url=links[0] if links else None,
        email=sender,
        subject=subject,
        body=body,
        rules=rules,
    )
