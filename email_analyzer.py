"""Sender address checks: free webmail providers, role-account local parts and typosquatted domains."""

from __future__ import annotations

import logging
import re
from typing import Tuple

from rules import DEFAULT_RULES, EmailRules
from signals import EmailSignal, Reputation
from similarity import ratio
from url_analyzer import find_keywords

logger = logging.getLogger(__name__)

_ANGLE_ADDRESS = re.compile(r"<([^<>]*)>")


def split_address(email: str) -> Tuple[str, str] | None:
    """
    Split an address into (local_part, domain), both lower-cased.

    Accepts the display form ``"Name <user@host>"``. The split happens on the
    last ``@``; returns None when there is no ``@`` at all.
    """
    email = (email or "").strip()
    match = _ANGLE_ADDRESS.search(email)
    if match:
        email = match.group(1).strip()
    local, sep, domain = email.rpartition("@")
    if not sep:
        return None
    return local.strip().lower(), domain.strip().lower()


def _is_typosquat(domain: str, rules: EmailRules) -> bool:
    # a known brand or webmail domain is itself, never a lookalike of another one
    if not domain or domain in rules.brand_domains or domain in rules.free_providers:
        return False
    for brand in rules.brand_domains:
        score = ratio(domain, brand)
        if rules.typosquat_lower < score < rules.typosquat_upper:
            logger.debug("Domain %s resembles %s (similarity %.3f)", domain, brand, score)
            return True
    return False


def analyze_email(email: str, rules: EmailRules = DEFAULT_RULES.email) -> EmailSignal:
    """Inspect a sender address; addresses without '@' yield an all-clear signal with unknown reputation."""
    parts = split_address(email)
    if parts is None:
        logger.debug("No '@' in sender %r, skipping email checks", email)
        return EmailSignal()

    local, domain = parts
    is_free = domain in rules.free_providers
    patterns = find_keywords(local, rules.role_words)
    is_typosquat = _is_typosquat(domain, rules)
    reputation = Reputation.GOOD if domain in rules.brand_domains else Reputation.UNKNOWN

    signal = EmailSignal(
        is_suspicious=(is_free and bool(patterns)) or is_typosquat,
        domain_reputation=reputation,
        is_typosquat=is_typosquat,
        is_free_provider=is_free,
        matched_patterns=patterns,
    )
    logger.debug("Email %r -> %s", email, signal)
    return signal


def analyze_sender_domain(domain: str, rules: EmailRules = DEFAULT_RULES.email) -> EmailSignal:
    """Run the email checks for a bare sender domain (no local part to inspect)."""
    domain = (domain or "").strip().lstrip("@")
    if not domain:
        return EmailSignal()
    return analyze_email("@" + domain, rules)
