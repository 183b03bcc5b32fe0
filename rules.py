"""
Rule tables for the phishing risk scorer.

All keyword lists, weights and thresholds live here as frozen dataclasses so
they can be swapped out in tests or tuned from a JSON file (see load_rules).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
import json
import logging
import re
from pathlib import Path
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UrlRules:
    suspicious_keywords: Tuple[str, ...] = (
        "verify", "urgent", "suspend", "claim", "bonus", "secure-",
        "login", "signin", "update", "confirm", "account", "free",
        "gift", "prize", "winner", "offer", "click", "unlock",
    )
    # brand name followed by a hyphen, e.g. paypal-verify.com
    brand_patterns: Tuple[str, ...] = (
        "paypal-", "apple-", "amazon-", "microsoft-", "google-", "netflix-",
        "facebook-", "instagram-", "chase-", "wellsfargo-", "bankofamerica-",
        "bank-", "icloud-", "outlook-", "office365-",
    )
    shortener_domains: Tuple[str, ...] = (
        "bit.ly", "tinyurl.com", "t.co", "goo.gl", "ow.ly", "is.gd",
        "buff.ly", "rebrand.ly", "cutt.ly", "shorturl.at", "tiny.cc",
        "rb.gy", "bit.do", "s.id", "t.ly",
    )


@dataclass(frozen=True)
class EmailRules:
    free_providers: Tuple[str, ...] = (
        "gmail.com", "googlemail.com", "yahoo.com", "outlook.com",
        "hotmail.com", "live.com", "aol.com", "icloud.com", "mail.com",
        "protonmail.com", "gmx.com", "yandex.com", "zoho.com",
    )
    role_words: Tuple[str, ...] = (
        "support", "admin", "billing", "noreply", "no-reply", "security",
        "helpdesk", "help", "service", "verify", "account", "info",
        "alert", "update", "payments",
    )
    brand_domains: Tuple[str, ...] = (
        "gmail.com", "yahoo.com", "outlook.com", "hotmail.com",
        "icloud.com", "mail.com", "paypal.com", "apple.com", "amazon.com",
        "microsoft.com", "google.com", "facebook.com", "instagram.com",
        "netflix.com", "linkedin.com", "chase.com", "wellsfargo.com",
        "bankofamerica.com", "dropbox.com", "docusign.com",
    )
    # typosquat when lower < similarity < upper
    typosquat_lower: float = 0.7
    typosquat_upper: float = 1.0


@dataclass(frozen=True)
class ContentRules:
    urgency_words: Tuple[str, ...] = (
        "urgent", "urgently", "immediate", "immediately", "now", "asap",
        "act now", "right away", "as soon as possible", "within 24 hours",
        "expires", "expire", "deadline", "final notice", "last chance",
        "limited time", "today only",
    )
    threat_words: Tuple[str, ...] = (
        "suspend", "suspended", "suspension", "terminate", "terminated",
        "locked", "deactivated", "disabled", "blocked",
        "legal action", "arrest", "penalty", "unauthorized", "compromised",
    )
    personal_info_words: Tuple[str, ...] = (
        "password", "passcode", "pin", "social security", "ssn",
        "date of birth", "credentials", "login details", "username",
        "security question", "mother's maiden name", "passport",
        "verify your identity", "account number",
    )
    financial_words: Tuple[str, ...] = (
        "wire transfer", "bank transfer", "bank account", "credit card",
        "card number", "cvv", "payment", "invoice", "gift card", "bitcoin",
        "crypto", "refund", "transfer funds", "billing",
    )
    # (name, regex) checks run against the original-case text
    grammar_checks: Tuple[Tuple[str, str], ...] = (
        ("misspelling", r"(?i)\b(?:recieve|recieved|acount|verfy|adress|seperate|definately|"
                        r"occured|untill|informations|dear costumer|pasword|securty|"
                        r"immediatly)\b"),
        ("lowercase_sentence_start", r"[.!?]\s+[a-z]"),
        ("repeated_spaces", r" {2,}"),
    )
    grammar_start: int = 100
    grammar_penalty: int = 10
    high_urgency_count: int = 3


@dataclass(frozen=True)
class ScoringWeights:
    url_suspicious: int = 30
    email_suspicious: int = 25
    insecure_scheme: int = 10
    bad_reputation: int = 15
    typosquat: int = 20
    high_urgency: int = 20
    personal_info: int = 15
    financial_action: int = 10
    threat_language: int = 15
    poor_grammar: int = 10
    poor_grammar_below: int = 60


@dataclass(frozen=True)
class Thresholds:
    dangerous: int = 70
    suspicious: int = 35

    def __post_init__(self):
        if not 0 <= self.suspicious <= self.dangerous <= 100:
            raise ValueError(
                f"Invalid thresholds: need 0 <= suspicious ({self.suspicious}) "
                f"<= dangerous ({self.dangerous}) <= 100"
            )


@dataclass(frozen=True)
class RuleSet:
    url: UrlRules = field(default_factory=UrlRules)
    email: EmailRules = field(default_factory=EmailRules)
    content: ContentRules = field(default_factory=ContentRules)
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    thresholds: Thresholds = field(default_factory=Thresholds)


DEFAULT_RULES = RuleSet()

_SECTIONS = ("url", "email", "content", "weights", "thresholds")


def _coerce(value):
    # JSON arrays become tuples so the tables stay hashable and immutable
    if isinstance(value, list):
        return tuple(_coerce(v) for v in value)
    return value


def _check_value(name: str, current, value):
    """Reject a JSON override whose type does not match the default it replaces."""
    if isinstance(current, tuple):
        if not isinstance(value, list):
            raise ValueError(f"Rule '{name}' must be a JSON array")
        if name.endswith(".grammar_checks"):
            for item in value:
                if not (isinstance(item, list) and len(item) == 2 and all(isinstance(v, str) for v in item)):
                    raise ValueError(f"Rule '{name}' entries must be [name, pattern] pairs of strings")
                try:
                    re.compile(item[1])
                except re.error as exc:
                    raise ValueError(f"Rule '{name}' has a bad pattern {item[1]!r}: {exc}") from exc
        elif not all(isinstance(v, str) for v in value):
            raise ValueError(f"Rule '{name}' must be an array of strings")
    elif isinstance(current, float):
        # JSON has no separate float type, so 1 is as good as 1.0 here
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Rule '{name}' must be a number")
    elif isinstance(current, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Rule '{name}' must be an integer")


def _override(section: str, base, overrides: Dict):
    if not isinstance(overrides, dict):
        raise ValueError(f"Rules section '{section}' must be a JSON object")
    known = {f.name for f in fields(base)}
    changes = {}
    for key, value in overrides.items():
        if key not in known:
            logger.warning("Ignoring unknown rule '%s.%s'", section, key)
            continue
        _check_value(f"{section}.{key}", getattr(base, key), value)
        changes[key] = _coerce(value)
    return replace(base, **changes)


def load_rules(path: Optional[str], base: RuleSet = DEFAULT_RULES) -> RuleSet:
    """Load rule overrides from a JSON file on top of ``base``."""
    if not path:
        return base
    rules_file = Path(path)
    if not rules_file.is_file():
        logger.warning("Rules file not found: %s (using defaults)", rules_file)
        return base

    try:
        data = json.loads(rules_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValueError(f"Cannot read rules file {rules_file}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Rules file {rules_file} must contain a JSON object")

    sections = {}
    for name in _SECTIONS:
        if name in data:
            sections[name] = _override(name, getattr(base, name), data[name])
    for name in data:
        if name not in _SECTIONS:
            logger.warning("Ignoring unknown rules section '%s'", name)

    logger.debug("Loaded rule overrides from %s: %s", rules_file, sorted(sections))
    return replace(base, **sections)
