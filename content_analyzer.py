# content_analyzer.py
# Message text checks: urgency, threats, personal-info and money requests, rough grammar score

import logging
import re
from functools import lru_cache
from typing import Tuple

from html_text import extract_text, looks_like_html
from rules import DEFAULT_RULES, ContentRules
from signals import ContentSignal, UrgencyLevel

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def _word_pattern(word: str) -> re.Pattern:
    # whole words/phrases only, so "now" does not fire on "know"
    return re.compile(r"(?<!\w)" + re.escape(word) + r"(?!\w)")


@lru_cache(maxsize=None)
def _compiled(pattern: str) -> re.Pattern:
    return re.compile(pattern)


def matched_words(buffer: str, words: Tuple[str, ...]) -> Tuple[str, ...]:
    """Distinct words from the list present in the (lower-cased) buffer, in list order."""
    return tuple(dict.fromkeys(w for w in words if _word_pattern(w.lower()).search(buffer)))


def _grammar_hits(text: str, rules: ContentRules) -> int:
    total = 0
    for name, pattern in rules.grammar_checks:
        hits = sum(1 for _ in _compiled(pattern).finditer(text))
        if hits:
            logger.debug("Grammar check %s matched %d time(s)", name, hits)
        total += hits
    return total


def grammar_score(*parts: str, rules: ContentRules = DEFAULT_RULES.content) -> int:
    """Start at ``grammar_start`` and lose ``grammar_penalty`` per check hit, checking each part on its own."""
    hits = sum(_grammar_hits(part, rules) for part in parts if part)
    return max(0, min(rules.grammar_start - hits * rules.grammar_penalty, 100))


def _urgency(count: int, rules: ContentRules) -> UrgencyLevel:
    if count >= rules.high_urgency_count:
        return UrgencyLevel.HIGH
    if count >= 1:
        return UrgencyLevel.MEDIUM
    return UrgencyLevel.LOW


def analyze_content(subject: str, body: str, rules: ContentRules = DEFAULT_RULES.content) -> ContentSignal:
    """Scan subject and body as one buffer. Empty input gives low urgency, no flags and a grammar score of 100."""
    subject = subject or ""
    body = body or ""
    if looks_like_html(body):
        body = extract_text(body)

    text = "\n".join(part for part in (subject, body) if part)
    buffer = text.lower()

    urgency = matched_words(buffer, rules.urgency_words)
    threats = matched_words(buffer, rules.threat_words)
    personal = matched_words(buffer, rules.personal_info_words)
    financial = matched_words(buffer, rules.financial_words)

    signal = ContentSignal(
        urgency_level=_urgency(len(urgency), rules),
        requests_personal_info=bool(personal),
        requests_financial_action=bool(financial),
        uses_threat_language=bool(threats),
        grammar_score=grammar_score(subject, body, rules=rules),
    )
    logger.debug(
        "Content matches urgency=%s threat=%s personal=%s financial=%s -> %s",
        urgency, threats, personal, financial, signal,
    )
    return signal
