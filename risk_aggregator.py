# risk_aggregator.py
# Weighted scorer combining URL / email / content signals into a risk verdict

from typing import List, Optional

from rules import DEFAULT_RULES, ScoringWeights, Thresholds
from signals import (
    Classification,
    ContentSignal,
    EmailSignal,
    Reputation,
    RiskVerdict,
    UrgencyLevel,
    UrlSignal,
)

NO_THREATS = "No immediate threats detected. Stay cautious with unexpected messages."
INSECURE_LINK = "The link does not use HTTPS. Do not enter passwords or payment details on that site."
SHORTENED_LINK = "The link uses a URL shortener that hides its real destination. Expand it before opening."
LOOKALIKE_DOMAIN = "The sender's domain imitates a well-known brand (possible typosquatting). Do not trust this sender."
ROLE_ACCOUNT = (
    "The sender poses as an organizational account ({patterns}) from a free webmail provider. "
    "Verify the sender through an official channel."
)
HIGH_URGENCY = "The message pressures you to act immediately. Take your time and verify the request independently."
PERSONAL_INFO = "The message asks for personal information or credentials. Legitimate organizations never request these by email."
FINANCIAL_REQUEST = "The message asks you to send money or payment details. Confirm any payment request through a known contact first."
THREAT_LANGUAGE = "The message threatens account suspension or other consequences, a common phishing tactic."
POOR_GRAMMAR = "The message contains spelling and grammar errors typical of phishing."


def _add_reason(reasons: List[str], reason: str):
    if reason not in reasons:
        reasons.append(reason)


def classify(score: int, thresholds: Thresholds = DEFAULT_RULES.thresholds) -> Classification:
    if score >= thresholds.dangerous:
        return Classification.DANGEROUS
    if score >= thresholds.suspicious:
        return Classification.SUSPICIOUS
    return Classification.SAFE


def score_signals(
    url: Optional[UrlSignal],
    email: Optional[EmailSignal],
    content: Optional[ContentSignal],
    weights: ScoringWeights = DEFAULT_RULES.weights,
) -> int:
    """Sum of the weights whose condition holds, clamped to [0, 100]."""
    score = 0

    if url is not None:
        if url.is_suspicious:
            score += weights.url_suspicious
        if not url.has_secure_scheme:
            score += weights.insecure_scheme
        if url.reputation_hint is Reputation.BAD:
            score += weights.bad_reputation

    if email is not None:
        if email.is_suspicious:
            score += weights.email_suspicious
        if email.is_typosquat:
            score += weights.typosquat

    if content is not None:
        if content.urgency_level is UrgencyLevel.HIGH:
            score += weights.high_urgency
        if content.requests_personal_info:
            score += weights.personal_info
        if content.requests_financial_action:
            score += weights.financial_action
        if content.uses_threat_language:
            score += weights.threat_language
        if content.grammar_score < weights.poor_grammar_below:
            score += weights.poor_grammar

    return max(0, min(score, 100))


def build_recommendations(
    url: Optional[UrlSignal],
    email: Optional[EmailSignal],
    content: Optional[ContentSignal],
    weights: ScoringWeights = DEFAULT_RULES.weights,
) -> List[str]:
    """One sentence per fired signal, in priority order; a single all-clear line otherwise."""
    reasons: List[str] = []

    # link
    if url is not None and not url.has_secure_scheme:
        _add_reason(reasons, INSECURE_LINK)
    if url is not None and url.matched_keywords:
        _add_reason(
            reasons,
            f"The link contains suspicious keywords ({', '.join(url.matched_keywords)}). "
            "Do not click it unless you trust the source.",
        )
    if url is not None and url.is_shortened:
        _add_reason(reasons, SHORTENED_LINK)

    # sender
    if email is not None and email.is_typosquat:
        _add_reason(reasons, LOOKALIKE_DOMAIN)
    if email is not None and email.is_free_provider and email.matched_patterns:
        _add_reason(reasons, ROLE_ACCOUNT.format(patterns=", ".join(email.matched_patterns)))

    # message text
    if content is not None:
        if content.urgency_level is UrgencyLevel.HIGH:
            _add_reason(reasons, HIGH_URGENCY)
        if content.requests_personal_info:
            _add_reason(reasons, PERSONAL_INFO)
        if content.requests_financial_action:
            _add_reason(reasons, FINANCIAL_REQUEST)
        if content.uses_threat_language:
            _add_reason(reasons, THREAT_LANGUAGE)
        if content.grammar_score < weights.poor_grammar_below:
            _add_reason(reasons, POOR_GRAMMAR)

    if not reasons:
        reasons.append(NO_THREATS)
    return reasons


def aggregate(
    url: Optional[UrlSignal] = None,
    email: Optional[EmailSignal] = None,
    content: Optional[ContentSignal] = None,
    weights: ScoringWeights = DEFAULT_RULES.weights,
    thresholds: Thresholds = DEFAULT_RULES.thresholds,
) -> RiskVerdict:
    """
    Combine whichever signals are available into one verdict.

    With no signals at all the verdict is a vacuous ``safe`` with score 0.
    """
    score = score_signals(url, email, content, weights)
    return RiskVerdict(
        classification=classify(score, thresholds),
        score=score,
        url_signal=url,
        email_signal=email,
        content_signal=content,
        recommendations=tuple(build_recommendations(url, email, content, weights)),
    )
