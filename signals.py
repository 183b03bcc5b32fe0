"""Immutable result types produced by the analyzers and the aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class Reputation(str, Enum):
    GOOD = "good"
    UNKNOWN = "unknown"
    BAD = "bad"


class UrgencyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Classification(str, Enum):
    SAFE = "safe"
    SUSPICIOUS = "suspicious"
    DANGEROUS = "dangerous"


@dataclass(frozen=True)
class UrlSignal:
    is_suspicious: bool = False
    matched_keywords: Tuple[str, ...] = ()
    has_secure_scheme: bool = False
    reputation_hint: Reputation = Reputation.GOOD
    is_shortened: bool = False

    def to_record(self) -> Dict:
        return {
            "is_suspicious": self.is_suspicious,
            "matched_keywords": list(self.matched_keywords),
            "has_secure_scheme": self.has_secure_scheme,
            "reputation_hint": self.reputation_hint.value,
            "is_shortened": self.is_shortened,
        }


@dataclass(frozen=True)
class EmailSignal:
    is_suspicious: bool = False
    domain_reputation: Reputation = Reputation.UNKNOWN
    is_typosquat: bool = False
    is_free_provider: bool = False
    matched_patterns: Tuple[str, ...] = ()

    def to_record(self) -> Dict:
        return {
            "is_suspicious": self.is_suspicious,
            "domain_reputation": self.domain_reputation.value,
            "is_typosquat": self.is_typosquat,
            "is_free_provider": self.is_free_provider,
            "matched_patterns": list(self.matched_patterns),
        }


@dataclass(frozen=True)
class ContentSignal:
    urgency_level: UrgencyLevel = UrgencyLevel.LOW
    requests_personal_info: bool = False
    requests_financial_action: bool = False
    uses_threat_language: bool = False
    grammar_score: int = 100

    def to_record(self) -> Dict:
        return {
            "urgency_level": self.urgency_level.value,
            "requests_personal_info": self.requests_personal_info,
            "requests_financial_action": self.requests_financial_action,
            "uses_threat_language": self.uses_threat_language,
            "grammar_score": self.grammar_score,
        }


# field names per signal, used to emit None placeholders for absent signals
_RECORD_FIELDS = {
    "url": tuple(UrlSignal().to_record()),
    "email": tuple(EmailSignal().to_record()),
    "content": tuple(ContentSignal().to_record()),
}


@dataclass(frozen=True)
class RiskVerdict:
    classification: Classification
    score: int
    url_signal: Optional[UrlSignal] = None
    email_signal: Optional[EmailSignal] = None
    content_signal: Optional[ContentSignal] = None
    recommendations: Tuple[str, ...] = field(default_factory=tuple)

    def to_record(self) -> Dict:
        """
        Flatten the verdict into a JSON-compatible dict.

        Signal fields are prefixed with ``url_``, ``email_`` or ``content_``;
        an absent signal contributes its keys with ``None`` values so every
        record has the same shape (handy for CSV output).
        """
        record: Dict = {
            "classification": self.classification.value,
            "score": self.score,
        }
        signals = {
            "url": self.url_signal,
            "email": self.email_signal,
            "content": self.content_signal,
        }
        for prefix, signal in signals.items():
            values = signal.to_record() if signal is not None else {}
            for name in _RECORD_FIELDS[prefix]:
                record[f"{prefix}_{name}"] = values.get(name)
        record["recommendations"] = list(self.recommendations)
        return record
