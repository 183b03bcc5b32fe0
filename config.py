"""Configuration for the phishing risk scorer."""

from dataclasses import dataclass, replace
import logging
import os
from typing import Optional

from rules import RuleSet, Thresholds, load_rules


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    # None means "not configured": the rules file (or the built-in default) decides
    dangerous_threshold: Optional[int] = None
    suspicious_threshold: Optional[int] = None
    rules_path: Optional[str] = None

    def thresholds(self, base: Thresholds = Thresholds()) -> Thresholds:
        """``base`` with each configured threshold on top; unset fields keep the base value."""
        changes = {}
        if self.dangerous_threshold is not None:
            changes["dangerous"] = self.dangerous_threshold
        if self.suspicious_threshold is not None:
            changes["suspicious"] = self.suspicious_threshold
        return replace(base, **changes)

    def rules(self) -> RuleSet:
        """Rule tables from ``rules_path`` (if any) with the configured thresholds on top."""
        rules = load_rules(self.rules_path)
        return replace(rules, thresholds=self.thresholds(rules.thresholds))


def _env_int(name: str, default: Optional[int] = None) -> Optional[int]:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_level(name: str, default: str) -> str:
    value = (os.getenv(name) or "").strip().upper()
    if value and isinstance(logging.getLevelName(value), int):
        return value
    return default


def get_settings() -> Settings:
    """Load settings from environment variables with safe defaults."""
    return Settings(
        log_level=_env_level("PHISH_LOG_LEVEL", Settings.log_level),
        dangerous_threshold=_env_int("PHISH_DANGEROUS_THRESHOLD"),
        suspicious_threshold=_env_int("PHISH_SUSPICIOUS_THRESHOLD"),
        rules_path=os.getenv("PHISH_RULES_PATH") or None,
    )


def configure_logging(level: str = Settings.log_level) -> None:
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")
