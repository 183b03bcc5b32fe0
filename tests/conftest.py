"""
Pytest fixtures for the phishing risk scorer tests.
"""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Tests never pick up scorer settings from the developer's shell."""
    for name in (
        "PHISH_LOG_LEVEL",
        "PHISH_DANGEROUS_THRESHOLD",
        "PHISH_SUSPICIOUS_THRESHOLD",
        "PHISH_RULES_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
