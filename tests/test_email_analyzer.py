"""
Tests for email_analyzer: free providers, role-account local parts, typosquatting.
"""

from __future__ import annotations

import pytest

from email_analyzer import analyze_email, analyze_sender_domain, split_address
from rules import EmailRules
from signals import EmailSignal, Reputation
from similarity import ratio


def test_typosquat_of_webmail_domain():
    """gmai1.com is one substitution away from gmail.com."""
    assert 0.7 < ratio("gmai1.com", "gmail.com") < 1.0
    signal = analyze_email("support@gmai1.com")
    assert signal.is_typosquat is True
    assert signal.is_suspicious is True
    assert signal.domain_reputation is Reputation.UNKNOWN
    assert signal.is_free_provider is False
    assert signal.matched_patterns == ("support",)


def test_personal_webmail_address_is_not_suspicious():
    signal = analyze_email("jane.doe@gmail.com")
    assert signal.is_suspicious is False
    assert signal.is_free_provider is True
    assert signal.matched_patterns == ()
    assert signal.is_typosquat is False
    assert signal.domain_reputation is Reputation.GOOD


def test_role_account_on_free_provider_is_suspicious():
    signal = analyze_email("billing@outlook.com")
    assert signal.is_free_provider is True
    assert signal.matched_patterns == ("billing",)
    assert signal.is_suspicious is True
    assert signal.is_typosquat is False


def test_role_account_on_corporate_domain_is_not_suspicious():
    signal = analyze_email("support@paypal.com")
    assert signal.is_suspicious is False
    assert signal.domain_reputation is Reputation.GOOD
    assert signal.matched_patterns == ("support",)


def test_patterns_in_first_occurrence_order():
    signal = analyze_email("security-admin-support@yahoo.com")
    assert signal.matched_patterns == ("security", "admin", "support")


def test_uppercase_input_is_normalized():
    signal = analyze_email("SUPPORT@GMAIL.COM")
    assert signal.is_free_provider is True
    assert signal.matched_patterns == ("support",)
    assert signal.is_suspicious is True


@pytest.mark.parametrize("email", ["not-an-email", "", None, "   "])
def test_missing_at_sign_gives_default_signal(email):
    signal = analyze_email(email)
    assert signal == EmailSignal()
    assert signal.domain_reputation is Reputation.UNKNOWN
    assert not (signal.is_suspicious or signal.is_typosquat or signal.is_free_provider)


def test_split_on_last_at_sign():
    assert split_address("weird@name@PayPal.com") == ("weird@name", "paypal.com")
    assert analyze_email("weird@name@paypal.com").domain_reputation is Reputation.GOOD


def test_display_name_form():
    assert split_address("Support Team <Admin@Paypa1.com>") == ("admin", "paypa1.com")
    signal = analyze_email("Support Team <admin@paypa1.com>")
    assert signal.is_typosquat is True
    assert signal.matched_patterns == ("admin",)


def test_unrelated_domain_is_not_typosquat():
    signal = analyze_email("alice@university.edu")
    assert signal.is_typosquat is False
    assert signal.is_suspicious is False
    assert signal.domain_reputation is Reputation.UNKNOWN


def test_exact_brand_domain_is_never_typosquat():
    for domain in EmailRules().brand_domains:
        assert analyze_email(f"someone@{domain}").is_typosquat is False


def test_free_webmail_domain_is_never_typosquat():
    """Personal addresses on any listed webmail provider are neither lookalikes nor suspicious."""
    for domain in EmailRules().free_providers:
        signal = analyze_email(f"jane@{domain}")
        assert signal.is_typosquat is False, domain
        assert signal.is_suspicious is False, domain
        assert signal.is_free_provider is True


def test_custom_brand_table():
    rules = EmailRules(brand_domains=("acme.com",), free_providers=(), role_words=("ops",))
    signal = analyze_email("ops@acme.co", rules)
    assert signal.is_typosquat is True
    assert signal.matched_patterns == ("ops",)
    assert analyze_email("ops@acme.com", rules).domain_reputation is Reputation.GOOD


def test_sender_domain_only():
    signal = analyze_sender_domain("paypa1.com")
    assert signal.is_typosquat is True
    assert signal.matched_patterns == ()
    assert analyze_sender_domain("@gmail.com").is_free_provider is True
    assert analyze_sender_domain("") == EmailSignal()


@pytest.mark.parametrize(
    "email",
    ["support@gmai1.com", "jane.doe@gmail.com", "billing@outlook.com", "x@example.org", "nope"],
)
def test_suspicious_invariant(email):
    s = analyze_email(email)
    assert s.is_suspicious == ((s.is_free_provider and bool(s.matched_patterns)) or s.is_typosquat)


def test_email_never_marks_reputation_bad():
    for email in ["support@gmai1.com", "admin@paypa1.com", "x@evil.test"]:
        assert analyze_email(email).domain_reputation is not Reputation.BAD
