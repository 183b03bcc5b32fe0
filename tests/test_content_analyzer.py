"""
Tests for content_analyzer: urgency levels, threat / personal-info / financial language and
the grammar heuristic.
"""

from __future__ import annotations

from content_analyzer import analyze_content, grammar_score, matched_words
from rules import ContentRules
from signals import ContentSignal, UrgencyLevel

PHISH_SUBJECT = "Urgent: Verify Account Now"
PHISH_BODY = (
    "Dear customer, we will suspend your account. Send your password for immediate "
    "verification. Immediate action is required."
)


def test_phishing_message_flags():
    signal = analyze_content(PHISH_SUBJECT, PHISH_BODY)
    assert signal.urgency_level is UrgencyLevel.HIGH
    assert signal.requests_personal_info is True
    assert signal.uses_threat_language is True
    assert signal.requests_financial_action is False


def test_empty_input():
    signal = analyze_content("", "")
    assert signal == ContentSignal()
    assert signal.urgency_level is UrgencyLevel.LOW
    assert signal.grammar_score == 100
    assert not (signal.requests_personal_info or signal.requests_financial_action or signal.uses_threat_language)


def test_none_input_is_treated_as_empty():
    assert analyze_content(None, None) == ContentSignal()


def test_single_urgency_word_is_medium():
    assert analyze_content("Reminder", "Please reply asap.").urgency_level is UrgencyLevel.MEDIUM


def test_repeated_urgency_word_counts_once():
    """Presence, not frequency: one word repeated stays medium."""
    signal = analyze_content("urgent", "urgent urgent urgent")
    assert signal.urgency_level is UrgencyLevel.MEDIUM


def test_three_distinct_urgency_words_is_high():
    assert analyze_content("URGENT", "Reply NOW, IMMEDIATELY.").urgency_level is UrgencyLevel.HIGH


def test_whole_word_matching():
    """'now' inside 'know' and 'pin' inside 'spinning' do not count."""
    signal = analyze_content("Hello", "I know the spinning class starts later.")
    assert signal.urgency_level is UrgencyLevel.LOW
    assert signal.requests_personal_info is False


def test_financial_request():
    signal = analyze_content("Invoice", "Please complete the wire transfer to our new bank account.")
    assert signal.requests_financial_action is True


def test_benign_message():
    signal = analyze_content("Team lunch", "See you at the cafe on Friday. Bring your ideas.")
    assert signal == ContentSignal()


def test_grammar_penalties():
    # one misspelling, one lowercase sentence start, one run of spaces
    assert grammar_score("Please recieve the file.  thanks") == 70


def test_grammar_checks_use_original_case():
    assert grammar_score("Hello there. Thanks for the update! See you.") == 100


def test_grammar_score_floor():
    assert grammar_score("a" + "  b" * 20) == 0


def test_poor_grammar_in_message():
    signal = analyze_content("notice", "we recieve your acount.  please verfy adress.")
    assert signal.grammar_score == 40


def test_html_body_is_reduced_to_visible_text():
    body = (
        "<html><body><p>Your account is <b>suspended</b>.</p>"
        "<script>var password = 'x';</script></body></html>"
    )
    signal = analyze_content("", body)
    assert signal.uses_threat_language is True
    assert signal.requests_personal_info is False


def test_custom_rules():
    rules = ContentRules(
        urgency_words=("hurry",),
        threat_words=(),
        personal_info_words=("shoe size",),
        financial_words=(),
        grammar_checks=(("exclaim", r"!!"),),
        high_urgency_count=1,
    )
    signal = analyze_content("Hurry!!", "Tell us your shoe size", rules)
    assert signal.urgency_level is UrgencyLevel.HIGH
    assert signal.requests_personal_info is True
    assert signal.grammar_score == 90


def test_matched_words_list_order_and_distinct():
    assert matched_words("act now, right now", ("now", "act now", "now")) == ("now", "act now")


def test_idempotent():
    assert analyze_content(PHISH_SUBJECT, PHISH_BODY) == analyze_content(PHISH_SUBJECT, PHISH_BODY)


def test_subject_and_body_are_graded_separately():
    # a sentence ending the subject and a lowercase body start are two lines, not one run-on sentence
    signal = analyze_content("Your invoice is attached.", "thanks for your business")
    assert signal.grammar_score == 100
    assert grammar_score("Your invoice is attached.", "thanks for your business") == 100
    assert grammar_score("Your invoice is attached.\nthanks for your business") == 90
