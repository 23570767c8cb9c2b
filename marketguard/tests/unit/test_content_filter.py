"""
Unit tests for the content filter.

Tests the three detection layers, redaction, confidence and the convenience wrappers.
"""

import pytest

from marketguard.domain.entities import ContentFilterResult, ViolationCategory
from marketguard.filters.content_filter import (
    CONTACT_PATTERNS,
    NUMBER_WORD_PATTERNS,
    NUMBER_WORDS,
    REDACTION_TOKEN,
    count_number_words,
    filter_content,
    get_content_report,
    get_input_warning,
    is_content_safe,
)

SOCIAL = ViolationCategory.SOCIAL_HANDLE.value
PHONE_WORDS = ViolationCategory.PHONE_IN_WORDS.value
SUSPICIOUS = ViolationCategory.SUSPICIOUS_SHARING.value

CLEAN_TEXTS = [
    "Lovely bread baked fresh daily",
    "Great quality shoes delivered quickly",
    "Thanks, the cake was delicious",
]

SAMPLE_TEXTS = CLEAN_TEXTS + [
    "",
    "Call me on 08012345678",
    "one two three four",
    "Follow @shop_lagos for deals",
    "Send it to jane@example.org please",
    "whatsapp: +234 801 234 5678",
    "see instagram.com/shop",
]


class TestPatternTables:
    """Tests for the precompiled pattern tables."""

    def test_one_pattern_per_rendering(self) -> None:
        """Every digit rendering gets its own compiled pattern."""
        total = sum(len(words) for words in NUMBER_WORDS.values())
        assert len(NUMBER_WORD_PATTERNS) == total

    def test_tables_are_immutable(self) -> None:
        """Pattern tables are tuples shared across calls."""
        assert isinstance(CONTACT_PATTERNS, tuple)
        assert isinstance(NUMBER_WORD_PATTERNS, tuple)


class TestCleanContent:
    """Tests for text without contact details."""

    @pytest.mark.parametrize("text", CLEAN_TEXTS)
    def test_plain_text_is_clean(self, text: str) -> None:
        """Letters-only text without platform words passes untouched."""
        result = filter_content(text)
        assert result.is_clean is True
        assert result.violations == []
        assert result.sanitized_content == text
        assert result.confidence == 0.0

    def test_empty_text(self) -> None:
        """Empty text yields a clean result."""
        result = filter_content("")
        assert result.is_clean is True
        assert result.sanitized_content == ""

    def test_none_text(self) -> None:
        """None is treated as empty text instead of raising."""
        result = filter_content(None)
        assert result.is_clean is True
        assert result.sanitized_content == ""


class TestContactPatterns:
    """Tests for layer-1 contact patterns."""

    def test_phone_with_solicitation(self) -> None:
        """A Nigerian number after 'call me on' is flagged and redacted."""
        result = filter_content("Call me on 08012345678")
        assert result.is_clean is False
        assert result.violations == [SOCIAL, SUSPICIOUS]
        assert "08012345678" not in result.sanitized_content
        assert result.sanitized_content == f"Call me on {REDACTION_TOKEN}"
        assert result.confidence == 1.0

    def test_direct_mention(self) -> None:
        """@handles are redacted and folded into one label."""
        result = filter_content("Follow @shop_lagos for deals")
        assert result.violations == [SOCIAL]
        assert result.sanitized_content == f"Follow {REDACTION_TOKEN} for deals"
        assert result.confidence == pytest.approx(1 / 3)

    def test_instagram_prefix(self) -> None:
        """Platform-prefixed handles are detected."""
        result = filter_content("ig: fashionhub")
        assert SOCIAL in result.violations
        assert "fashionhub" not in result.sanitized_content

    @pytest.mark.parametrize(
        "text",
        [
            "Send it to jane@example.org please",
            "jane.doe@mail.co",
            "ADMIN@SHOP.NG",
        ],
    )
    def test_email_is_flagged_as_social_handle(self, text: str) -> None:
        """Bare e-mail addresses are flagged under the social handle label."""
        result = filter_content(text)
        assert result.is_clean is False
        assert SOCIAL in result.violations

    def test_whatsapp_number(self) -> None:
        """WhatsApp phrasing takes the number with it."""
        result = filter_content("whatsapp: +234 801 234 5678")
        assert result.is_clean is False
        assert "5678" not in result.sanitized_content

    def test_social_url(self) -> None:
        """Bare social URLs are detected and redacted."""
        result = filter_content("see instagram.com/shop")
        assert result.is_clean is False
        assert "instagram" not in result.sanitized_content.lower()

    def test_case_insensitive(self) -> None:
        """Detection ignores case."""
        assert filter_content("TELEGRAM: bigdeals").is_clean is False
        assert filter_content("telegram: bigdeals").is_clean is False

    def test_labels_are_not_duplicated(self) -> None:
        """Many matches of one category yield a single label."""
        result = filter_content("@abc @def @ghi")
        assert result.violations == [SOCIAL]

    @pytest.mark.parametrize(
        "text",
        [
            "Call me on 08012345678",
            "Follow @shop_lagos for deals",
            "@abc and @abcdef",
            "Send it to jane@example.org please",
        ],
    )
    def test_matched_text_never_survives(self, text: str) -> None:
        """No layer-1 match is left in the sanitized text."""
        result = filter_content(text)
        for pattern in CONTACT_PATTERNS:
            for match in pattern.finditer(text):
                assert match.group(0) not in result.sanitized_content

    @pytest.mark.parametrize(
        "text, sanitized",
        [
            ("I love this scarf", "I love this [REMOVED]"),
            ("Ignore the delay", "[REMOVED] the delay"),
            ("snapshot of the menu", "[REMOVED] of the menu"),
        ],
    )
    def test_short_prefixes_flag_ordinary_words(self, text: str, sanitized: str) -> None:
        """Known false positives: words starting with sc, ig or snap read as handles."""
        result = filter_content(text)
        assert result.is_clean is False
        assert result.violations == [SOCIAL]
        assert result.sanitized_content == sanitized


class TestNumberWords:
    """Tests for the spelled-out digit layer."""

    def test_four_distinct_words_trigger(self) -> None:
        """Four distinct digit words mark a dictated phone number."""
        result = filter_content("one two three four")
        assert PHONE_WORDS in result.violations
        assert count_number_words("one two three four") == 4

    def test_repeated_word_counts_once(self) -> None:
        """Repeating one digit word does not reach the threshold."""
        assert count_number_words("five five five five") == 1
        result = filter_content("five five five five")
        assert PHONE_WORDS not in result.violations

    def test_alternate_spellings(self) -> None:
        """Verbal renderings in other spellings count too."""
        assert count_number_words("wan tuu tri foh") == 4
        assert PHONE_WORDS in filter_content("wan, tuu, tri, foh").violations

    def test_number_words_do_not_redact(self) -> None:
        """Flagging by digit words leaves the text as typed."""
        text = "one two three four"
        result = filter_content(text)
        assert result.is_clean is False
        assert result.sanitized_content == text


class TestSuspiciousPhrasing:
    """Tests for the suspicious phrasing layer."""

    @pytest.mark.parametrize(
        "text",
        [
            "dm me",
            "my number is",
            "add me on",
            "five five",
        ],
    )
    def test_phrases_are_flagged(self, text: str) -> None:
        """Solicitation phrases and adjacent digit words are flagged."""
        result = filter_content(text)
        assert result.violations == [SUSPICIOUS]
        assert result.sanitized_content == text

    def test_label_order_follows_detection(self) -> None:
        """Labels are listed in the order their layers detected them."""
        result = filter_content("one two three four")
        assert result.violations == [PHONE_WORDS, SUSPICIOUS]


class TestConfidence:
    """Tests for the confidence heuristic."""

    def test_monotonic_in_match_count(self) -> None:
        """More raw matches never lower confidence."""
        scores = [filter_content(t).confidence for t in ("@abc", "@abc @def", "@abc @def @ghi")]
        assert scores == pytest.approx([1 / 3, 2 / 3, 1.0])
        assert scores == sorted(scores)

    def test_saturates_at_one(self) -> None:
        """Confidence never exceeds 1.0."""
        result = filter_content("@abc @def @ghi @jkl call me on 08012345678")
        assert result.confidence == 1.0

    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_result_invariants(self, text: str) -> None:
        """Clean iff no violations; clean text is returned unchanged."""
        result = filter_content(text)
        assert 0.0 <= result.confidence <= 1.0
        assert result.is_clean == (not result.violations)
        assert len(result.violations) == len(set(result.violations))
        if result.is_clean:
            assert result.sanitized_content == text


class TestWrappers:
    """Tests for is_content_safe, get_content_report and get_input_warning."""

    def test_is_content_safe(self) -> None:
        """is_content_safe mirrors is_clean."""
        assert is_content_safe("Lovely bread baked fresh daily") is True
        assert is_content_safe("Call me on 08012345678") is False

    def test_report_for_clean_text(self) -> None:
        """Clean text gives the fixed clean message."""
        report = get_content_report("Lovely bread baked fresh daily")
        assert report.safe is True
        assert report.message == "Content is clean"
        assert report.details == []

    def test_report_for_flagged_text(self) -> None:
        """Flagged text lists the violations as details."""
        report = get_content_report("Call me on 08012345678")
        assert report.safe is False
        assert report.message == "Content contains prohibited information"
        assert report.details == [SOCIAL, SUSPICIOUS]

    def test_input_warning(self) -> None:
        """The warning names the first violation and the platform."""
        result = filter_content("Follow @shop_lagos for deals")
        assert get_input_warning(result) == (
            "Social media handle detected - Please keep communication within String"
        )
        assert get_input_warning(result, platform_name="Bazaar").endswith("within Bazaar")

    def test_no_warning_for_clean_result(self) -> None:
        """Clean results produce no warning."""
        result = ContentFilterResult(is_clean=True, sanitized_content="hi")
        assert get_input_warning(result) is None
