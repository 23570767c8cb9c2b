"""
Contact-sharing filter for marketplace free text.

Detects attempts to move a conversation off the platform: social media
handles, phone numbers (in digits or dictated in words), e-mail addresses and
solicitation phrases such as "call me on".

Detection runs in three independent layers whose signals are merged:

1. Contact patterns - every match is counted and redacted.
2. Spelled-out digits - enough distinct digit words suggest a dictated number.
3. Suspicious phrasing - solicitation language and adjacent spelled digits.

Only layer 1 redacts. Layers 2 and 3 flag the text without touching it, so a
message can be unclean while its sanitized copy equals the input.

The short prefix patterns (ig, sc, snap, fb, yt, tg) and the loose
solicitation verbs are broad. Ordinary words such as "scarf", "Ignore" or
"snapshot" are redacted as handles, and any text containing "call", "text"
or "contact" is flagged.

All pattern tables are compiled once at import and shared read-only.
"""

import logging
import re
from typing import Optional

from marketguard.config.settings import DEFAULT_PLATFORM_NAME
from marketguard.domain.entities import ContentFilterResult, ContentReport, ViolationCategory

logger = logging.getLogger(__name__)

REDACTION_TOKEN = "[REMOVED]"

# Number of distinct digit-word patterns that marks a dictated phone number
NUMBER_WORD_THRESHOLD = 4

# Raw match count at which confidence saturates to 1.0
CONFIDENCE_SATURATION = 3

CLEAN_MESSAGE = "Content is clean"
PROHIBITED_MESSAGE = "Content contains prohibited information"


def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


# ================================================================================
# Layer 1: Contact Patterns
# ================================================================================

CONTACT_PATTERNS: tuple[re.Pattern[str], ...] = (
    # Instagram prefix or bare @ glued to a word
    _compile(r"\b(?:ig|insta(?:gram)?|@)\s*[:=\-]?\s*[a-zA-Z0-9._]+\b"),
    # Direct @ mentions
    _compile(r"@[a-zA-Z0-9._]{3,30}"),
    # WhatsApp
    _compile(r"\b(?:whatsapp|wa|watsap|whats\s*app)\s*[:=\-]?\s*[\d+\s()-]+"),
    # International phone shapes
    _compile(r"\+?\d{1,3}[-.\s]?\(?\d{1,4}\)?[-.\s]?\d{1,4}[-.\s]?\d{1,9}"),
    # Nigerian mobile numbers
    _compile(r"\b0[789][01]\d{8}\b"),
    # Bare digit runs with no separators
    _compile(r"\b\d{10,14}\b"),
    # E-mail addresses
    _compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"),
    # Webmail provider mentions
    _compile(r"\b(?:gmail|yahoo|hotmail|outlook)\s*[:=\-]?\s*[a-zA-Z0-9._%+-]+"),
    # Telegram
    _compile(r"\b(?:telegram|tg|t\.me)\s*[:=\-/]?\s*[a-zA-Z0-9_]+"),
    # Twitter / X
    _compile(r"\b(?:twitter|x\.com|@)\s*[:=\-/]?\s*[a-zA-Z0-9_]+"),
    # Facebook
    _compile(r"\b(?:facebook|fb|fb\.com|facebook\.com)\s*[:=\-/]?\s*[a-zA-Z0-9._]+"),
    # TikTok
    _compile(r"\b(?:tiktok|tik\s*tok)\s*[:=\-/]?\s*[a-zA-Z0-9._]+"),
    # Snapchat
    _compile(r"\b(?:snapchat|snap|sc)\s*[:=\-]?\s*[a-zA-Z0-9._]+"),
    # LinkedIn
    _compile(r"\b(?:linkedin|linked\s*in)\s*[:=\-/]?\s*[a-zA-Z0-9._-]+"),
    # YouTube
    _compile(r"\b(?:youtube|yt|youtube\.com)\s*[:=\-/]?\s*[a-zA-Z0-9._-]+"),
    # Social URLs with or without scheme / www
    _compile(
        r"(?:https?://)?(?:www\.)?"
        r"(?:instagram|twitter|facebook|tiktok|snapchat|linkedin|youtube|t\.me|wa\.me)\S*"
    ),
)


# ================================================================================
# Layer 2: Spelled-out Digits
# ================================================================================

NUMBER_WORDS: dict[str, tuple[str, ...]] = {
    "0": ("zero", "oh", "o", "nil", "nought", "ziro", "zéro"),
    "1": ("one", "won", "wan", "wun", "uan", "un"),
    "2": ("two", "too", "to", "tu", "tuu", "due", "doux"),
    "3": ("three", "tree", "tri", "tré", "thri", "tre"),
    "4": ("four", "for", "fore", "fo", "foh", "qua"),
    "5": ("five", "fiv", "faiv", "cinq", "fife"),
    "6": ("six", "siks", "sixx", "sis", "seex"),
    "7": ("seven", "sevin", "sevn", "sept"),
    "8": ("eight", "eit", "ate", "eigt", "ait", "huit"),
    "9": ("nine", "nain", "nin", "neuf", "nayn"),
}

NUMBER_WORD_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    _compile(rf"\b{re.escape(word)}\b") for words in NUMBER_WORDS.values() for word in words
)


# ================================================================================
# Layer 3: Suspicious Phrasing
# ================================================================================

_DIGIT_WORD = r"(?:zero|one|two|three|four|five|six|seven|eight|nine)"

SUSPICIOUS_PATTERNS: tuple[re.Pattern[str], ...] = (
    # "call me", "dm me", "message us at"
    _compile(r"\b(?:call|text|message|dm|pm|hit|reach|contact)\s*(?:me|us)?\s*(?:on|at|via|@|:)?\s*\d*"),
    # "my number is", "our handle:"
    _compile(r"\b(?:my|our)\s*(?:number|digits|contact|handle|username|account)\s*(?:is|are|:)?\s*"),
    # "add me on", "follow us @"
    _compile(r"\b(?:add|follow|find)\s*(?:me|us)\s*(?:on|at|@)?\s*"),
    # Adjacent spelled-out digits
    _compile(rf"\b{_DIGIT_WORD}\s*[-,.\s]*{_DIGIT_WORD}"),
)


# ================================================================================
# Filtering
# ================================================================================


def _add_violation(violations: list[str], category: ViolationCategory) -> None:
    if category.value not in violations:
        violations.append(category.value)


def count_number_words(content: str) -> int:
    """
    Count how many distinct digit-word patterns occur in content.

    Repetitions of one word count once: "five five five five" yields 1.
    """
    return sum(1 for pattern in NUMBER_WORD_PATTERNS if pattern.search(content))


def filter_content(content: Optional[str]) -> ContentFilterResult:
    """
    Classify text for off-platform contact sharing.

    Never raises; empty or None input yields a clean result.

    Args:
        content: Free text typed by a user

    Returns:
        ContentFilterResult with violation labels, sanitized text and a
        heuristic confidence in [0, 1]
    """
    content = content or ""
    violations: list[str] = []
    sanitized = content
    violation_count = 0

    for pattern in CONTACT_PATTERNS:
        for match in pattern.finditer(content):
            _add_violation(violations, ViolationCategory.SOCIAL_HANDLE)
            violation_count += 1
            sanitized = sanitized.replace(match.group(0), REDACTION_TOKEN)

    number_word_count = count_number_words(content)
    if number_word_count >= NUMBER_WORD_THRESHOLD:
        _add_violation(violations, ViolationCategory.PHONE_IN_WORDS)
        violation_count += number_word_count

    for pattern in SUSPICIOUS_PATTERNS:
        if pattern.search(content):
            _add_violation(violations, ViolationCategory.SUSPICIOUS_SHARING)
            violation_count += 1

    confidence = min(violation_count / CONFIDENCE_SATURATION, 1.0)

    if violations:
        logger.debug(
            "Content flagged: labels=%s, raw_matches=%s, confidence=%.2f",
            violations,
            violation_count,
            confidence,
        )

    return ContentFilterResult(
        is_clean=not violations,
        violations=violations,
        sanitized_content=sanitized,
        confidence=confidence,
    )


def is_content_safe(content: Optional[str]) -> bool:
    """Check whether text is free of contact-sharing attempts."""
    return filter_content(content).is_clean


def get_content_report(content: Optional[str]) -> ContentReport:
    """
    Build a human-readable report for text.

    Args:
        content: Text to check

    Returns:
        ContentReport whose message depends only on whether the text is safe
    """
    result = filter_content(content)

    if result.is_clean:
        return ContentReport(safe=True, message=CLEAN_MESSAGE, details=[])

    return ContentReport(safe=False, message=PROHIBITED_MESSAGE, details=list(result.violations))


def get_input_warning(
    result: ContentFilterResult,
    platform_name: str = DEFAULT_PLATFORM_NAME,
) -> Optional[str]:
    """
    Warning shown under a text input while the user types.

    Returns None for clean results.
    """
    if result.is_clean:
        return None
    return f"{result.first_violation} - Please keep communication within {platform_name}"
