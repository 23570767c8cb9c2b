"""
Content filtering module.

Detects off-platform contact sharing in free text and screens multi-field
submissions.
"""

from marketguard.filters.content_filter import (
    filter_content,
    get_content_report,
    get_input_warning,
    is_content_safe,
)
from marketguard.filters.moderation import (
    FIELD_TOO_LONG,
    ScreeningConfig,
    screen_fields,
    screening_warning,
)

__all__ = [
    "FIELD_TOO_LONG",
    "ScreeningConfig",
    "filter_content",
    "get_content_report",
    "get_input_warning",
    "is_content_safe",
    "screen_fields",
    "screening_warning",
]
