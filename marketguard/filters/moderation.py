"""Submission screening built on the content filter.

Offers, products and services carry several free-text fields (name, title,
description). A submission is accepted only when every field is clean; this
module runs the filter over all of them and folds the per-field results into
one ScreeningResult.

Fields longer than `max_field_length` are still filtered in full and are
then flagged as too long, so an oversized field is never accepted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from marketguard.config.settings import DEFAULT_PLATFORM_NAME, get_settings
from marketguard.domain.entities import ContentFilterResult, ScreeningResult
from marketguard.filters.content_filter import filter_content, get_input_warning

logger = logging.getLogger(__name__)

FIELD_TOO_LONG = "Field exceeds maximum length"


@dataclass(frozen=True)
class ScreeningConfig:
    """Runtime screening switches (typically derived from settings)."""

    max_field_length: int = 4096
    platform_name: str = DEFAULT_PLATFORM_NAME
    log_violations: bool = True

    @classmethod
    def from_settings(cls) -> "ScreeningConfig":
        settings = get_settings().content_filter
        return cls(
            max_field_length=settings.max_field_length,
            platform_name=settings.platform_name,
            log_violations=settings.log_violations,
        )


def screen_fields(
    fields: Mapping[str, Optional[str]],
    config: Optional[ScreeningConfig] = None,
) -> ScreeningResult:
    """
    Run the content filter over every field of a submission.

    Args:
        fields: Field name -> text (None is treated as empty)
        config: Screening config; loaded from settings when omitted

    Returns:
        ScreeningResult, clean only if every field is clean
    """
    cfg = config or ScreeningConfig.from_settings()

    field_results: dict[str, ContentFilterResult] = {}
    flagged: list[str] = []
    violations: list[str] = []
    confidence = 0.0

    for name, text in fields.items():
        text = text or ""
        result = filter_content(text)

        if cfg.max_field_length and len(text) > cfg.max_field_length:
            result = result.model_copy(
                update={"is_clean": False, "violations": [*result.violations, FIELD_TOO_LONG]}
            )

        field_results[name] = result

        if result.is_clean:
            continue

        flagged.append(name)
        confidence = max(confidence, result.confidence)
        for label in result.violations:
            if label not in violations:
                violations.append(label)

    if flagged and cfg.log_violations:
        logger.info(
            "Submission flagged: fields=%s, labels=%s, confidence=%.2f",
            flagged,
            violations,
            confidence,
        )
    else:
        logger.debug("Submission screened: fields=%s, flagged=%s", len(field_results), len(flagged))

    return ScreeningResult(
        is_clean=not flagged,
        field_results=field_results,
        flagged_fields=flagged,
        violations=violations,
        confidence=confidence,
    )


def screening_warning(
    result: ScreeningResult,
    config: Optional[ScreeningConfig] = None,
) -> Optional[str]:
    """Warning for the first flagged field, or None for a clean submission."""
    if result.is_clean:
        return None

    cfg = config or ScreeningConfig.from_settings()
    first = result.field_results[result.flagged_fields[0]]
    if first.first_violation == FIELD_TOO_LONG:
        return f"{FIELD_TOO_LONG} ({cfg.max_field_length} characters)"
    return get_input_warning(first, platform_name=cfg.platform_name)
