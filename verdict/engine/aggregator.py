"""Fold independent partial checks into one moderation verdict."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from verdict.engine.normalizer import is_triggered
from verdict.engine.sentiment import classify_sentiment
from verdict.engine.taxonomy import IMAGE_TAXONOMY, TEXT_TAXONOMY, Taxonomy, match_signals
from verdict.errors import ValidationError
from verdict.models.reasons import ReasonCode
from verdict.models.result import (
    CheckResult,
    ImageModerationResult,
    ImagePayload,
    Recommendation,
    SentimentVerdict,
    TextModerationResult,
    TextPayload,
)
from verdict.models.signals import SafeSearchSignal, SentimentReading, Signal

# (attribute, reason, blocks publication)
SAFE_SEARCH_CHECKS: tuple[tuple[str, ReasonCode, bool], ...] = (
    ("adult", ReasonCode.ADULT_CONTENT, True),
    ("violence", ReasonCode.VIOLENCE_CONTENT, True),
    ("medical", ReasonCode.MEDICAL_CONTENT, False),
    ("racy", ReasonCode.ADULT_CONTENT, True),
)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_image_content(content: Optional[bytes]) -> None:
    if not content:
        raise ValidationError("Image content cannot be empty")


def validate_text_content(text: Optional[str]) -> None:
    if text is None or not text.strip():
        raise ValidationError("Text content cannot be empty")


# ---------------------------------------------------------------------------
# Partial checks
# ---------------------------------------------------------------------------


def check_safe_search(safe_search: SafeSearchSignal) -> CheckResult:
    """Direct safe-search check: POSSIBLE or stronger triggers a warning.

    Adult, violence and racy block publication; medical only adds a reason
    and a warning.  Spoof is ignored.
    """
    is_appropriate = True
    reasons: list[ReasonCode] = []
    warnings: list[str] = []

    for attribute, reason, blocks in SAFE_SEARCH_CHECKS:
        likelihood = getattr(safe_search, attribute)
        if not is_triggered(likelihood):
            continue
        if blocks:
            is_appropriate = False
        reasons.append(reason)
        warnings.append(f"Detected {attribute} content ({likelihood})")

    return CheckResult(
        is_appropriate=is_appropriate,
        reasons=tuple(reasons),
        warnings=tuple(warnings),
    )


def sentiment_check(verdict: SentimentVerdict) -> CheckResult:
    return CheckResult(is_appropriate=verdict.is_positive, reasons=verdict.reasons)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def derive_recommendation(is_appropriate: bool, flags: Sequence[str]) -> Recommendation:
    if not is_appropriate:
        return Recommendation.INAPPROPRIATE
    if flags:
        return Recommendation.NEEDS_REVIEW
    return Recommendation.APPROPRIATE


def combine_checks(*checks: CheckResult) -> CheckResult:
    """AND the appropriateness flags and concatenate everything else in order."""
    return CheckResult(
        is_appropriate=all(c.is_appropriate for c in checks),
        reasons=tuple(r for c in checks for r in c.reasons),
        warnings=tuple(w for c in checks for w in c.warnings),
        flags=tuple(f for c in checks for f in c.flags),
    )


def aggregate_image(
    safe_search: SafeSearchSignal,
    labels: Iterable[Signal] = (),
    taxonomy: Taxonomy = IMAGE_TAXONOMY,
) -> ImageModerationResult:
    """Build the image verdict; safe-search findings precede label findings."""
    labels = tuple(labels)
    combined = combine_checks(check_safe_search(safe_search), match_signals(labels, taxonomy))
    return ImageModerationResult(
        is_appropriate=combined.is_appropriate,
        warnings=combined.warnings,
        flags=combined.flags,
        reasons=combined.reasons,
        recommendation=derive_recommendation(combined.is_appropriate, combined.flags),
        payload=ImagePayload(safe_search=safe_search, labels=labels),
    )


def aggregate_text(
    text: str,
    sentiment: SentimentReading,
    categories: Iterable[Signal] = (),
    taxonomy: Taxonomy = TEXT_TAXONOMY,
) -> TextModerationResult:
    """Build the text verdict; category findings precede the sentiment reason."""
    validate_text_content(text)
    categories = tuple(categories)
    combined = combine_checks(
        match_signals(categories, taxonomy),
        sentiment_check(classify_sentiment(sentiment)),
    )
    return TextModerationResult(
        is_appropriate=combined.is_appropriate,
        warnings=combined.warnings,
        flags=combined.flags,
        reasons=combined.reasons,
        recommendation=derive_recommendation(combined.is_appropriate, combined.flags),
        payload=TextPayload(text=text, sentiment=sentiment, categories=categories),
    )
