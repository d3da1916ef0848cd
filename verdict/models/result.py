"""Moderation verdicts.

A verdict is either an :class:`ImageModerationResult` or a
:class:`TextModerationResult`; each carries only its own payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from verdict.models.reasons import ReasonCode
from verdict.models.signals import SafeSearchSignal, SentimentReading, Signal


class Recommendation(Enum):
    """Final publication recommendation."""

    APPROPRIATE = "APPROPRIATE"
    NEEDS_REVIEW = "NEEDS_REVIEW"
    INAPPROPRIATE = "INAPPROPRIATE"


@dataclass(frozen=True)
class CheckResult:
    """Partial verdict produced by one independent check."""

    is_appropriate: bool = True
    reasons: tuple[ReasonCode, ...] = ()
    warnings: tuple[str, ...] = ()
    flags: tuple[str, ...] = ()


@dataclass(frozen=True)
class SentimentVerdict:
    """Bucket chosen by the sentiment rule table."""

    is_positive: bool
    reasons: tuple[ReasonCode, ...]
    rule: str = ""  # name of the rule that fired


@dataclass(frozen=True)
class ImagePayload:
    safe_search: SafeSearchSignal = field(default_factory=SafeSearchSignal)
    labels: tuple[Signal, ...] = ()


@dataclass(frozen=True)
class TextPayload:
    text: str
    sentiment: SentimentReading = field(default_factory=SentimentReading)
    categories: tuple[Signal, ...] = ()


@dataclass(frozen=True)
class _VerdictBase:
    is_appropriate: bool
    warnings: tuple[str, ...]
    flags: tuple[str, ...]
    reasons: tuple[ReasonCode, ...]
    recommendation: Recommendation

    def __post_init__(self) -> None:
        if not self.is_appropriate:
            expected = Recommendation.INAPPROPRIATE
        elif self.flags:
            expected = Recommendation.NEEDS_REVIEW
        else:
            expected = Recommendation.APPROPRIATE
        if self.recommendation is not expected:
            raise ValueError(
                f"recommendation {self.recommendation.value} is inconsistent "
                f"with is_appropriate={self.is_appropriate} and {len(self.flags)} flag(s)"
            )


@dataclass(frozen=True)
class ImageModerationResult(_VerdictBase):
    """Verdict for an image."""

    payload: ImagePayload = field(default_factory=ImagePayload)

    kind = "image"


@dataclass(frozen=True)
class TextModerationResult(_VerdictBase):
    """Verdict for a block of text."""

    payload: TextPayload = field(default_factory=lambda: TextPayload(text=""))

    kind = "text"


ModerationResult = Union[ImageModerationResult, TextModerationResult]
