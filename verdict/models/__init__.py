"""Data models for signals, reason codes and moderation results."""

from verdict.models.reasons import REASON_MESSAGES, ReasonCode, describe
from verdict.models.result import (
    CheckResult,
    ImageModerationResult,
    ImagePayload,
    ModerationResult,
    Recommendation,
    SentimentVerdict,
    TextModerationResult,
    TextPayload,
)
from verdict.models.signals import Likelihood, SafeSearchSignal, SentimentReading, Signal

__all__ = [
    "CheckResult",
    "ImageModerationResult",
    "ImagePayload",
    "Likelihood",
    "ModerationResult",
    "REASON_MESSAGES",
    "ReasonCode",
    "Recommendation",
    "SafeSearchSignal",
    "SentimentReading",
    "SentimentVerdict",
    "Signal",
    "TextModerationResult",
    "TextPayload",
    "describe",
]
