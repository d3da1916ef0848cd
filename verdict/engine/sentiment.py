"""Sentiment bucketing.

The rule table is evaluated top to bottom and the first matching rule
wins.  Several ranges overlap; the order is what resolves them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from verdict.models.reasons import ReasonCode
from verdict.models.result import SentimentVerdict
from verdict.models.signals import SentimentReading

HIGH_MAGNITUDE = 3.0
LOW_MAGNITUDE = 1.0
NEUTRAL_SCORE = 0.2
STRONG_SCORE = 0.5


@dataclass(frozen=True)
class SentimentRule:
    name: str
    applies: Callable[[float, float], bool]
    is_positive: bool
    reason: ReasonCode


SENTIMENT_RULES: tuple[SentimentRule, ...] = (
    # neutral score but heated
    SentimentRule(
        "mixed",
        lambda score, magnitude: abs(score) < NEUTRAL_SCORE and magnitude >= HIGH_MAGNITUDE,
        False,
        ReasonCode.STRONG_LANGUAGE,
    ),
    SentimentRule(
        "very_negative",
        lambda score, magnitude: score <= -STRONG_SCORE and magnitude >= HIGH_MAGNITUDE,
        False,
        ReasonCode.VERY_NEGATIVE,
    ),
    SentimentRule(
        "very_positive",
        lambda score, magnitude: score >= STRONG_SCORE and magnitude >= HIGH_MAGNITUDE,
        True,
        ReasonCode.GENERAL_APPROPRIATE,
    ),
    SentimentRule(
        "neutral",
        lambda score, magnitude: abs(score) < NEUTRAL_SCORE and magnitude < LOW_MAGNITUDE,
        True,
        ReasonCode.GENERAL_APPROPRIATE,
    ),
    SentimentRule(
        "negative",
        lambda score, magnitude: score < -NEUTRAL_SCORE,
        False,
        ReasonCode.INAPPROPRIATE_LANGUAGE,
    ),
    SentimentRule(
        "default",
        lambda score, magnitude: True,
        True,
        ReasonCode.GENERAL_APPROPRIATE,
    ),
)


def classify_sentiment(reading: SentimentReading) -> SentimentVerdict:
    """Return the verdict of the first rule that applies to *reading*."""
    for rule in SENTIMENT_RULES:
        if rule.applies(reading.score, reading.magnitude):
            return SentimentVerdict(
                is_positive=rule.is_positive,
                reasons=(rule.reason,),
                rule=rule.name,
            )
    # the last rule always applies
    raise AssertionError("sentiment rule table is not total")
