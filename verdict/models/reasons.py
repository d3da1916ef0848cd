"""Reason codes and their display messages.

Codes are the stable identifiers compared by the engine and by callers;
``REASON_MESSAGES`` holds the human-readable wording and can change freely.
"""

from __future__ import annotations

from enum import Enum


class ReasonCode(Enum):
    """Why a verdict was reached."""

    # Appropriate
    GENERAL_APPROPRIATE = "GENERAL_APPROPRIATE"
    SPORTS_APPROPRIATE = "SPORTS_APPROPRIATE"

    # Review
    STRONG_LANGUAGE = "STRONG_LANGUAGE"
    INJURY_REFERENCE = "INJURY_REFERENCE"
    HEALTH_REFERENCE = "HEALTH_REFERENCE"

    # Inappropriate
    VERY_NEGATIVE = "VERY_NEGATIVE"
    INAPPROPRIATE_LANGUAGE = "INAPPROPRIATE_LANGUAGE"
    UNSAFE_BEHAVIOR = "UNSAFE_BEHAVIOR"

    # Category-based
    ADULT_CONTENT = "ADULT_CONTENT"
    VIOLENCE_CONTENT = "VIOLENCE_CONTENT"
    SENSITIVE_CONTENT = "SENSITIVE_CONTENT"
    MEDICAL_CONTENT = "MEDICAL_CONTENT"


REASON_MESSAGES: dict[ReasonCode, str] = {
    ReasonCode.GENERAL_APPROPRIATE: "Content appears appropriate",
    ReasonCode.SPORTS_APPROPRIATE: "Contains appropriate sports-related content",
    ReasonCode.STRONG_LANGUAGE: "Contains strong competitive language",
    ReasonCode.INJURY_REFERENCE: "Contains injury-related content",
    ReasonCode.HEALTH_REFERENCE: "Contains health-related content",
    ReasonCode.VERY_NEGATIVE: "Contains very negative content",
    ReasonCode.INAPPROPRIATE_LANGUAGE: "Contains inappropriate language",
    ReasonCode.UNSAFE_BEHAVIOR: "Contains references to unsafe behavior",
    ReasonCode.ADULT_CONTENT: "Contains adult content",
    ReasonCode.VIOLENCE_CONTENT: "Contains violent content",
    ReasonCode.SENSITIVE_CONTENT: "Contains sensitive content",
    ReasonCode.MEDICAL_CONTENT: "Contains medical content",
}


def describe(code: ReasonCode) -> str:
    """Return the display message for *code*, falling back to its name."""
    return REASON_MESSAGES.get(code, code.name)
