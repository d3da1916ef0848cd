"""Pydantic models for API request/response serialization.

These models mirror the verdict dataclasses and the flat record produced
by ``verdict.report.summarize``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Signals
# ---------------------------------------------------------------------------


class SignalModel(BaseModel):
    """Mirrors verdict.models.signals.Signal."""

    name: str
    confidence: float = 0.0


class SafeSearchModel(BaseModel):
    """Mirrors verdict.models.signals.SafeSearchSignal.

    Values may be canonical names or integer codes; unknown values are
    treated as UNKNOWN.
    """

    adult: Optional[str | int] = None
    medical: Optional[str | int] = None
    spoof: Optional[str | int] = None
    violence: Optional[str | int] = None
    racy: Optional[str | int] = None


class SentimentModel(BaseModel):
    """Mirrors verdict.models.signals.SentimentReading."""

    score: float = 0.0
    magnitude: float = Field(default=0.0, ge=0.0)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class TextModerationRequest(BaseModel):
    text: str


class ImageModerationRequest(BaseModel):
    image_base64: str


class TextEvaluationRequest(BaseModel):
    """Run the engine on signals the caller already has."""

    text: str
    sentiment: SentimentModel
    categories: list[SignalModel] = Field(default_factory=list)


class ImageEvaluationRequest(BaseModel):
    safe_search: SafeSearchModel = Field(default_factory=SafeSearchModel)
    labels: list[SignalModel] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class ModerationResponse(BaseModel):
    """Mirrors verdict.report.summarize()."""

    kind: str
    isAppropriate: bool
    recommendation: str
    reasons: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    flags: list[str] = Field(default_factory=list)
    safeSearch: Optional[dict[str, str]] = None
    labels: Optional[list[dict]] = None
    text: Optional[str] = None
    sentiment: Optional[dict[str, float]] = None
    categories: Optional[list[dict]] = None
