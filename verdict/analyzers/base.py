"""Collaborator contracts.

An analyzer wraps whatever remote classifier produces the signals.  It may
raise any exception; the service decides per signal whether that aborts
the call or degrades to an empty result.
"""

from __future__ import annotations

from typing import Optional

from verdict.models.signals import SafeSearchSignal, SentimentReading, Signal


class ImageAnalyzer:
    """Produces safe-search likelihoods and labels for an image."""

    def safe_search(self, content: bytes) -> Optional[SafeSearchSignal]:
        raise NotImplementedError

    def labels(self, content: bytes) -> list[Signal]:
        raise NotImplementedError


class TextAnalyzer:
    """Produces document sentiment and content categories for text."""

    def sentiment(self, text: str) -> Optional[SentimentReading]:
        raise NotImplementedError

    def categories(self, text: str) -> list[Signal]:
        raise NotImplementedError
