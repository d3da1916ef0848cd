"""Moderation services: validate, fetch signals, aggregate.

Each signal has an explicit :class:`SignalPolicy`.  A mandatory signal that
cannot be obtained aborts the call with :class:`AnalysisError`; an optional
one degrades to an empty list.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Callable, Optional

from verdict.analyzers.base import ImageAnalyzer, TextAnalyzer
from verdict.engine.aggregator import (
    aggregate_image,
    aggregate_text,
    validate_image_content,
    validate_text_content,
)
from verdict.engine.taxonomy import IMAGE_TAXONOMY, TEXT_TAXONOMY, Taxonomy
from verdict.errors import AnalysisError
from verdict.models.result import ImageModerationResult, TextModerationResult
from verdict.models.signals import SafeSearchSignal, SentimentReading

logger = logging.getLogger(__name__)


class SignalPolicy(Enum):
    MANDATORY = "mandatory"
    OPTIONAL = "optional"


IMAGE_SIGNAL_POLICIES: dict[str, SignalPolicy] = {
    "safe_search": SignalPolicy.MANDATORY,
    "labels": SignalPolicy.OPTIONAL,
}

TEXT_SIGNAL_POLICIES: dict[str, SignalPolicy] = {
    "sentiment": SignalPolicy.MANDATORY,
    "categories": SignalPolicy.OPTIONAL,
}


def fetch_signal(
    domain: str,
    name: str,
    fetch: Callable[[], Any],
    policy: SignalPolicy,
    default: Any = (),
) -> Any:
    """Call *fetch* and apply *policy* to failures.

    Mandatory: an exception or a ``None`` result raises
    ``AnalysisError("<domain> moderation failed: <cause>")``.
    Optional: an exception is logged and *default* is returned.
    """
    try:
        value = fetch()
    except Exception as exc:
        if policy is SignalPolicy.OPTIONAL:
            logger.warning("%s analysis skipped: %s", name, exc)
            return default
        raise AnalysisError(domain, str(exc) or type(exc).__name__) from exc

    if value is None:
        if policy is SignalPolicy.MANDATORY:
            raise AnalysisError(domain, f"{name} analysis failed")
        return default
    return value


class ImageModerationService:
    """Moderates images from safe-search likelihoods and labels."""

    domain = "Image"

    def __init__(
        self,
        analyzer: ImageAnalyzer,
        taxonomy: Taxonomy = IMAGE_TAXONOMY,
        policies: Optional[dict[str, SignalPolicy]] = None,
    ) -> None:
        self.analyzer = analyzer
        self.taxonomy = taxonomy
        self.policies = {**IMAGE_SIGNAL_POLICIES, **(policies or {})}

    def _safe_search(self, content: bytes):
        return fetch_signal(
            self.domain, "safe_search",
            lambda: self.analyzer.safe_search(content),
            self.policies["safe_search"], default=None,
        )

    def _labels(self, content: bytes):
        return fetch_signal(
            self.domain, "labels",
            lambda: self.analyzer.labels(content),
            self.policies["labels"],
        )

    def _finish(self, safe_search, labels) -> ImageModerationResult:
        if safe_search is None:
            # safe-search made optional by the caller and unavailable
            safe_search = SafeSearchSignal()
        result = aggregate_image(safe_search, labels, self.taxonomy)
        logger.info(
            "Image moderated: %s (%d reason(s), %d flag(s))",
            result.recommendation.value, len(result.reasons), len(result.flags),
        )
        return result

    def moderate(self, content: bytes) -> ImageModerationResult:
        validate_image_content(content)
        safe_search = self._safe_search(content)
        labels = self._labels(content)
        return self._finish(safe_search, labels)

    async def moderate_async(self, content: bytes) -> ImageModerationResult:
        """Like :meth:`moderate` but fetches both signals concurrently."""
        validate_image_content(content)
        safe_search, labels = await asyncio.gather(
            asyncio.to_thread(self._safe_search, content),
            asyncio.to_thread(self._labels, content),
        )
        return self._finish(safe_search, labels)


class TextModerationService:
    """Moderates text from document sentiment and content categories."""

    domain = "Text"

    def __init__(
        self,
        analyzer: TextAnalyzer,
        taxonomy: Taxonomy = TEXT_TAXONOMY,
        policies: Optional[dict[str, SignalPolicy]] = None,
    ) -> None:
        self.analyzer = analyzer
        self.taxonomy = taxonomy
        self.policies = {**TEXT_SIGNAL_POLICIES, **(policies or {})}

    def _sentiment(self, text: str):
        return fetch_signal(
            self.domain, "sentiment",
            lambda: self.analyzer.sentiment(text),
            self.policies["sentiment"], default=None,
        )

    def _categories(self, text: str):
        return fetch_signal(
            self.domain, "categories",
            lambda: self.analyzer.categories(text),
            self.policies["categories"],
        )

    def _finish(self, text: str, sentiment, categories) -> TextModerationResult:
        if sentiment is None:
            sentiment = SentimentReading()
        result = aggregate_text(text, sentiment, categories, self.taxonomy)
        logger.info(
            "Text moderated: %s (%d reason(s), %d flag(s))",
            result.recommendation.value, len(result.reasons), len(result.flags),
        )
        return result

    def moderate(self, text: str) -> TextModerationResult:
        validate_text_content(text)
        sentiment = self._sentiment(text)
        categories = self._categories(text)
        return self._finish(text, sentiment, categories)

    async def moderate_async(self, text: str) -> TextModerationResult:
        """Like :meth:`moderate` but fetches both signals concurrently."""
        validate_text_content(text)
        sentiment, categories = await asyncio.gather(
            asyncio.to_thread(self._sentiment, text),
            asyncio.to_thread(self._categories, text),
        )
        return self._finish(text, sentiment, categories)
