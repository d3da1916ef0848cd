"""Analyzers that replay recorded signals instead of calling a service.

Used by the ``verdict replay`` harness and by tests.  Any signal listed in
``fail`` raises :class:`~verdict.errors.SignalUnavailable` when requested.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from verdict.analyzers.base import ImageAnalyzer, TextAnalyzer
from verdict.engine.normalizer import normalize_safe_search
from verdict.errors import SignalUnavailable
from verdict.models.signals import SafeSearchSignal, SentimentReading, Signal


def signals_from_records(records: Iterable[Any]) -> list[Signal]:
    """Convert ``{name, confidence}`` mappings (or Signals) to Signals."""
    signals = []
    for record in records or []:
        if isinstance(record, Signal):
            signals.append(record)
        else:
            signals.append(
                Signal(
                    name=str(record.get("name") or ""),
                    confidence=float(record.get("confidence") or 0.0),
                )
            )
    return signals


class FixtureImageAnalyzer(ImageAnalyzer):
    def __init__(
        self,
        safe_search: Any = None,
        labels: Iterable[Any] = (),
        fail: Iterable[str] = (),
    ) -> None:
        self._safe_search = safe_search
        self._labels = signals_from_records(labels)
        self._fail = set(fail)

    def _check(self, signal: str) -> None:
        if signal in self._fail:
            raise SignalUnavailable(f"{signal} analysis unavailable")

    def safe_search(self, content: bytes) -> Optional[SafeSearchSignal]:
        self._check("safe_search")
        if self._safe_search is None:
            return None
        if isinstance(self._safe_search, SafeSearchSignal):
            return self._safe_search
        return normalize_safe_search(self._safe_search)

    def labels(self, content: bytes) -> list[Signal]:
        self._check("labels")
        return list(self._labels)


class FixtureTextAnalyzer(TextAnalyzer):
    def __init__(
        self,
        sentiment: Any = None,
        categories: Iterable[Any] = (),
        fail: Iterable[str] = (),
    ) -> None:
        self._sentiment = sentiment
        self._categories = signals_from_records(categories)
        self._fail = set(fail)

    def _check(self, signal: str) -> None:
        if signal in self._fail:
            raise SignalUnavailable(f"{signal} analysis unavailable")

    def sentiment(self, text: str) -> Optional[SentimentReading]:
        self._check("sentiment")
        if self._sentiment is None:
            return None
        if isinstance(self._sentiment, SentimentReading):
            return self._sentiment
        return SentimentReading(
            score=float(self._sentiment.get("score") or 0.0),
            magnitude=float(self._sentiment.get("magnitude") or 0.0),
        )

    def categories(self, text: str) -> list[Signal]:
        self._check("categories")
        return list(self._categories)
