"""Google Cloud Vision and Natural Language analyzers.

Requires the ``google`` extra (``pip install verdict[google]``).  Credentials
are resolved the usual Google way; passing ``credentials_path`` sets
``GOOGLE_APPLICATION_CREDENTIALS`` before the client is created.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

from verdict.analyzers.base import ImageAnalyzer, TextAnalyzer
from verdict.engine.normalizer import normalize_safe_search
from verdict.errors import SignalUnavailable
from verdict.models.signals import SafeSearchSignal, SentimentReading, Signal

try:
    from google.cloud import vision
except ImportError:
    vision = None  # type: ignore[assignment]

try:
    from google.cloud import language_v1
except ImportError:
    language_v1 = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

_INSTALL_HINT = "google-cloud-{0} is required. Install it with: pip install 'verdict[google]'"


def _use_credentials(credentials_path: Optional[str]) -> None:
    if credentials_path:
        os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = str(credentials_path)


def _has_field(message: Any, name: str) -> bool:
    """Field presence, not truthiness: an all-UNKNOWN annotation is falsy but present."""
    if hasattr(message, "__contains__"):
        return name in message
    return getattr(message, name, None) is not None


def _raise_on_error(response: Any, signal: str) -> None:
    error = getattr(response, "error", None)
    message = getattr(error, "message", "") if error is not None else ""
    if message:
        raise SignalUnavailable(f"{signal} analysis failed: {message}")


class GoogleVisionAnalyzer(ImageAnalyzer):
    """Safe-search and label detection through Cloud Vision."""

    def __init__(self, credentials_path: Optional[str] = None, client: Any = None) -> None:
        if client is None:
            if vision is None:
                raise RuntimeError(_INSTALL_HINT.format("vision"))
            _use_credentials(credentials_path)
            client = vision.ImageAnnotatorClient()
        self._client = client

    def safe_search(self, content: bytes) -> Optional[SafeSearchSignal]:
        logger.debug("Requesting safe-search detection (%d bytes)", len(content))
        response = self._client.safe_search_detection(image={"content": content})
        _raise_on_error(response, "safe_search")
        if not _has_field(response, "safe_search_annotation"):
            return None
        annotation = response.safe_search_annotation
        return normalize_safe_search(annotation)

    def labels(self, content: bytes) -> list[Signal]:
        logger.debug("Requesting label detection (%d bytes)", len(content))
        response = self._client.label_detection(image={"content": content})
        _raise_on_error(response, "labels")
        return [
            Signal(name=label.description or "", confidence=label.score or 0.0)
            for label in (response.label_annotations or [])
        ]


class GoogleLanguageAnalyzer(TextAnalyzer):
    """Sentiment analysis and content classification through Natural Language."""

    def __init__(self, credentials_path: Optional[str] = None, client: Any = None) -> None:
        if client is None:
            if language_v1 is None:
                raise RuntimeError(_INSTALL_HINT.format("language"))
            _use_credentials(credentials_path)
            client = language_v1.LanguageServiceClient()
        self._client = client

    @staticmethod
    def _document(text: str) -> dict:
        return {"content": text, "type_": "PLAIN_TEXT"}

    def sentiment(self, text: str) -> Optional[SentimentReading]:
        logger.debug("Requesting sentiment analysis (%d chars)", len(text))
        response = self._client.analyze_sentiment(request={"document": self._document(text)})
        document_sentiment = getattr(response, "document_sentiment", None)
        if document_sentiment is None:
            return SentimentReading()
        return SentimentReading(
            score=document_sentiment.score or 0.0,
            magnitude=document_sentiment.magnitude or 0.0,
        )

    def categories(self, text: str) -> list[Signal]:
        logger.debug("Requesting content classification (%d chars)", len(text))
        response = self._client.classify_text(request={"document": self._document(text)})
        return [
            Signal(name=category.name or "", confidence=category.confidence or 0.0)
            for category in (response.categories or [])
        ]
