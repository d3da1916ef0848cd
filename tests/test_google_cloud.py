"""Tests for the Google Cloud analyzers using stand-in clients."""

from types import SimpleNamespace

import pytest

from verdict.analyzers import google_cloud
from verdict.analyzers.google_cloud import GoogleLanguageAnalyzer, GoogleVisionAnalyzer
from verdict.errors import AnalysisError, SignalUnavailable
from verdict.models.signals import SafeSearchSignal, SentimentReading, Signal
from verdict.service import ImageModerationService


class FakeVisionClient:
    def __init__(self, annotation=None, labels=(), error=""):
        self.annotation = annotation
        self.labels = list(labels)
        self.error = SimpleNamespace(message=error)
        self.calls = []

    def safe_search_detection(self, image):
        self.calls.append(("safe_search", image))
        return SimpleNamespace(safe_search_annotation=self.annotation, error=self.error)

    def label_detection(self, image):
        self.calls.append(("labels", image))
        return SimpleNamespace(label_annotations=self.labels, error=self.error)


class FakeLanguageClient:
    def __init__(self, sentiment=None, categories=(), fail_categories=False):
        self.sentiment = sentiment
        self.categories = list(categories)
        self.fail_categories = fail_categories
        self.requests = []

    def analyze_sentiment(self, request):
        self.requests.append(request)
        return SimpleNamespace(document_sentiment=self.sentiment)

    def classify_text(self, request):
        self.requests.append(request)
        if self.fail_categories:
            raise ValueError("Invalid text content: too few tokens")
        return SimpleNamespace(categories=self.categories)


def test_vision_safe_search_normalizes_codes():
    annotation = SimpleNamespace(adult=5, medical=1, spoof=None, violence=3, racy=0)
    client = FakeVisionClient(annotation=annotation)
    analyzer = GoogleVisionAnalyzer(client=client)
    assert analyzer.safe_search(b"img") == SafeSearchSignal(
        adult="VERY_LIKELY", medical="VERY_UNLIKELY", spoof="UNKNOWN", violence="POSSIBLE", racy="UNKNOWN"
    )
    assert client.calls == [("safe_search", {"content": b"img"})]


def test_vision_missing_annotation_returns_none():
    analyzer = GoogleVisionAnalyzer(client=FakeVisionClient(annotation=None))
    assert analyzer.safe_search(b"img") is None


def test_vision_error_raises():
    annotation = SimpleNamespace(adult=1)
    analyzer = GoogleVisionAnalyzer(client=FakeVisionClient(annotation=annotation, error="Bad image data"))
    with pytest.raises(SignalUnavailable, match="Bad image data"):
        analyzer.safe_search(b"img")


def test_vision_labels():
    labels = [
        SimpleNamespace(description="Weapon", score=0.93),
        SimpleNamespace(description=None, score=None),
    ]
    analyzer = GoogleVisionAnalyzer(client=FakeVisionClient(labels=labels))
    assert analyzer.labels(b"img") == [Signal("Weapon", 0.93), Signal("", 0.0)]


def test_vision_error_through_service():
    client = FakeVisionClient(annotation=SimpleNamespace(adult=1), error="Permission denied")
    service = ImageModerationService(GoogleVisionAnalyzer(client=client))
    with pytest.raises(AnalysisError, match="^Image moderation failed: safe_search analysis failed: Permission denied$"):
        service.moderate(b"img")


def test_language_sentiment():
    client = FakeLanguageClient(sentiment=SimpleNamespace(score=-0.4, magnitude=2.5))
    analyzer = GoogleLanguageAnalyzer(client=client)
    assert analyzer.sentiment("Poor attendance") == SentimentReading(score=-0.4, magnitude=2.5)
    assert client.requests == [{"document": {"content": "Poor attendance", "type_": "PLAIN_TEXT"}}]


def test_language_missing_sentiment_defaults_to_zero():
    analyzer = GoogleLanguageAnalyzer(client=FakeLanguageClient(sentiment=None))
    assert analyzer.sentiment("x") == SentimentReading(score=0.0, magnitude=0.0)


def test_language_categories():
    categories = [SimpleNamespace(name="/Sports/Team Sports", confidence=0.88)]
    analyzer = GoogleLanguageAnalyzer(client=FakeLanguageClient(categories=categories))
    assert analyzer.categories("Match today") == [Signal("/Sports/Team Sports", 0.88)]


def test_language_category_error_propagates():
    analyzer = GoogleLanguageAnalyzer(client=FakeLanguageClient(fail_categories=True))
    with pytest.raises(ValueError):
        analyzer.categories("hi")


class FieldPresenceResponse:
    """Mimics a proto message: falsy when all-default, presence via ``in``."""

    def __init__(self, annotation, present):
        self.safe_search_annotation = annotation
        self.error = SimpleNamespace(message="")
        self._present = present

    def __contains__(self, name):
        return self._present and name == "safe_search_annotation"


class AllUnknownAnnotation:
    adult = medical = spoof = violence = racy = 0

    def __bool__(self):
        return False


class PresenceVisionClient:
    def __init__(self, present):
        self.present = present

    def safe_search_detection(self, image):
        return FieldPresenceResponse(AllUnknownAnnotation(), self.present)


def test_vision_all_unknown_annotation_is_present():
    analyzer = GoogleVisionAnalyzer(client=PresenceVisionClient(present=True))
    assert analyzer.safe_search(b"img") == SafeSearchSignal()


def test_vision_unset_annotation_field_returns_none():
    analyzer = GoogleVisionAnalyzer(client=PresenceVisionClient(present=False))
    assert analyzer.safe_search(b"img") is None


def test_vision_sdk_missing_names_vision(monkeypatch):
    monkeypatch.setattr(google_cloud, "vision", None)
    with pytest.raises(RuntimeError, match="google-cloud-vision"):
        GoogleVisionAnalyzer()


def test_language_sdk_missing_names_language(monkeypatch):
    monkeypatch.setattr(google_cloud, "language_v1", None)
    with pytest.raises(RuntimeError, match="google-cloud-language"):
        GoogleLanguageAnalyzer()
