"""Signal producers consumed by the moderation services."""

from verdict.analyzers.base import ImageAnalyzer, TextAnalyzer
from verdict.analyzers.fixture import FixtureImageAnalyzer, FixtureTextAnalyzer

__all__ = [
    "FixtureImageAnalyzer",
    "FixtureTextAnalyzer",
    "ImageAnalyzer",
    "TextAnalyzer",
]
