"""Exception hierarchy for moderation calls."""

from __future__ import annotations


class ModerationError(Exception):
    """Base class for all moderation failures."""


class ValidationError(ModerationError):
    """The submitted content is empty or blank.  Never retried."""


class AnalysisError(ModerationError):
    """A mandatory signal could not be obtained; the whole call failed.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, domain: str, cause: str) -> None:
        self.domain = domain
        self.cause = cause
        super().__init__(f"{domain} moderation failed: {cause}")


class SignalUnavailable(ModerationError):
    """An analyzer returned no usable annotation for a signal."""


class ConfigurationError(ModerationError):
    """Invalid configuration or taxonomy data."""
