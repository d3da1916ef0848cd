"""verdict -- deterministic content moderation over cloud classifier signals."""

__version__ = "0.1.0"
