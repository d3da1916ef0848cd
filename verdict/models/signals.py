"""Signals produced by the external analyzer for a single moderation call."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any


class Likelihood(Enum):
    """Ordinal likelihood reported by the safe-search classifier.

    The member value is the severity used for threshold comparisons.
    """

    UNKNOWN = 0
    VERY_UNLIKELY = 1
    UNLIKELY = 2
    POSSIBLE = 3
    LIKELY = 4
    VERY_LIKELY = 5

    @property
    def severity(self) -> int:
        return self.value

    @classmethod
    def coerce(cls, value: Any) -> "Likelihood":
        """Resolve any analyzer representation to a member; UNKNOWN if unresolvable.

        Accepts ``None``, a member, an enum-like object with a ``name``, an
        integer code 0-5, or a name string in any case.  Never raises.
        """
        if value is None:
            return cls.UNKNOWN
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.__members__.get(value.strip().upper(), cls.UNKNOWN)
        # bool is an int subclass but never a likelihood code
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                return cls.UNKNOWN
        name = getattr(value, "name", None)
        if isinstance(name, str):
            return cls.__members__.get(name, cls.UNKNOWN)
        return cls.UNKNOWN


@dataclass(frozen=True)
class Signal:
    """A named classification item (image label or text category).

    ``confidence`` is expected in [0, 1] but is not validated here.
    """

    name: str
    confidence: float


@dataclass(frozen=True)
class SafeSearchSignal:
    """Canonical likelihood names for the five safe-search attributes.

    Any likelihood representation is accepted and stored as its canonical name.
    """

    adult: str = "UNKNOWN"
    medical: str = "UNKNOWN"
    spoof: str = "UNKNOWN"
    violence: str = "UNKNOWN"
    racy: str = "UNKNOWN"

    def __post_init__(self) -> None:
        for f in fields(self):
            object.__setattr__(self, f.name, Likelihood.coerce(getattr(self, f.name)).name)

    def as_dict(self) -> dict[str, str]:
        return {
            "adult": self.adult,
            "medical": self.medical,
            "spoof": self.spoof,
            "violence": self.violence,
            "racy": self.racy,
        }


@dataclass(frozen=True)
class SentimentReading:
    """Document sentiment: score in [-1, 1], magnitude >= 0."""

    score: float = 0.0
    magnitude: float = 0.0
