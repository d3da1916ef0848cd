"""Likelihood normalization.

Analyzers report likelihoods as protobuf enum members, raw integer codes,
canonical strings, or not at all.  Everything is reduced to one of the
canonical :class:`~verdict.models.signals.Likelihood` names.
"""

from __future__ import annotations

from typing import Any

from verdict.models.signals import Likelihood, SafeSearchSignal

SEVERITY_TABLE: dict[str, int] = {member.name: member.severity for member in Likelihood}

# POSSIBLE or stronger
TRIGGER_SEVERITY = Likelihood.POSSIBLE.severity


def likelihood_name(value: Any) -> str:
    """Return the canonical likelihood name for *value*.

    Accepts ``None``, a :class:`Likelihood`, any enum-like object with a
    ``name`` attribute, an integer code 0-5, or a string.  Anything that
    cannot be resolved maps to ``"UNKNOWN"``.  Never raises.
    """
    return Likelihood.coerce(value).name


def severity(value: Any) -> int:
    """Severity 0-5 for any likelihood representation."""
    return SEVERITY_TABLE[likelihood_name(value)]


def is_triggered(value: Any) -> bool:
    """True when *value* is POSSIBLE or stronger."""
    return severity(value) >= TRIGGER_SEVERITY


def normalize_safe_search(annotation: Any) -> SafeSearchSignal:
    """Build a :class:`SafeSearchSignal` from a mapping or attribute object."""
    def read(attribute: str) -> Any:
        if isinstance(annotation, dict):
            return annotation.get(attribute)
        return getattr(annotation, attribute, None)

    return SafeSearchSignal(
        adult=likelihood_name(read("adult")),
        medical=likelihood_name(read("medical")),
        spoof=likelihood_name(read("spoof")),
        violence=likelihood_name(read("violence")),
        racy=likelihood_name(read("racy")),
    )
