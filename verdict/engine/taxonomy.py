"""Keyword taxonomies and confidence-gated signal matching.

Each domain has two disjoint keyword lists: *inappropriate* (hard block)
and *review* (soft flag).  A signal matches a keyword when the keyword is a
case-insensitive substring of the signal name and the signal confidence is
strictly above :data:`CONFIDENCE_THRESHOLD`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

import yaml

from verdict.errors import ConfigurationError
from verdict.models.reasons import ReasonCode
from verdict.models.result import CheckResult
from verdict.models.signals import Signal

CONFIDENCE_THRESHOLD = 0.5


class TaxonomyDomain(Enum):
    """Which kind of signal a taxonomy applies to."""

    IMAGE = "image"  # label names, e.g. "Weapon"
    TEXT = "text"  # category paths, e.g. "/Adult/..."


@dataclass(frozen=True)
class Taxonomy:
    """Keyword tables plus the reason codes attached to matches.

    ``block_reasons`` and ``review_reasons`` are ordered
    ``(fragment, code)`` pairs; the first fragment found in the signal
    name decides the reason.  Blocks without a matching fragment fall
    back to ``default_block_reason``; reviews without one get no reason.
    """

    domain: TaxonomyDomain
    inappropriate: tuple[str, ...]
    review: tuple[str, ...]
    block_reasons: tuple[tuple[str, ReasonCode], ...] = ()
    review_reasons: tuple[tuple[str, ReasonCode], ...] = ()
    default_block_reason: ReasonCode = ReasonCode.SENSITIVE_CONTENT

    def __post_init__(self) -> None:
        overlap = {k.lower() for k in self.inappropriate} & {k.lower() for k in self.review}
        if overlap:
            raise ConfigurationError(
                f"{self.domain.value} taxonomy lists overlap: {', '.join(sorted(overlap))}"
            )

    def block_reason(self, name: str) -> ReasonCode:
        return _first_reason(self.block_reasons, name) or self.default_block_reason

    def review_reason(self, name: str) -> Optional[ReasonCode]:
        return _first_reason(self.review_reasons, name)


def _first_reason(
    table: Iterable[tuple[str, ReasonCode]], name: str
) -> Optional[ReasonCode]:
    lowered = name.lower()
    for fragment, code in table:
        if fragment.lower() in lowered:
            return code
    return None


# ---------------------------------------------------------------------------
# Default tables
# ---------------------------------------------------------------------------

IMAGE_TAXONOMY = Taxonomy(
    domain=TaxonomyDomain.IMAGE,
    inappropriate=(
        "Violence",
        "Weapon",
        "Blood",
        "Adult",
        "Explicit",
        "Drug",
        "Gambling",
        "Alcohol",
    ),
    review=("Medical", "Health", "Injury", "Emergency"),
    block_reasons=(
        ("adult", ReasonCode.ADULT_CONTENT),
        ("violence", ReasonCode.VIOLENCE_CONTENT),
    ),
    review_reasons=(
        ("medical", ReasonCode.MEDICAL_CONTENT),
        ("health", ReasonCode.MEDICAL_CONTENT),
    ),
)

TEXT_TAXONOMY = Taxonomy(
    domain=TaxonomyDomain.TEXT,
    inappropriate=(
        "/Adult/",
        "/Violence/",
        "/Drugs/",
        "/Gambling/",
        "/Weapons/",
        "/Explicit/",
        "/Religion/",
    ),
    review=("/Health/", "/Sports/", "/Medical/", "/Emergency/"),
    block_reasons=(
        ("/Adult/", ReasonCode.ADULT_CONTENT),
        ("/Violence/", ReasonCode.VIOLENCE_CONTENT),
    ),
    review_reasons=(
        ("/Medical/", ReasonCode.MEDICAL_CONTENT),
        ("/Health/", ReasonCode.MEDICAL_CONTENT),
    ),
)

DEFAULT_TAXONOMIES: dict[TaxonomyDomain, Taxonomy] = {
    TaxonomyDomain.IMAGE: IMAGE_TAXONOMY,
    TaxonomyDomain.TEXT: TEXT_TAXONOMY,
}


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_taxonomies(path: str | Path) -> dict[TaxonomyDomain, Taxonomy]:
    """Load taxonomy overrides from a YAML file.

    Expected shape::

        image:
          inappropriate: [Weapon, ...]
          review: [Medical, ...]
          block_reasons: {adult: ADULT_CONTENT}
          review_reasons: {medical: MEDICAL_CONTENT}
        text:
          ...

    Domains absent from the file keep their defaults, as do absent keys.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot read taxonomy file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Taxonomy file {path} must contain a mapping")

    taxonomies = dict(DEFAULT_TAXONOMIES)
    for domain in TaxonomyDomain:
        section = data.get(domain.value)
        if section:
            taxonomies[domain] = _taxonomy_from_dict(domain, section, DEFAULT_TAXONOMIES[domain])
    return taxonomies


def _taxonomy_from_dict(domain: TaxonomyDomain, section: dict, base: Taxonomy) -> Taxonomy:
    if not isinstance(section, dict):
        raise ConfigurationError(f"Taxonomy section {domain.value!r} must be a mapping")

    def keywords(key: str, fallback: tuple[str, ...]) -> tuple[str, ...]:
        if key not in section:
            return fallback
        value = section[key] or []
        if not isinstance(value, (list, tuple)):
            raise ConfigurationError(f"{domain.value}.{key} must be a list of keywords")
        return tuple(str(k) for k in value)

    def reasons(key: str, fallback: tuple[tuple[str, ReasonCode], ...]):
        if key not in section:
            return fallback
        value = section[key] or {}
        if not isinstance(value, dict):
            raise ConfigurationError(f"{domain.value}.{key} must map keywords to reason codes")
        try:
            return tuple((str(k), ReasonCode[v]) for k, v in value.items())
        except KeyError as exc:
            raise ConfigurationError(f"Unknown reason code in {domain.value}.{key}: {exc}") from exc

    return Taxonomy(
        domain=domain,
        inappropriate=keywords("inappropriate", base.inappropriate),
        review=keywords("review", base.review),
        block_reasons=reasons("block_reasons", base.block_reasons),
        review_reasons=reasons("review_reasons", base.review_reasons),
        default_block_reason=base.default_block_reason,
    )


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


def _matches(keywords: Iterable[str], signal: Signal) -> bool:
    if not signal.confidence > CONFIDENCE_THRESHOLD:
        return False
    name = signal.name.lower()
    return any(keyword.lower() in name for keyword in keywords)


def _percent(confidence: float) -> str:
    return f"{confidence * 100:.1f}%"


def match_signals(signals: Iterable[Signal], taxonomy: Taxonomy) -> CheckResult:
    """Classify each signal, in order, as blocked, flagged for review, or ignored."""
    is_appropriate = True
    reasons: list[ReasonCode] = []
    warnings: list[str] = []
    flags: list[str] = []

    for signal in signals:
        if _matches(taxonomy.inappropriate, signal):
            is_appropriate = False
            warnings.append(
                f"Detected {signal.name} content ({_percent(signal.confidence)} confidence)"
            )
            reasons.append(taxonomy.block_reason(signal.name))
        elif _matches(taxonomy.review, signal):
            flags.append(
                f"Contains {signal.name} content ({_percent(signal.confidence)} confidence)"
            )
            reason = taxonomy.review_reason(signal.name)
            if reason is not None:
                reasons.append(reason)

    return CheckResult(
        is_appropriate=is_appropriate,
        reasons=tuple(reasons),
        warnings=tuple(warnings),
        flags=tuple(flags),
    )
