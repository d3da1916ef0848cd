"""Pure decision logic: normalization, matching, classification, aggregation."""

from verdict.engine.aggregator import (
    aggregate_image,
    aggregate_text,
    check_safe_search,
    combine_checks,
    derive_recommendation,
)
from verdict.engine.normalizer import likelihood_name, severity
from verdict.engine.sentiment import classify_sentiment
from verdict.engine.taxonomy import Taxonomy, TaxonomyDomain, load_taxonomies, match_signals

__all__ = [
    "Taxonomy",
    "TaxonomyDomain",
    "aggregate_image",
    "aggregate_text",
    "check_safe_search",
    "classify_sentiment",
    "combine_checks",
    "derive_recommendation",
    "likelihood_name",
    "load_taxonomies",
    "match_signals",
    "severity",
]
