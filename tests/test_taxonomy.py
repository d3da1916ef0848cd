"""Tests for keyword taxonomies and signal matching."""

import tempfile

import pytest
import yaml

from verdict.engine.taxonomy import (
    IMAGE_TAXONOMY,
    TEXT_TAXONOMY,
    Taxonomy,
    TaxonomyDomain,
    load_taxonomies,
    match_signals,
)
from verdict.errors import ConfigurationError
from verdict.models.reasons import ReasonCode
from verdict.models.signals import Signal


def _write_yaml(data) -> str:
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    yaml.dump(data, f)
    f.close()
    return f.name


# --- Image labels ---


def test_no_signals():
    result = match_signals([], IMAGE_TAXONOMY)
    assert result.is_appropriate
    assert result.reasons == ()
    assert result.warnings == ()
    assert result.flags == ()


def test_inappropriate_label_blocks():
    result = match_signals([Signal("Weapon", 0.91)], IMAGE_TAXONOMY)
    assert not result.is_appropriate
    assert result.warnings == ("Detected Weapon content (91.0% confidence)",)
    assert result.reasons == (ReasonCode.SENSITIVE_CONTENT,)
    assert result.flags == ()


def test_label_reason_selection():
    result = match_signals(
        [Signal("Adult content", 0.9), Signal("Violence", 0.8), Signal("Alcoholic beverage", 0.7)],
        IMAGE_TAXONOMY,
    )
    assert result.reasons == (
        ReasonCode.ADULT_CONTENT,
        ReasonCode.VIOLENCE_CONTENT,
        ReasonCode.SENSITIVE_CONTENT,
    )


def test_label_match_is_case_insensitive_substring():
    result = match_signals([Signal("handgun WEAPONRY", 0.6)], IMAGE_TAXONOMY)
    assert not result.is_appropriate


def test_review_label_flags():
    result = match_signals([Signal("Medical", 0.8)], IMAGE_TAXONOMY)
    assert result.is_appropriate
    assert result.flags == ("Contains Medical content (80.0% confidence)",)
    assert result.reasons == (ReasonCode.MEDICAL_CONTENT,)
    assert result.warnings == ()


def test_review_label_without_medical_mention_adds_no_reason():
    result = match_signals([Signal("Emergency vehicle", 0.8)], IMAGE_TAXONOMY)
    assert result.flags == ("Contains Emergency vehicle content (80.0% confidence)",)
    assert result.reasons == ()


def test_confidence_boundary_is_exclusive():
    assert match_signals([Signal("Weapon", 0.5)], IMAGE_TAXONOMY).warnings == ()
    assert match_signals([Signal("Medical", 0.5)], IMAGE_TAXONOMY).flags == ()
    assert len(match_signals([Signal("Weapon", 0.51)], IMAGE_TAXONOMY).warnings) == 1
    assert len(match_signals([Signal("Medical", 0.51)], IMAGE_TAXONOMY).flags) == 1


def test_inappropriate_takes_precedence_over_review():
    # matches both "Blood" and "Medical"
    result = match_signals([Signal("Medical blood test", 0.9)], IMAGE_TAXONOMY)
    assert not result.is_appropriate
    assert result.flags == ()
    assert len(result.warnings) == 1


def test_order_is_preserved():
    result = match_signals(
        [Signal("Health", 0.7), Signal("Drug", 0.6), Signal("Injury", 0.9), Signal("Gambling", 0.8)],
        IMAGE_TAXONOMY,
    )
    assert result.warnings == (
        "Detected Drug content (60.0% confidence)",
        "Detected Gambling content (80.0% confidence)",
    )
    assert result.flags == (
        "Contains Health content (70.0% confidence)",
        "Contains Injury content (90.0% confidence)",
    )


def test_duplicate_reasons_are_kept():
    result = match_signals([Signal("Weapon", 0.9), Signal("Gambling", 0.9)], IMAGE_TAXONOMY)
    assert result.reasons == (ReasonCode.SENSITIVE_CONTENT, ReasonCode.SENSITIVE_CONTENT)


# --- Text categories ---


def test_text_category_reasons():
    result = match_signals(
        [
            Signal("/Adult/Explicit", 0.9),
            Signal("/Violence/Riot", 0.9),
            Signal("/Gambling/Lottery", 0.9),
        ],
        TEXT_TAXONOMY,
    )
    assert not result.is_appropriate
    assert result.reasons == (
        ReasonCode.ADULT_CONTENT,
        ReasonCode.VIOLENCE_CONTENT,
        ReasonCode.SENSITIVE_CONTENT,
    )


def test_text_review_categories():
    result = match_signals(
        [Signal("/Health/Medical Facilities", 0.7), Signal("/Sports/Soccer", 0.8)],
        TEXT_TAXONOMY,
    )
    assert result.is_appropriate
    assert result.flags == (
        "Contains /Health/Medical Facilities content (70.0% confidence)",
        "Contains /Sports/Soccer content (80.0% confidence)",
    )
    assert result.reasons == (ReasonCode.MEDICAL_CONTENT,)


def test_unrelated_category_contributes_nothing():
    result = match_signals([Signal("/Arts & Entertainment/Music", 0.99)], TEXT_TAXONOMY)
    assert result.is_appropriate
    assert result.reasons == ()
    assert result.flags == ()


# --- Configuration ---


def test_overlapping_lists_rejected():
    with pytest.raises(ConfigurationError):
        Taxonomy(domain=TaxonomyDomain.IMAGE, inappropriate=("Blood",), review=("blood",))


def test_load_taxonomies_overrides_one_domain():
    path = _write_yaml(
        {
            "image": {
                "inappropriate": ["Tobacco"],
                "review": ["Crowd"],
                "review_reasons": {"crowd": "HEALTH_REFERENCE"},
            }
        }
    )
    taxonomies = load_taxonomies(path)
    image = taxonomies[TaxonomyDomain.IMAGE]
    assert image.inappropriate == ("Tobacco",)
    assert image.review == ("Crowd",)
    assert image.block_reasons == IMAGE_TAXONOMY.block_reasons
    assert taxonomies[TaxonomyDomain.TEXT] == TEXT_TAXONOMY

    result = match_signals([Signal("Big crowd", 0.8)], image)
    assert result.reasons == (ReasonCode.HEALTH_REFERENCE,)


def test_load_taxonomies_unknown_reason():
    path = _write_yaml({"text": {"block_reasons": {"/Adult/": "NOT_A_CODE"}}})
    with pytest.raises(ConfigurationError):
        load_taxonomies(path)


def test_load_taxonomies_overlap():
    path = _write_yaml({"text": {"inappropriate": ["/Sports/"], "review": ["/sports/"]}})
    with pytest.raises(ConfigurationError):
        load_taxonomies(path)


def test_load_taxonomies_missing_file():
    with pytest.raises(ConfigurationError):
        load_taxonomies("/nonexistent/taxonomy.yaml")


def test_load_taxonomies_scalar_keyword_list_rejected():
    path = _write_yaml({"image": {"inappropriate": "Weapon"}})
    with pytest.raises(ConfigurationError, match="image.inappropriate must be a list"):
        load_taxonomies(path)


def test_load_taxonomies_reason_list_rejected():
    path = _write_yaml({"text": {"review_reasons": ["MEDICAL_CONTENT"]}})
    with pytest.raises(ConfigurationError, match="text.review_reasons"):
        load_taxonomies(path)


def test_load_taxonomies_null_keyword_list_is_empty():
    path = _write_yaml({"image": {"review": None}})
    assert load_taxonomies(path)[TaxonomyDomain.IMAGE].review == ()
