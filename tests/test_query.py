"""Tests for query normalization."""

from food_search.services.enrichment import normalize_text
from food_search.services.query import is_searchable, normalize_query


def test_normalize_query_lowercases_and_tokenizes() -> None:
    query = normalize_query("  Chicken   Breast ")

    assert query.text == "chicken   breast"
    assert query.normalized == "chicken breast"
    assert query.terms == ("chicken", "breast")


def test_normalize_query_strips_punctuation_for_exact_channel() -> None:
    query = normalize_query("Rice, white (cooked)")

    assert query.normalized == "rice white cooked"
    assert query.terms == ("rice,", "white", "(cooked)")


def test_normalized_query_matches_index_normalization() -> None:
    name = "Chicken Breast, raw"

    assert normalize_query(name).normalized == normalize_text(name)


def test_is_searchable_requires_two_characters() -> None:
    assert not is_searchable(None)
    assert not is_searchable("")
    assert not is_searchable(" a ")
    assert is_searchable("ab")
    assert is_searchable("  egg ")
