"""Heuristic detection of foods that contradict the query's intent."""

import re
from collections.abc import Iterable, Mapping

# Fish is a parent of salmon and tuna, so those pairs are not exclusive.
PROTEIN_CONFLICTS: Mapping[str, frozenset[str]] = {
    "chicken": frozenset(
        {"beef", "pork", "turkey", "fish", "salmon", "tuna", "shrimp", "tofu"}
    ),
    "beef": frozenset(
        {"chicken", "pork", "turkey", "fish", "salmon", "tuna", "shrimp", "tofu"}
    ),
    "pork": frozenset(
        {"chicken", "beef", "turkey", "fish", "salmon", "tuna", "shrimp", "tofu"}
    ),
    "turkey": frozenset(
        {"chicken", "beef", "pork", "fish", "salmon", "tuna", "shrimp", "tofu"}
    ),
    "fish": frozenset({"chicken", "beef", "pork", "turkey", "shrimp", "tofu"}),
    "salmon": frozenset(
        {"chicken", "beef", "pork", "turkey", "tuna", "shrimp", "tofu"}
    ),
    "tuna": frozenset(
        {"chicken", "beef", "pork", "turkey", "salmon", "shrimp", "tofu"}
    ),
    "shrimp": frozenset(
        {"chicken", "beef", "pork", "turkey", "fish", "salmon", "tuna", "tofu"}
    ),
    "tofu": frozenset(
        {"chicken", "beef", "pork", "turkey", "fish", "salmon", "tuna", "shrimp"}
    ),
}

ATTRIBUTE_CONFLICTS: Mapping[str, frozenset[str]] = {
    "ground": frozenset(
        {
            "bratwurst",
            "sausage",
            "hot dog",
            "patty",
            "patties",
            "burger",
            "meatball",
            "nugget",
        }
    ),
    "breast": frozenset({"thigh", "wing", "drumstick", "leg"}),
    "white": frozenset({"brown", "wild", "black", "red", "dark meat"}),
    "whole": frozenset(
        {"skim", "nonfat", "fat free", "lowfat", "low fat", "reduced fat"}
    ),
}


def _whole_words(words: frozenset[str]) -> re.Pattern[str]:
    # Plural forms match; substrings of longer words ("prepared") do not.
    alternatives = "|".join(re.escape(word) for word in sorted(words))
    return re.compile(rf"\b(?:{alternatives})(?:e?s)?\b")


_ATTRIBUTE_PATTERNS = {
    term: _whole_words(conflicts) for term, conflicts in ATTRIBUTE_CONFLICTS.items()
}


def is_incompatible(candidate_name_lower: str, query_terms: Iterable[str]) -> bool:
    """Whether a candidate name contradicts a protein or qualifier in the query."""
    terms = tuple(query_terms)
    if _has_protein_conflict(candidate_name_lower, terms):
        return True
    return _has_attribute_conflict(candidate_name_lower, terms)


def _has_protein_conflict(name: str, terms: tuple[str, ...]) -> bool:
    for term in terms:
        conflicts = PROTEIN_CONFLICTS.get(term)
        if not conflicts:
            continue
        for conflict in conflicts:
            if conflict in name and not _listed_as_option(name, conflict):
                return True
    return False


def _has_attribute_conflict(name: str, terms: tuple[str, ...]) -> bool:
    for term in terms:
        pattern = _ATTRIBUTE_PATTERNS.get(term)
        if pattern and pattern.search(name):
            return True
    return False


def _listed_as_option(name: str, conflict: str) -> bool:
    """Names like "chicken or beef" list alternatives rather than a mismatch."""
    return f"or {conflict}" in name or f"{conflict} or" in name
