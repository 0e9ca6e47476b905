"""Detection of multi-ingredient prepared dishes by name."""

import re

STRONG_PENALTY = 40
MODERATE_PENALTY = 20
WEAK_PENALTY = 10

STRONG_INDICATORS = (
    "medley",
    "mix",
    "mixture",
    "combo",
    "combination",
    "casserole",
    "stew",
    "soup",
    "salad",
    "bowl",
    "platter",
    "plate",
    "meal",
    "dish",
    "entree",
)
MODERATE_INDICATORS = (
    "with",
    "and",
    "plus",
    "topped",
    "stuffed",
    "filled",
    "layered",
    "wrapped",
    "covered",
)
WEAK_INDICATORS = ("style", "flavored", "seasoned", "marinated")

# Checked in order; the first tier with a hit wins.
COMPOUND_TIERS: tuple[tuple[tuple[str, ...], int], ...] = (
    (STRONG_INDICATORS, STRONG_PENALTY),
    (MODERATE_INDICATORS, MODERATE_PENALTY),
    (WEAK_INDICATORS, WEAK_PENALTY),
)


def _word_pattern(words: tuple[str, ...]) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(re.escape(word) for word in words) + r")\b")


_TIER_PATTERNS = tuple(
    (_word_pattern(words), penalty) for words, penalty in COMPOUND_TIERS
)


def compound_penalty(candidate_name_lower: str) -> int:
    """Return the penalty for the highest compound-dish tier a name matches."""
    for pattern, penalty in _TIER_PATTERNS:
        if pattern.search(candidate_name_lower):
            return penalty
    return 0
