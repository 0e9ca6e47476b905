"""Index-time enrichment helpers for food records."""

import re

from food_search.domain.foods import CATEGORIES, Category, FoodRecord

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")

PREPARATION_METHODS = (
    "raw",
    "cooked",
    "fried",
    "baked",
    "grilled",
    "roasted",
    "steamed",
    "boiled",
    "braised",
    "sauteed",
    "poached",
    "broiled",
    "smoked",
    "dried",
    "fresh",
    "frozen",
    "canned",
)

CANONICAL_DATA_TYPES = frozenset({"Foundation", "SR Legacy"})
CANONICAL_MAX_NAME_LENGTH = 45
CANONICAL_MAX_SEGMENTS = 3
MIN_SEARCH_TERM_LENGTH = 3


def normalize_text(value: str) -> str:
    """Lowercase, replace punctuation with spaces and collapse whitespace."""
    stripped = _NON_ALNUM.sub(" ", value.lower())
    return _WHITESPACE.sub(" ", stripped).strip()


def detect_preparation_method(name: str) -> str | None:
    """Return the first known preparation method mentioned in a food name."""
    lowered = name.lower()
    for method in PREPARATION_METHODS:
        if method in lowered:
            return method
    return None


def is_canonical_food(name: str, data_type: str | None) -> bool:
    """Whether a food looks like a simple, single-ingredient reference food."""
    if data_type not in CANONICAL_DATA_TYPES:
        return False
    if len(name) > CANONICAL_MAX_NAME_LENGTH:
        return False
    return len(name.split(",")) <= CANONICAL_MAX_SEGMENTS


def generate_search_terms(name: str) -> tuple[str, ...]:
    """Unique normalized words of a name, in order of first appearance."""
    words = [
        word
        for word in normalize_text(name).split()
        if len(word) >= MIN_SEARCH_TERM_LENGTH
    ]
    return tuple(dict.fromkeys(words))


def infer_category(protein_g: float, carbs_g: float, fat_g: float) -> Category:
    """Pick the dominant macro category, defaulting to protein."""
    if carbs_g > protein_g and carbs_g > fat_g:
        return "carbs"
    if fat_g > protein_g and fat_g > carbs_g:
        return "fats"
    return "protein"


def resolved_category(food: FoodRecord) -> Category:
    """Return the stored category, or one inferred from macros when absent."""
    for category in CATEGORIES:
        if food.category == category:
            return category
    return infer_category(food.protein_g, food.carbs_g, food.fat_g)
