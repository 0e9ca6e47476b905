"""Domain models for indexed food records and search results."""

from dataclasses import dataclass, field
from typing import Literal

Category = Literal["protein", "carbs", "fats"]

CATEGORIES: tuple[Category, ...] = ("protein", "carbs", "fats")


@dataclass(frozen=True)
class FoodRecord:
    """A food as stored in the search index or normalized from a live lookup."""

    id: int
    name: str
    normalized_name: str
    category: str | None
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    serving_size: float
    serving_unit: str
    data_type: str | None
    is_canonical: bool = False
    preparation_method: str | None = None
    search_terms: tuple[str, ...] = field(default_factory=tuple)
    brand_name: str | None = None


@dataclass(frozen=True)
class ScoredCandidate:
    """A retrieved food paired with its relevance score for one query."""

    food: FoodRecord
    raw_score: int

    @property
    def relevance_score(self) -> int:
        """Score exposed to callers, floored at zero."""
        return max(0, self.raw_score)
