"""Pydantic response models for the food search API."""

from pydantic import BaseModel

from food_search.domain.foods import Category, FoodRecord, ScoredCandidate
from food_search.domain.search import SearchResult, SearchTier
from food_search.services.enrichment import resolved_category


class FoodOut(BaseModel):
    """A food as returned to API clients."""

    id: int
    name: str
    category: Category
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    serving_size: float
    serving_unit: str
    data_type: str | None = None
    is_canonical: bool = False
    preparation_method: str | None = None
    brand_name: str | None = None
    source: SearchTier = SearchTier.INDEX
    relevance_score: int | None = None

    @classmethod
    def from_food(
        cls,
        food: FoodRecord,
        source: SearchTier = SearchTier.INDEX,
        relevance_score: int | None = None,
    ) -> "FoodOut":
        """Build a response model from a food record."""
        return cls(
            id=food.id,
            name=food.name,
            category=resolved_category(food),
            calories=food.calories,
            protein_g=food.protein_g,
            carbs_g=food.carbs_g,
            fat_g=food.fat_g,
            serving_size=food.serving_size,
            serving_unit=food.serving_unit,
            data_type=food.data_type,
            is_canonical=food.is_canonical,
            preparation_method=food.preparation_method,
            brand_name=food.brand_name,
            source=source,
            relevance_score=relevance_score,
        )

    @classmethod
    def from_result(cls, result: SearchResult) -> "FoodOut":
        """Build a response model from a scored or live search result."""
        if isinstance(result, ScoredCandidate):
            return cls.from_food(
                result.food,
                source=SearchTier.INDEX,
                relevance_score=result.relevance_score,
            )
        return cls.from_food(result, source=SearchTier.LIVE)


class SearchResponse(BaseModel):
    """Search results and the tier that produced them."""

    tier: SearchTier
    results: list[FoodOut]


class FoodListResponse(BaseModel):
    """A plain list of foods."""

    results: list[FoodOut]
