"""Tests for the indexed and live search backends."""

import asyncio

from food_search.domain.foods import Category
from food_search.domain.search import SearchQuery
from food_search.services.backends import IndexedSearchBackend, LiveSearchBackend
from food_search.services.query import normalize_query
from food_search.services.retrieval import CandidateRetriever
from tests.conftest import FakeLiveProvider, InMemoryFoodIndex, fdc_payload


def _request(
    text: str, category: Category | None = None, limit: int = 10
) -> SearchQuery:
    return SearchQuery(query=normalize_query(text), category=category, limit=limit)


def test_indexed_backend_scores_within_requested_category(
    food_index: InMemoryFoodIndex,
) -> None:
    backend = IndexedSearchBackend(CandidateRetriever(food_index))

    results = backend.search(_request("white rice", "carbs", limit=1))

    assert [result.food.id for result in results] == [1]
    assert results[0].raw_score > 0
    assert food_index.calls == [("full_text_search", ("white rice", "carbs", 3))]


def test_live_backend_passes_request_limit(live_provider: FakeLiveProvider) -> None:
    backend = LiveSearchBackend(live_provider)

    foods = asyncio.run(backend.search(_request("Olive Oil", "fats", limit=3)))

    assert live_provider.calls == [("olive oil", 3)]
    assert [food.id for food in foods] == [103]


def test_live_backend_skips_malformed_payloads() -> None:
    missing_id = {"description": "Rice, mystery", "foodNutrients": []}
    bad_value = {
        "fdcId": 7,
        "description": "Rice, wild, raw",
        "foodNutrients": [{"nutrientId": 1005, "value": "n/a"}],
    }
    provider = FakeLiveProvider(
        payloads=[missing_id, bad_value, fdc_payload(8, "Rice, white", carbs=28)]
    )

    foods = asyncio.run(LiveSearchBackend(provider).search(_request("rice")))

    assert [food.id for food in foods] == [8]
