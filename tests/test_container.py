"""Tests for container wiring."""

import asyncio

from food_search.adapters.supabase_food_index import SupabaseFoodIndex
from food_search.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.search_service is not None
    assert container.catalog_service is not None
    index = container.search_service.index_provider
    assert isinstance(index, SupabaseFoodIndex)
    assert index.table == "usda_foods_index"
    assert container.search_service.default_limit == 25
    asyncio.run(container.close_resources())
