"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from food_search.adapters.fdc_client import HttpxFdcClient
from food_search.adapters.supabase_food_index import SupabaseFoodIndex
from food_search.config import Settings
from food_search.services.backends import IndexedSearchBackend, LiveSearchBackend
from food_search.services.cache import InMemoryCache
from food_search.services.catalog import FoodCatalogService
from food_search.services.live import FdcLiveProvider
from food_search.services.retrieval import CandidateRetriever
from food_search.services.search import FoodSearchService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    search_service: FoodSearchService
    catalog_service: FoodCatalogService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_index = SupabaseFoodIndex(
        supabase_client,
        table=resolved_settings.foods_index_table,
        trigram_function=resolved_settings.trigram_function,
        populated_threshold=resolved_settings.populated_threshold,
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    cache = InMemoryCache()
    live_provider = FdcLiveProvider(
        fdc_client=fdc_client,
        cache=cache,
        search_ttl_seconds=resolved_settings.live_search_ttl_seconds,
        debug=resolved_settings.search_debug,
        retry_attempts=resolved_settings.live_retry_attempts,
    )
    retriever = CandidateRetriever(
        food_index,
        multiplier=resolved_settings.over_fetch_multiplier,
        cap=resolved_settings.over_fetch_cap,
    )
    search_service = FoodSearchService(
        index_provider=food_index,
        indexed_backend=IndexedSearchBackend(retriever),
        live_backend=LiveSearchBackend(live_provider),
        cache=cache,
        index_status_ttl_seconds=resolved_settings.index_status_ttl_seconds,
        default_limit=resolved_settings.default_limit,
        debug=resolved_settings.search_debug,
    )
    catalog_service = FoodCatalogService(food_index)

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        search_service=search_service,
        catalog_service=catalog_service,
        close_resources=close_resources,
    )
