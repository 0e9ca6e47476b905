"""Food search entry point with index-to-live fallback."""

import logging
from dataclasses import dataclass

from food_search.domain.foods import Category
from food_search.domain.search import (
    SearchOutcome,
    SearchQuery,
    SearchResult,
    SearchTier,
    TierFailure,
)
from food_search.services.backends import IndexedSearchBackend, LiveSearchBackend
from food_search.services.cache import Cache
from food_search.services.query import is_searchable, normalize_query
from food_search.services.retrieval import IndexProvider

DEFAULT_LIMIT = 25
INDEX_STATUS_CACHE_KEY = "index:populated"

_logger = logging.getLogger(__name__)


@dataclass
class FoodSearchService:
    """Searches the food index, falling back to the live provider.

    Provider failures never escape ``search``: each tier logs its error and
    is treated as having found nothing, so the worst outcome is an empty
    list.
    """

    index_provider: IndexProvider
    indexed_backend: IndexedSearchBackend
    live_backend: LiveSearchBackend
    cache: Cache
    index_status_ttl_seconds: int = 300
    default_limit: int = DEFAULT_LIMIT
    debug: bool = False

    async def search(
        self,
        query: str,
        category: Category | None = None,
        limit: int | None = None,
    ) -> list[SearchResult]:
        """Return ranked index results, or live results when the index has none."""
        outcome = await self.search_with_diagnostics(query, category, limit)
        return outcome.results

    async def search_with_diagnostics(
        self,
        query: str,
        category: Category | None = None,
        limit: int | None = None,
    ) -> SearchOutcome:
        """Run a search and report which tier answered and what failed."""
        outcome = SearchOutcome()
        if not is_searchable(query):
            return outcome

        request = SearchQuery(
            query=normalize_query(query),
            category=category,
            limit=self.default_limit if limit is None else limit,
        )

        if self._index_is_populated(outcome):
            indexed = self._search_index(request, outcome)
            if indexed:
                outcome.results = list(indexed)
                outcome.tier = SearchTier.INDEX
                if self.debug:
                    _logger.info(
                        "Index search: query=%s results=%s",
                        request.query.text,
                        len(indexed),
                    )
                return outcome
            _logger.info(
                "Index returned no results, falling back to live search: query=%s",
                request.query.text,
            )
        else:
            _logger.info("Index not populated, using live search")

        live = await self._search_live(request, outcome)
        if live:
            outcome.results = list(live)
            outcome.tier = SearchTier.LIVE
        if self.debug:
            _logger.info(
                "Live search: query=%s results=%s", request.query.text, len(live)
            )
        return outcome

    def _index_is_populated(self, outcome: SearchOutcome) -> bool:
        cached = self.cache.get(INDEX_STATUS_CACHE_KEY)
        if isinstance(cached, bool):
            return cached
        try:
            populated = self.index_provider.is_populated()
        except Exception as exc:
            _logger.warning("Index status check failed: %s", exc)
            outcome.failures.append(
                TierFailure(
                    tier=SearchTier.INDEX, action="is_populated", error=str(exc)
                )
            )
            return False
        self.cache.set(
            INDEX_STATUS_CACHE_KEY,
            populated,
            ttl_seconds=self.index_status_ttl_seconds,
        )
        return populated

    def _search_index(
        self, request: SearchQuery, outcome: SearchOutcome
    ) -> list[SearchResult]:
        try:
            return list(self.indexed_backend.search(request))
        except Exception as exc:
            _logger.warning(
                "Index search failed: query=%s error=%s", request.query.text, exc
            )
            outcome.failures.append(
                TierFailure(tier=SearchTier.INDEX, action="search", error=str(exc))
            )
            return []

    async def _search_live(
        self, request: SearchQuery, outcome: SearchOutcome
    ) -> list[SearchResult]:
        try:
            return list(await self.live_backend.search(request))
        except Exception as exc:
            _logger.warning(
                "Live search failed: query=%s error=%s", request.query.text, exc
            )
            outcome.failures.append(
                TierFailure(tier=SearchTier.LIVE, action="search", error=str(exc))
            )
            return []
