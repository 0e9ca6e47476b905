"""Candidate retrieval from the food search index."""

import logging
from dataclasses import dataclass
from typing import Protocol

from food_search.domain.foods import Category, FoodRecord

_logger = logging.getLogger(__name__)

OVER_FETCH_MULTIPLIER = 3
OVER_FETCH_CAP = 200


class RetrievalError(RuntimeError):
    """A provider could not be reached or returned an error."""


class UnsupportedCapabilityError(RetrievalError):
    """The provider does not offer the requested kind of search."""


class IndexProvider(Protocol):
    """Read interface for the indexed food corpus."""

    def full_text_search(
        self, query_text: str, category: Category | None, max_rows: int
    ) -> list[FoodRecord]:
        """Return foods containing every query term."""

    def trigram_search(
        self, query_text: str, category: Category | None, max_rows: int
    ) -> list[FoodRecord]:
        """Return foods ordered by string similarity to the query."""

    def is_populated(self) -> bool:
        """Whether the index holds enough foods to be worth searching."""

    def get_food(self, fdc_id: int) -> FoodRecord | None:
        """Return a food by FDC id, if present."""

    def list_canonical_foods(self, category: Category, limit: int) -> list[FoodRecord]:
        """Return canonical foods in a category."""


def over_fetch_limit(
    limit: int,
    multiplier: int = OVER_FETCH_MULTIPLIER,
    cap: int = OVER_FETCH_CAP,
) -> int:
    """Number of rows to fetch so the scorer has enough to choose from."""
    return min(limit * multiplier, cap)


@dataclass
class CandidateRetriever:
    """Fetches unscored candidates, falling back to similarity search."""

    provider: IndexProvider
    multiplier: int = OVER_FETCH_MULTIPLIER
    cap: int = OVER_FETCH_CAP

    def retrieve(
        self, query_text: str, category: Category | None, limit: int
    ) -> list[FoodRecord]:
        """Return up to the over-fetch limit of candidates for a query.

        Errors from the full-text search propagate. The similarity fallback
        only runs when full-text search succeeds with no rows; it asks for
        ``limit`` rows, and its own failures yield an empty list.
        """
        max_rows = over_fetch_limit(limit, self.multiplier, self.cap)
        foods = self.provider.full_text_search(query_text, category, max_rows)
        if foods:
            return foods[:max_rows]
        return self._trigram_fallback(query_text, category, limit)

    def _trigram_fallback(
        self, query_text: str, category: Category | None, limit: int
    ) -> list[FoodRecord]:
        try:
            foods = self.provider.trigram_search(query_text, category, limit)
        except UnsupportedCapabilityError as exc:
            _logger.warning("Trigram search not available: %s", exc)
            return []
        except Exception:
            _logger.exception("Trigram fallback failed: query=%s", query_text)
            return []
        return foods[:limit]
