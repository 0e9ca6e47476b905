"""Direct food lookups and category suggestions from the index."""

import logging
import random
from dataclasses import dataclass, field

from food_search.domain.foods import Category, FoodRecord
from food_search.services.retrieval import IndexProvider

SUGGESTION_POOL_MULTIPLIER = 3

_logger = logging.getLogger(__name__)


@dataclass
class FoodCatalogService:
    """Read-only access to individual indexed foods."""

    provider: IndexProvider
    rng: random.Random = field(default_factory=random.Random)

    def get_food(self, fdc_id: int) -> FoodRecord | None:
        """Return an indexed food by FDC id, or None if missing or unreachable."""
        try:
            return self.provider.get_food(fdc_id)
        except Exception:
            _logger.exception("Food lookup failed: fdc_id=%s", fdc_id)
            return None

    def suggest(self, category: Category, limit: int = 10) -> list[FoodRecord]:
        """Return a random sample of canonical foods in a category."""
        try:
            pool = self.provider.list_canonical_foods(
                category, limit * SUGGESTION_POOL_MULTIPLIER
            )
        except Exception:
            _logger.exception("Suggestion lookup failed: category=%s", category)
            return []
        return self.rng.sample(pool, min(limit, len(pool)))
