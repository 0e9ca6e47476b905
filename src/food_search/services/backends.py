"""Search backends for the indexed corpus and the live remote service."""

import logging
from dataclasses import dataclass, field

from food_search.domain.foods import FoodRecord, ScoredCandidate
from food_search.domain.search import SearchQuery
from food_search.services.enrichment import resolved_category
from food_search.services.live import LiveProvider, food_record_from_fdc
from food_search.services.ranking import rank
from food_search.services.retrieval import CandidateRetriever
from food_search.services.scoring import RelevanceScorer

_logger = logging.getLogger(__name__)


@dataclass
class IndexedSearchBackend:
    """Retrieves candidates from the index, then scores and ranks them."""

    retriever: CandidateRetriever
    scorer: RelevanceScorer = field(default_factory=RelevanceScorer)

    def search(self, request: SearchQuery) -> list[ScoredCandidate]:
        """Return up to ``request.limit`` candidates, best first."""
        query = request.query
        foods = self.retriever.retrieve(query.text, request.category, request.limit)
        scored = [
            ScoredCandidate(food=food, raw_score=self.scorer.score(food, query))
            for food in foods
        ]
        return rank(scored, request.limit)


@dataclass
class LiveSearchBackend:
    """Delegates to the live provider and normalizes its payloads."""

    provider: LiveProvider

    async def search(self, request: SearchQuery) -> list[FoodRecord]:
        """Return live foods in provider order, filtered by inferred category."""
        payloads = await self.provider.remote_search(request.query.text, request.limit)
        foods = _parse_payloads(payloads)
        if request.category is None:
            return foods
        return [food for food in foods if resolved_category(food) == request.category]


def _parse_payloads(payloads: list[dict[str, object]]) -> list[FoodRecord]:
    foods = []
    for payload in payloads:
        try:
            foods.append(food_record_from_fdc(payload))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            _logger.warning(
                "Skipping malformed FDC food: fdc_id=%s error=%r",
                payload.get("fdcId") if isinstance(payload, dict) else None,
                exc,
            )
    return foods
