"""Search request and outcome models."""

from dataclasses import dataclass, field
from enum import StrEnum

from food_search.domain.foods import Category, FoodRecord, ScoredCandidate

SearchResult = ScoredCandidate | FoodRecord


class SearchTier(StrEnum):
    """Provider tier that produced a set of results."""

    INDEX = "index"
    LIVE = "live"
    NONE = "none"


@dataclass(frozen=True)
class NormalizedQuery:
    """Lowercased query text with its derived forms."""

    text: str
    normalized: str
    terms: tuple[str, ...]


@dataclass(frozen=True)
class SearchQuery:
    """A validated search request."""

    query: NormalizedQuery
    category: Category | None
    limit: int


@dataclass(frozen=True)
class TierFailure:
    """A provider failure swallowed at the tier that produced it."""

    tier: SearchTier
    action: str
    error: str


@dataclass
class SearchOutcome:
    """Results of one search along with diagnostics about how they were found."""

    results: list[SearchResult] = field(default_factory=list)
    tier: SearchTier = SearchTier.NONE
    failures: list[TierFailure] = field(default_factory=list)
