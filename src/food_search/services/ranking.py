"""Ordering of scored candidates."""

from collections.abc import Iterable

from food_search.domain.foods import ScoredCandidate


def rank(candidates: Iterable[ScoredCandidate], limit: int) -> list[ScoredCandidate]:
    """Sort by raw score, highest first, keeping retrieval order for ties."""
    ordered = sorted(candidates, key=lambda item: item.raw_score, reverse=True)
    return ordered[:limit]
