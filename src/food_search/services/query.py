"""Query normalization."""

from food_search.domain.search import NormalizedQuery
from food_search.services.enrichment import normalize_text

MIN_QUERY_LENGTH = 2


def normalize_query(raw: str) -> NormalizedQuery:
    """Lowercase and tokenize a raw query string."""
    text = raw.strip().lower()
    return NormalizedQuery(
        text=text,
        normalized=normalize_text(text),
        terms=tuple(term for term in text.split() if term),
    )


def is_searchable(raw: str | None) -> bool:
    """Whether a raw query is long enough to be worth a provider call."""
    return raw is not None and len(raw.strip()) >= MIN_QUERY_LENGTH
