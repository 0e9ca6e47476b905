"""Supabase implementation of the food search index."""

from dataclasses import dataclass

from supabase import Client

from food_search.domain.foods import Category, FoodRecord
from food_search.services.retrieval import (
    IndexProvider,
    RetrievalError,
    UnsupportedCapabilityError,
)

DEFAULT_TABLE = "usda_foods_index"
DEFAULT_TRIGRAM_FUNCTION = "search_foods_trigram"
POPULATED_THRESHOLD = 100

# PostgREST reports an unknown RPC as PGRST202 (HTTP 404).
_MISSING_FUNCTION_CODES = frozenset({"PGRST202", "404", "42883"})


@dataclass
class SupabaseFoodIndex(IndexProvider):
    """Supabase-backed food index with full-text and trigram search."""

    client: Client
    table: str = DEFAULT_TABLE
    trigram_function: str = DEFAULT_TRIGRAM_FUNCTION
    populated_threshold: int = POPULATED_THRESHOLD

    def full_text_search(
        self, query_text: str, category: Category | None, max_rows: int
    ) -> list[FoodRecord]:
        """Search the tsvector column in websearch mode."""
        request = self.client.table(self.table).select("*")
        if category:
            request = request.eq("category", category)
        request = request.text_search(
            "search_vector",
            query_text,
            options={"type": "web_search", "config": "english"},
        ).limit(max_rows)
        try:
            response = request.execute()
        except Exception as exc:
            raise RetrievalError(f"Full-text search failed: {exc}") from exc
        return [_parse_food(row) for row in response.data or []]

    def trigram_search(
        self, query_text: str, category: Category | None, max_rows: int
    ) -> list[FoodRecord]:
        """Call the trigram similarity stored procedure."""
        try:
            response = self.client.rpc(
                self.trigram_function,
                {
                    "search_query": query_text,
                    "search_category": category,
                    "max_results": max_rows,
                },
            ).execute()
        except Exception as exc:
            if str(getattr(exc, "code", "")) in _MISSING_FUNCTION_CODES:
                raise UnsupportedCapabilityError(
                    f"{self.trigram_function} is not available"
                ) from exc
            raise RetrievalError(f"Trigram search failed: {exc}") from exc
        return [_parse_food(row) for row in response.data or []]

    def is_populated(self) -> bool:
        """Whether the index holds more foods than the threshold."""
        try:
            response = (
                self.client.table(self.table)
                .select("fdc_id", count="exact", head=True)
                .execute()
            )
        except Exception as exc:
            raise RetrievalError(f"Index status check failed: {exc}") from exc
        return (response.count or 0) > self.populated_threshold

    def get_food(self, fdc_id: int) -> FoodRecord | None:
        """Return a food by FDC id, if present."""
        try:
            response = (
                self.client.table(self.table)
                .select("*")
                .eq("fdc_id", fdc_id)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise RetrievalError(f"Food lookup failed: {exc}") from exc
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def list_canonical_foods(self, category: Category, limit: int) -> list[FoodRecord]:
        """Return canonical foods in a category."""
        try:
            response = (
                self.client.table(self.table)
                .select("*")
                .eq("category", category)
                .eq("is_canonical", True)
                .limit(limit)
                .execute()
            )
        except Exception as exc:
            raise RetrievalError(f"Canonical food listing failed: {exc}") from exc
        return [_parse_food(row) for row in response.data or []]


def _parse_food(row: dict[str, object]) -> FoodRecord:
    """Parse an index row into a domain model."""
    search_terms = row.get("search_terms") or []
    return FoodRecord(
        id=int(row["fdc_id"]),
        name=str(row.get("name", "")),
        normalized_name=str(row.get("normalized_name", "")),
        category=row.get("category"),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein") or 0.0),
        carbs_g=float(row.get("carbs") or 0.0),
        fat_g=float(row.get("fat") or 0.0),
        serving_size=float(row.get("serving_size") or 100.0),
        serving_unit=str(row.get("serving_unit") or "g"),
        data_type=row.get("data_type"),
        is_canonical=bool(row.get("is_canonical", False)),
        preparation_method=row.get("preparation_method"),
        search_terms=tuple(str(term) for term in search_terms),
    )
