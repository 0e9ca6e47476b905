"""Live food lookups against USDA FoodData Central."""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from food_search.adapters.fdc_client import FdcClient
from food_search.domain.foods import FoodRecord
from food_search.services.cache import Cache
from food_search.services.enrichment import (
    detect_preparation_method,
    generate_search_terms,
    infer_category,
    is_canonical_food,
    normalize_text,
)
from food_search.services.retrieval import RetrievalError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_NUTRIENT_IDS = {
    "calories": 1008,
    "protein": 1003,
    "fat": 1004,
    "carbs": 1005,
}

LIVE_SERVING_SIZE = 100.0
LIVE_SERVING_UNIT = "g"

LIVE_DATA_TYPES = ("Foundation", "SR Legacy")
LIVE_OVER_FETCH_MULTIPLIER = 3
LIVE_OVER_FETCH_CAP = 200
LONG_DESCRIPTION = 100
SHORT_DESCRIPTION = 30

_IRRELEVANT_PATTERNS = (
    re.compile(r"^snacks?,", re.IGNORECASE),
    re.compile(r"^candies,", re.IGNORECASE),
    re.compile(r"\(baby food\)", re.IGNORECASE),
    re.compile(r"\(infant formula\)", re.IGNORECASE),
    re.compile(r"\(alcoholic\)", re.IGNORECASE),
)

WHOLE_FOOD_KEYWORDS = frozenset(
    {
        "rice", "chicken", "beef", "fish", "turkey", "pork", "salmon", "tuna",
        "egg", "apple", "banana", "oat", "quinoa", "potato", "broccoli",
        "spinach", "carrot", "avocado", "almond", "walnut", "olive", "cheese",
        "milk", "yogurt", "tofu", "lentil", "bean", "pea", "corn", "wheat",
        "barley", "bread", "pasta", "orange", "strawberry", "blueberry",
        "grape", "peach", "pear", "melon", "cucumber", "tomato",
    }
)  # fmt: skip

_DEDUP_KEY = re.compile(r"[^a-z0-9]")

_logger = logging.getLogger(__name__)


class LiveProvider(Protocol):
    """Remote nutrition lookup used when the index has nothing."""

    async def remote_search(
        self, query_text: str, max_rows: int
    ) -> list[dict[str, object]]:
        """Return raw remote food payloads, most relevant first."""


@dataclass
class FdcLiveProvider(LiveProvider):
    """FDC-backed live search with its own relevance filtering and caching."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    debug: bool = False
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def remote_search(
        self, query_text: str, max_rows: int
    ) -> list[dict[str, object]]:
        """Search FDC foods, keeping relevant, de-duplicated results."""
        cache_key = f"fdc:search:{query_text.lower()}:{max_rows}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        page_size = min(max_rows * LIVE_OVER_FETCH_MULTIPLIER, LIVE_OVER_FETCH_CAP)
        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(
                query_text, page_size=page_size, data_types=LIVE_DATA_TYPES
            ),
            action="search",
        )
        raw_foods = payload.get("foods") or []
        foods = [
            food
            for food in raw_foods
            if isinstance(food, dict)
            and is_relevant_food(str(food.get("description", "")), query_text)
        ]
        # sorted() is stable, so FDC order breaks ties.
        foods = sorted(
            foods,
            key=lambda food: live_relevance_score(
                str(food.get("description", "")), query_text
            ),
            reverse=True,
        )
        foods = _deduplicate(foods)[:max_rows]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        if self.debug:
            _logger.info(
                "Live search FDC: query=%s fetched=%s returned=%s",
                query_text,
                len(raw_foods),
                len(foods),
            )
        return foods

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                status_code = _status_code_from_exception(exc)
                _logger.warning(
                    "Live %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    status_code,
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise RetrievalError(f"FDC {action} failed: {exc}") from exc
                await asyncio.sleep(self.retry_delay_seconds)


def live_relevance_score(description: str, query: str) -> int:
    """Relevance of an FDC description to the raw query."""
    description_lower = description.lower()
    query_lower = query.lower()
    terms = query_lower.split()
    score = 0
    if description_lower == query_lower:
        score += 100
    if description_lower.startswith(query_lower):
        score += 50
    if query_lower in description_lower:
        score += 25
    matching = sum(1 for term in terms if term in description_lower)
    if terms and matching == len(terms):
        score += 15
    score += matching * 5
    if len(description) > LONG_DESCRIPTION:
        score -= 10
    if len(description) < SHORT_DESCRIPTION:
        score += 5
    return score


def is_relevant_food(description: str, query: str) -> bool:
    """Drop snacks and other processed foods when the query names a whole food."""
    words = query.lower().split()
    if not any(word in WHOLE_FOOD_KEYWORDS for word in words):
        return True
    return not any(pattern.search(description) for pattern in _IRRELEVANT_PATTERNS)


def _deduplicate(foods: list[dict[str, object]]) -> list[dict[str, object]]:
    seen: set[str] = set()
    unique = []
    for food in foods:
        key = _DEDUP_KEY.sub("", str(food.get("description", "")).lower())
        if key in seen:
            continue
        seen.add(key)
        unique.append(food)
    return unique


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def food_record_from_fdc(payload: dict[str, object]) -> FoodRecord:
    """Map a raw FDC search result onto the index record shape."""
    name = str(payload.get("description", ""))
    data_type = payload.get("dataType")
    macros = _extract_macros(payload.get("foodNutrients") or [])
    return FoodRecord(
        id=int(payload["fdcId"]),
        name=name,
        normalized_name=normalize_text(name),
        category=infer_category(macros["protein"], macros["carbs"], macros["fat"]),
        calories=macros["calories"],
        protein_g=macros["protein"],
        carbs_g=macros["carbs"],
        fat_g=macros["fat"],
        serving_size=LIVE_SERVING_SIZE,
        serving_unit=LIVE_SERVING_UNIT,
        data_type=str(data_type) if data_type else None,
        is_canonical=is_canonical_food(name, str(data_type) if data_type else None),
        preparation_method=detect_preparation_method(name),
        search_terms=generate_search_terms(name),
        brand_name=payload.get("brandOwner"),
    )


def _extract_macros(food_nutrients: list[dict[str, object]]) -> dict[str, float]:
    """Extract calories, protein, fat, carbs from FDC nutrients."""
    values = dict.fromkeys(_NUTRIENT_IDS, 0.0)
    ids_to_keys = {nutrient_id: key for key, nutrient_id in _NUTRIENT_IDS.items()}
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient.get("nutrientId") or nutrient_info.get("id")
        amount = nutrient.get("value", nutrient.get("amount"))
        key = ids_to_keys.get(nutrient_id)
        if key is not None and amount is not None:
            values[key] = float(amount)
    return values
