"""Multi-factor relevance scoring for retrieved foods."""

from dataclasses import dataclass, field

from food_search.domain.foods import FoodRecord
from food_search.domain.search import NormalizedQuery
from food_search.services.compound import compound_penalty
from food_search.services.incompatibility import is_incompatible


@dataclass(frozen=True)
class ScoringWeights:
    """Additive weights for each relevance signal."""

    incompatible: int = -100
    exact_match: int = 50
    phrase_match: int = 25
    all_terms: int = 25
    per_term: int = 10
    first_word: int = 30
    preparation_method: int = 20
    canonical: int = 30
    data_type: tuple[tuple[str, int], ...] = (
        ("Foundation", 30),
        ("SR Legacy", 15),
        ("Branded", -5),
    )
    short_name: int = 10
    short_name_max_length: int = 35
    few_segments: int = 5
    max_plain_segments: int = 2
    extra_segment: int = -3

    def data_type_bonus(self, data_type: str | None) -> int:
        for name, bonus in self.data_type:
            if name == data_type:
                return bonus
        return 0


@dataclass
class RelevanceScorer:
    """Scores a candidate food against a normalized query."""

    weights: ScoringWeights = field(default_factory=ScoringWeights)

    def score(self, food: FoodRecord, query: NormalizedQuery) -> int:
        """Return the raw additive score, which may be negative."""
        weights = self.weights
        name = food.normalized_name
        score = 0

        if is_incompatible(name, query.terms):
            score += weights.incompatible

        if name == query.normalized:
            score += weights.exact_match
        if query.text in name or query.text in food.name.lower():
            score += weights.phrase_match

        matching = sum(1 for term in query.terms if term in name)
        if query.terms and matching == len(query.terms):
            score += weights.all_terms
        score += matching * weights.per_term

        name_words = name.split()
        if name_words and query.terms and name_words[0] == query.terms[0]:
            score += weights.first_word

        if food.preparation_method and food.preparation_method.lower() in query.text:
            score += weights.preparation_method

        if food.is_canonical:
            score += weights.canonical
        score += weights.data_type_bonus(food.data_type)

        score -= compound_penalty(name)

        if len(food.name) <= weights.short_name_max_length:
            score += weights.short_name

        segments = len(food.name.split(","))
        if segments <= weights.max_plain_segments:
            score += weights.few_segments
        else:
            score += weights.extra_segment * (segments - weights.max_plain_segments)

        return score
