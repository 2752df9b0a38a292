"""DTOs for recipe search results and tuning (no dependency on Firestore)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from cuisine.domain.entities.recipe import SearchableItem
from cuisine.domain.enums import SearchMode

if TYPE_CHECKING:
    from cuisine.core.config import Settings


@dataclass(frozen=True)
class Candidate:
    """A recipe plus its relevance score for one search execution.

    score is None when no free-text matching ran (browse and filter modes).
    """

    item: SearchableItem
    score: float | None = None


@dataclass(frozen=True)
class SearchPage:
    """One page of search results handed back to the caller."""

    items: list[Candidate]
    has_more: bool
    mode: SearchMode
    next_cursor: str | None = None
    corrected_query: str | None = None


@dataclass(frozen=True)
class SearchTuning:
    """Tunable thresholds and multipliers for retrieval and ranking."""

    similarity_threshold: float = 0.5
    containment_bonus: float = 1.0
    prefix_bonus: float = 0.8
    max_correction_distance: int = 2
    keyword_overfetch: int = 4
    fallback_overfetch: int = 3

    @classmethod
    def from_settings(cls, settings: Settings) -> SearchTuning:
        return cls(
            similarity_threshold=settings.search_similarity_threshold,
            containment_bonus=settings.search_containment_bonus,
            prefix_bonus=settings.search_prefix_bonus,
            max_correction_distance=settings.search_max_correction_distance,
            keyword_overfetch=settings.search_keyword_overfetch,
            fallback_overfetch=settings.search_fallback_overfetch,
        )


@dataclass(frozen=True)
class RecommendationWeights:
    """Score weights for personalized recommendations."""

    type_weight: float = 2.0
    region_weight: float = 1.0
    like_weight: float = 0.5

    @classmethod
    def from_settings(cls, settings: Settings) -> RecommendationWeights:
        return cls(
            type_weight=settings.recommend_type_weight,
            region_weight=settings.recommend_region_weight,
            like_weight=settings.recommend_like_weight,
        )


@dataclass
class RecommendedRecipe:
    """Recipe returned by a recommendation use case, with its like count."""

    item: SearchableItem
    likes: int = 0
    reasons: list[str] = field(default_factory=list)
