"""Application DTOs (read models and tuning values)."""

from cuisine.application.dtos.search import (
    Candidate,
    RecommendationWeights,
    RecommendedRecipe,
    SearchPage,
    SearchTuning,
)

__all__ = [
    "Candidate",
    "RecommendationWeights",
    "RecommendedRecipe",
    "SearchPage",
    "SearchTuning",
]
