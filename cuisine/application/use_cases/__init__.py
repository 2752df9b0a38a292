"""Application use cases (search, search session, recommendations)."""

from cuisine.application.use_cases.recommendations import RecommendationService
from cuisine.application.use_cases.search import RecipeSearchService, merge_candidates
from cuisine.application.use_cases.search_session import SearchSession

__all__ = [
    "RecipeSearchService",
    "RecommendationService",
    "SearchSession",
    "merge_candidates",
]
