"""Pydantic request/response schemas for the API."""

from cuisine.schemas.health import HealthResponse, ReadinessResponse
from cuisine.schemas.recipe import (
    RecipeListResponse,
    RecipeResponse,
    RecommendationListResponse,
    RecommendedRecipeResponse,
)
from cuisine.schemas.search import SearchResponse, SearchResultItemResponse

__all__ = [
    "HealthResponse",
    "ReadinessResponse",
    "RecipeListResponse",
    "RecipeResponse",
    "RecommendationListResponse",
    "RecommendedRecipeResponse",
    "SearchResponse",
    "SearchResultItemResponse",
]
