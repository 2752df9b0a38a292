"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for repositories and application use cases.
All use cases are built from infrastructure implementations here; routes
depend only on these dependencies, not on infra directly. Tests replace
get_recipe_repo, get_like_repo and get_title_corpus via dependency_overrides.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from cuisine.application.dtos.search import RecommendationWeights, SearchTuning
from cuisine.application.interfaces.repositories import (
    ILikeRepository,
    IRecipeRepository,
    ITitleCorpus,
)
from cuisine.application.use_cases.recommendations import RecommendationService
from cuisine.application.use_cases.search import RecipeSearchService
from cuisine.core.config import get_settings
from cuisine.infrastructure.cache.redis_cache import CacheService
from cuisine.infrastructure.firebase._rest_client import FirestoreRESTClient
from cuisine.infrastructure.firebase.client import get_firestore_client
from cuisine.infrastructure.firebase.repositories import (
    FirestoreLikeRepository,
    FirestoreRecipeRepository,
)
from cuisine.infrastructure.search.title_corpus import TitleCorpusProvider


def _get_firestore_client_or_raise() -> FirestoreRESTClient:
    """Return Firestore client or raise HTTPException 503 with standard message."""
    client = get_firestore_client()
    if not client:
        raise HTTPException(
            status_code=503,
            detail="Firestore not configured (set FIREBASE_SERVICE_ACCOUNT_KEY, _PATH or FIRESTORE_EMULATOR_HOST)",
        )
    return client


def get_cache(request: Request) -> CacheService | None:
    """Redis cache from app lifespan (None when disabled)."""
    return getattr(request.app.state, "cache", None)


def get_recipe_repo(
    client: Annotated[FirestoreRESTClient, Depends(_get_firestore_client_or_raise)],
) -> IRecipeRepository:
    """Recipe repository bound to RECIPES_COLLECTION."""
    return FirestoreRecipeRepository(client, get_settings().recipes_collection)


def get_like_repo(
    client: Annotated[FirestoreRESTClient, Depends(_get_firestore_client_or_raise)],
    cache: Annotated[CacheService | None, Depends(get_cache)],
) -> ILikeRepository:
    """Like repository bound to LIKES_COLLECTION (like counts cached)."""
    settings = get_settings()
    return FirestoreLikeRepository(
        client,
        settings.likes_collection,
        cache=cache,
        cache_ttl=settings.cache_ttl_like_counts,
    )


def get_title_corpus(
    recipe_repo: Annotated[IRecipeRepository, Depends(get_recipe_repo)],
    cache: Annotated[CacheService | None, Depends(get_cache)],
) -> ITitleCorpus:
    """Known-title corpus for spell correction (cached)."""
    settings = get_settings()
    return TitleCorpusProvider(
        recipe_repo,
        cache=cache,
        ttl=settings.cache_ttl_title_corpus,
        limit=settings.search_title_corpus_limit,
        collection=settings.recipes_collection,
    )


def get_search_service(
    recipe_repo: Annotated[IRecipeRepository, Depends(get_recipe_repo)],
    title_corpus: Annotated[ITitleCorpus, Depends(get_title_corpus)],
) -> RecipeSearchService:
    """Recipe search use case with tuning from settings."""
    return RecipeSearchService(
        recipe_repo, title_corpus, SearchTuning.from_settings(get_settings())
    )


def get_recommendation_service(
    recipe_repo: Annotated[IRecipeRepository, Depends(get_recipe_repo)],
    like_repo: Annotated[ILikeRepository, Depends(get_like_repo)],
) -> RecommendationService:
    """Recommendation use cases with weights from settings."""
    settings = get_settings()
    return RecommendationService(
        recipe_repo,
        like_repo,
        RecommendationWeights.from_settings(settings),
        catalog_limit=settings.search_title_corpus_limit,
    )
