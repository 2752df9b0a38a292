"""Recipe API: search, trending and similar recipes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from cuisine.api.v1.dependencies import get_recommendation_service, get_search_service
from cuisine.application.use_cases.recommendations import RecommendationService
from cuisine.application.use_cases.search import RecipeSearchService
from cuisine.core.config import get_settings
from cuisine.core.limiter import limit_recommend, limit_search
from cuisine.domain.value_objects.search import SearchQuery
from cuisine.schemas.recipe import (
    RecipeListResponse,
    RecipeResponse,
    RecommendationListResponse,
    RecommendedRecipeResponse,
)
from cuisine.schemas.search import SearchResponse

router = APIRouter()


@router.get("/search", response_model=SearchResponse)
@limit_search
async def search_recipes(
    request: Request,
    search_svc: Annotated[RecipeSearchService, Depends(get_search_service)],
    q: str = Query("", max_length=200, description="Free text (spelling-tolerant)"),
    category: str | None = Query(None, max_length=100, description="Exact recipe type"),
    region: str | None = Query(None, max_length=10, description="Exact department code"),
    page_size: int | None = Query(None, ge=1, description="Defaults to SEARCH_DEFAULT_PAGE_SIZE"),
    cursor: str | None = Query(None, max_length=2048, description="next_cursor of the previous page"),
):
    """Search recipes by free text and/or category and region.

    With free text: one ranked page (no cursor). Without: title-ordered
    pages, continued with next_cursor.
    """
    settings = get_settings()
    size = min(page_size or settings.search_default_page_size, settings.search_max_page_size)
    query = SearchQuery(free_text=q, filters={"category": category, "region": region})
    page = await search_svc.search(query, size, cursor=cursor)
    return SearchResponse.from_page(page)


@router.get("/trending", response_model=RecommendationListResponse)
@limit_recommend
async def trending_recipes(
    request: Request,
    rec_svc: Annotated[RecommendationService, Depends(get_recommendation_service)],
    limit: int = Query(5, ge=1, le=50),
):
    """Most liked recipes first."""
    items = await rec_svc.trending_recipes(limit=limit)
    return RecommendationListResponse(
        items=[RecommendedRecipeResponse.from_recommendation(r) for r in items]
    )


@router.get("/{recipe_id}/similar", response_model=RecipeListResponse)
@limit_recommend
async def similar_recipes(
    request: Request,
    recipe_id: str,
    rec_svc: Annotated[RecommendationService, Depends(get_recommendation_service)],
    limit: int = Query(5, ge=1, le=50),
):
    """Recipes sharing the category and region of recipe_id (404 if unknown)."""
    items = await rec_svc.similar_recipes(recipe_id, limit=limit)
    return RecipeListResponse(items=[RecipeResponse.from_item(i) for i in items])
