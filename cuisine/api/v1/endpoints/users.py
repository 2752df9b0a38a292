"""User API: personalized recommendations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from cuisine.api.v1.dependencies import get_recommendation_service
from cuisine.application.use_cases.recommendations import RecommendationService
from cuisine.core.limiter import limit_recommend
from cuisine.schemas.recipe import RecommendationListResponse, RecommendedRecipeResponse

router = APIRouter()


@router.get("/{user_id}/recommendations", response_model=RecommendationListResponse)
@limit_recommend
async def user_recommendations(
    request: Request,
    user_id: str,
    rec_svc: Annotated[RecommendationService, Depends(get_recommendation_service)],
    limit: int = Query(5, ge=1, le=50),
):
    """Recipes scored from the user's liked categories and regions (trending if none)."""
    items = await rec_svc.personalized_recommendations(user_id, limit=limit)
    return RecommendationListResponse(
        items=[RecommendedRecipeResponse.from_recommendation(r) for r in items]
    )
