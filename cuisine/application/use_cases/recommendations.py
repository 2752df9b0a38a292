"""Recipe recommendations: similar, trending, and personalized.

All three rank a small catalog in memory; the catalog read is bounded by
catalog_limit.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cuisine.application.dtos.search import RecommendationWeights, RecommendedRecipe
from cuisine.core.constants import FIELD_POSITION, FIELD_TITLE, FIELD_TYPE
from cuisine.domain.entities.recipe import SearchableItem
from cuisine.domain.exceptions import ResourceNotFoundException, ValidationException
from cuisine.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from cuisine.application.interfaces.repositories import (
        ILikeRepository,
        IRecipeRepository,
    )

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_LIMIT = 1000


def _check_limit(limit: int) -> None:
    if limit <= 0:
        raise ValidationException(
            f"limit must be a positive integer, got: {limit}", field="limit"
        )


class RecommendationService:
    """Recommendation use cases over recipes and likes."""

    def __init__(
        self,
        recipe_repo: "IRecipeRepository",
        like_repo: "ILikeRepository",
        weights: RecommendationWeights | None = None,
        catalog_limit: int = DEFAULT_CATALOG_LIMIT,
    ) -> None:
        self.recipe_repo = recipe_repo
        self.like_repo = like_repo
        self.weights = weights or RecommendationWeights()
        self.catalog_limit = catalog_limit

    @traced("recommendations.similar")
    async def similar_recipes(
        self, recipe_id: str, limit: int = 5
    ) -> list[SearchableItem]:
        """Recipes of the same category and region, excluding recipe_id itself.

        Both fields must match; a recipe missing either has no similar recipes.

        Raises:
            ResourceNotFoundException: recipe_id does not exist.
        """
        _check_limit(limit)
        recipe = await self.recipe_repo.get_by_id(recipe_id)
        if recipe is None:
            raise ResourceNotFoundException("recipe", recipe_id)
        if not recipe.category or not recipe.region:
            return []
        rows = await self.recipe_repo.query_by_equality_filters(
            {FIELD_TYPE: recipe.category, FIELD_POSITION: recipe.region},
            FIELD_TITLE,
            limit + 1,
        )
        return [r for r in rows if r.id != recipe_id][:limit]

    @traced("recommendations.trending")
    async def trending_recipes(self, limit: int = 5) -> list[RecommendedRecipe]:
        """Most liked recipes first (ties keep title order)."""
        _check_limit(limit)
        counts = await self.like_repo.count_by_recipe()
        catalog = await self.recipe_repo.get_all(FIELD_TITLE, self.catalog_limit)
        ranked = [RecommendedRecipe(item=r, likes=counts.get(r.id, 0)) for r in catalog]
        ranked.sort(key=lambda r: r.likes, reverse=True)
        return ranked[:limit]

    @traced("recommendations.personalized")
    async def personalized_recommendations(
        self, user_id: str, limit: int = 5
    ) -> list[RecommendedRecipe]:
        """Unliked recipes scored from the user's liked categories and regions.

        Score: type_weight if the category was liked, region_weight if the
        region was liked, like_weight per like. Users without likes get the
        trending list.
        """
        _check_limit(limit)
        liked_ids = await self.like_repo.list_recipe_ids_liked_by(user_id)
        if not liked_ids:
            logger.debug("User %s has no likes; falling back to trending", user_id)
            return await self.trending_recipes(limit=limit)

        catalog = await self.recipe_repo.get_all(FIELD_TITLE, self.catalog_limit)
        by_id = {r.id: r for r in catalog}
        liked: list[SearchableItem] = []
        for recipe_id in liked_ids:
            recipe = by_id.get(recipe_id) or await self.recipe_repo.get_by_id(recipe_id)
            if recipe is not None:
                liked.append(recipe)
        liked_types = {r.category for r in liked if r.category}
        liked_regions = {r.region for r in liked if r.region}
        counts = await self.like_repo.count_by_recipe()

        liked_set = set(liked_ids)
        scored: list[tuple[float, RecommendedRecipe]] = []
        for recipe in catalog:
            if recipe.id in liked_set:
                continue
            rec = RecommendedRecipe(item=recipe, likes=counts.get(recipe.id, 0))
            score = 0.0
            if recipe.category in liked_types:
                score += self.weights.type_weight
                rec.reasons.append("category")
            if recipe.region in liked_regions:
                score += self.weights.region_weight
                rec.reasons.append("region")
            if rec.likes:
                score += rec.likes * self.weights.like_weight
                rec.reasons.append("popular")
            scored.append((score, rec))
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [rec for _, rec in scored[:limit]]
