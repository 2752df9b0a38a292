"""Recipe API schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from cuisine.application.dtos.search import RecommendedRecipe
from cuisine.domain.entities.recipe import SearchableItem


class RecipeResponse(BaseModel):
    """Recipe summary as shown in result lists."""

    id: str
    title: str
    category: str | None = Field(default=None, description="Recipe type (stored as 'type')")
    region: str | None = Field(default=None, description="Department code (stored as 'position')")
    images: list[str] = Field(default_factory=list)
    url: str | None = Field(default=None, description="URL slug")

    @classmethod
    def from_item(cls, item: SearchableItem) -> RecipeResponse:
        return cls(
            id=item.id,
            title=item.title,
            category=item.category,
            region=item.region,
            images=list(item.images),
            url=item.url,
        )


class RecipeListResponse(BaseModel):
    """Plain list of recipes (e.g. similar recipes)."""

    items: list[RecipeResponse]


class RecommendedRecipeResponse(RecipeResponse):
    """Recipe with like count and why it was recommended."""

    likes: int = 0
    reasons: list[str] = Field(
        default_factory=list, description="category | region | popular"
    )

    @classmethod
    def from_recommendation(cls, rec: RecommendedRecipe) -> RecommendedRecipeResponse:
        base = RecipeResponse.from_item(rec.item)
        return cls(**base.model_dump(), likes=rec.likes, reasons=list(rec.reasons))


class RecommendationListResponse(BaseModel):
    """Trending or personalized recommendations."""

    items: list[RecommendedRecipeResponse]
