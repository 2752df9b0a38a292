"""Search API schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from cuisine.application.dtos.search import Candidate, SearchPage
from cuisine.domain.enums import SearchMode
from cuisine.schemas.recipe import RecipeResponse


class SearchResultItemResponse(RecipeResponse):
    """Single search hit; score is set only for keyword searches."""

    score: float | None = Field(default=None, description="Relevance in [0, 1]")

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> SearchResultItemResponse:
        base = RecipeResponse.from_item(candidate.item)
        return cls(**base.model_dump(), score=candidate.score)


class SearchResponse(BaseModel):
    """One page of search results."""

    results: list[SearchResultItemResponse]
    mode: SearchMode
    has_more: bool
    next_cursor: str | None = Field(
        default=None, description="Opaque token for the next page (browse/filter only)"
    )
    corrected_query: str | None = Field(
        default=None, description="Query after spell correction (keyword only)"
    )

    @classmethod
    def from_page(cls, page: SearchPage) -> SearchResponse:
        return cls(
            results=[SearchResultItemResponse.from_candidate(c) for c in page.items],
            mode=page.mode,
            has_more=page.has_more,
            next_cursor=page.next_cursor,
            corrected_query=page.corrected_query,
        )
