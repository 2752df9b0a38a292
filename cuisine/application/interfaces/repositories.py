"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain objects only; no infrastructure imports.
Implementations raise RetrievalFailedException on store I/O errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from cuisine.domain.entities.recipe import SearchableItem
    from cuisine.domain.value_objects.search import PageCursor


# Recipe repository interface
class IRecipeRepository(Protocol):
    """Protocol for the recipe document store (bound to one collection)."""

    async def query_by_field_contains_any(
        self,
        field: str,
        values: list[str],
        order_by: str,
        limit: int,
    ) -> list[SearchableItem]:
        """Return recipes whose array field contains any of values, ordered, capped at limit."""

    async def query_by_equality_filters(
        self,
        filters: dict[str, str],
        order_by: str,
        limit: int,
        cursor: PageCursor | None = None,
    ) -> list[SearchableItem]:
        """Return recipes matching every field == value, ordered, after cursor if given."""

    async def get_all(
        self,
        order_by: str,
        limit: int,
        cursor: PageCursor | None = None,
    ) -> list[SearchableItem]:
        """Return recipes ordered by order_by (then id), after cursor if given."""

    async def get_by_id(self, recipe_id: str) -> SearchableItem | None:
        """Return recipe by ID or None."""

    async def update_search_fields(
        self, recipe_id: str, keywords: list[str], url: str
    ) -> None:
        """Overwrite the keyword index and URL slug of one recipe."""


# Like repository interface
class ILikeRepository(Protocol):
    """Protocol for recipe likes (one document per user/recipe pair)."""

    async def list_recipe_ids_liked_by(self, user_id: str) -> list[str]:
        """Return IDs of recipes the user liked."""

    async def count_by_recipe(self) -> dict[str, int]:
        """Return like count per recipe ID (recipes without likes are absent)."""


# Title corpus interface
class ITitleCorpus(Protocol):
    """Protocol for the known-title corpus used by spell correction."""

    async def get_titles(self) -> list[str]:
        """Return known recipe titles (bounded, ascending)."""
