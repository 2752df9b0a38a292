"""Search session: accumulated results and cursor for "load more" scrolling.

State machine: IDLE -> LOADING -> LOADED(has_more) -> LOADING -> ...
-> LOADED(has_more=False). Starting a new query resets the session to IDLE,
clears the cursor, and discards any response still in flight for the
previous query.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cuisine.application.dtos.search import Candidate, SearchPage
from cuisine.domain.enums import SearchMode, SearchState
from cuisine.domain.value_objects.search import SearchQuery

if TYPE_CHECKING:
    from cuisine.application.use_cases.search import RecipeSearchService

logger = logging.getLogger(__name__)


class SearchSession:
    """One user's search over time (query changes, infinite scroll)."""

    def __init__(self, service: "RecipeSearchService", page_size: int) -> None:
        self.service = service
        self.page_size = page_size
        self.state = SearchState.IDLE
        self.query = SearchQuery()
        self.items: list[Candidate] = []
        self.has_more = False
        self.mode: SearchMode | None = None
        self.corrected_query: str | None = None
        self.last_error: Exception | None = None
        self._cursor: str | None = None
        self._generation = 0

    def reset(self, query: SearchQuery | None = None) -> None:
        """Back to IDLE with no results; in-flight responses become stale."""
        self._generation += 1
        self.query = query or SearchQuery()
        self.state = SearchState.IDLE
        self.items = []
        self.has_more = False
        self.mode = None
        self.corrected_query = None
        self.last_error = None
        self._cursor = None

    async def start(self, query: SearchQuery) -> list[Candidate]:
        """Run a new query from its first page; return that page's items."""
        self.reset(query)
        return await self._load()

    async def load_more(self) -> list[Candidate]:
        """Append the next page; no-op unless LOADED with more pages available."""
        if self.state is not SearchState.LOADED or not self.has_more:
            return []
        return await self._load()

    async def _load(self) -> list[Candidate]:
        generation = self._generation
        self.state = SearchState.LOADING
        try:
            page: SearchPage = await self.service.search(
                self.query, self.page_size, self._cursor
            )
        except Exception as e:
            if generation == self._generation:
                self.state = SearchState.IDLE
                self.last_error = e
            raise
        if generation != self._generation:
            logger.debug("Discarding stale search response for %r", self.query)
            return []
        self.items.extend(page.items)
        self.has_more = page.has_more
        self._cursor = page.next_cursor
        self.mode = page.mode
        self.corrected_query = page.corrected_query
        self.state = SearchState.LOADED
        return page.items
