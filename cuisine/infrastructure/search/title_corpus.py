"""Known-title corpus for spell correction (implements ITitleCorpus).

Reads recipe titles in ascending order from the recipe repository, bounded
by a limit, and keeps them in Redis for a short TTL when a cache is given.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cuisine.core.constants import FIELD_TITLE
from cuisine.infrastructure.cache.keys import title_corpus_key
from cuisine.infrastructure.firebase.collections import COLLECTION_RECIPES

if TYPE_CHECKING:
    from cuisine.application.interfaces.repositories import IRecipeRepository
    from cuisine.infrastructure.cache.cache_protocol import CacheProtocol

logger = logging.getLogger(__name__)


class TitleCorpusProvider:
    """Cache-aside reader of the first `limit` recipe titles."""

    def __init__(
        self,
        recipe_repo: "IRecipeRepository",
        cache: "CacheProtocol | None" = None,
        ttl: int = 300,
        limit: int = 1000,
        collection: str = COLLECTION_RECIPES,
    ) -> None:
        self.recipe_repo = recipe_repo
        self.cache = cache
        self.ttl = ttl
        self.limit = limit
        self._key = title_corpus_key(collection, limit)

    async def get_titles(self) -> list[str]:
        if self.cache is not None and self.cache.is_available():
            cached = await self.cache.get(self._key)
            if isinstance(cached, list):
                return [t for t in cached if isinstance(t, str)]
        items = await self.recipe_repo.get_all(FIELD_TITLE, self.limit)
        titles = [item.title for item in items]
        logger.debug("Loaded %d titles for spell correction", len(titles))
        if self.cache is not None and self.cache.is_available():
            await self.cache.set(self._key, titles, ttl=self.ttl)
        return titles
