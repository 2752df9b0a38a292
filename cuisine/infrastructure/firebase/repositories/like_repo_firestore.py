"""Firestore-backed like repository (implements ILikeRepository)."""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING

import httpx

from cuisine.core.constants import FIELD_LIKE_RECIPE_ID, FIELD_LIKE_USER_ID
from cuisine.infrastructure.cache.keys import like_counts_key
from cuisine.infrastructure.exceptions import RetrievalFailedException
from cuisine.infrastructure.firebase._rest_client import FirestoreRESTClient
from cuisine.infrastructure.firebase.collections import COLLECTION_LIKES

if TYPE_CHECKING:
    from cuisine.infrastructure.cache.cache_protocol import CacheProtocol

logger = logging.getLogger(__name__)

# Upper bound on likes read for a single user.
MAX_USER_LIKES = 500


class FirestoreLikeRepository:
    """Like repository using Firestore. One document per (userId, recetteId)."""

    def __init__(
        self,
        client: FirestoreRESTClient,
        collection: str = COLLECTION_LIKES,
        cache: "CacheProtocol | None" = None,
        cache_ttl: int = 120,
    ) -> None:
        self._client = client
        self._coll = client.collection(collection)
        self.cache = cache
        self.cache_ttl = cache_ttl
        self._counts_key = like_counts_key(collection)

    async def list_recipe_ids_liked_by(self, user_id: str) -> list[str]:
        """Return recipe IDs liked by user_id, de-duplicated, first like first."""
        q = self._coll.where(FIELD_LIKE_USER_ID, "==", user_id).limit(MAX_USER_LIKES)
        seen: dict[str, None] = {}
        try:
            async for snapshot in q.stream():
                recipe_id = snapshot.to_dict().get(FIELD_LIKE_RECIPE_ID)
                if isinstance(recipe_id, str) and recipe_id:
                    seen.setdefault(recipe_id, None)
        except httpx.HTTPError as e:
            logger.error("Like query for user %s failed: %s", user_id, e)
            raise RetrievalFailedException("likes_by_user", str(e)) from e
        return list(seen)

    async def count_by_recipe(self) -> dict[str, int]:
        """Return like count per recipe ID (full collection scan, cached briefly)."""
        use_cache = self.cache is not None and self.cache.is_available()
        if use_cache:
            cached = await self.cache.get(self._counts_key)
            if isinstance(cached, dict):
                return {str(k): int(v) for k, v in cached.items()}
        counts: Counter[str] = Counter()
        try:
            async for snapshot in self._coll.stream():
                recipe_id = snapshot.to_dict().get(FIELD_LIKE_RECIPE_ID)
                if isinstance(recipe_id, str) and recipe_id:
                    counts[recipe_id] += 1
        except httpx.HTTPError as e:
            logger.error("Like count scan failed: %s", e)
            raise RetrievalFailedException("count_likes", str(e)) from e
        result = dict(counts)
        if use_cache:
            await self.cache.set(self._counts_key, result, ttl=self.cache_ttl)
        return result
