"""Firestore-backed recipe repository (implements IRecipeRepository)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from cuisine.core.constants import (
    FIELD_IMAGES,
    FIELD_POSITION,
    FIELD_TITLE,
    FIELD_TITLE_KEYWORDS,
    FIELD_TYPE,
    FIELD_URL,
)
from cuisine.domain.entities.recipe import SearchableItem
from cuisine.domain.value_objects.search import PageCursor
from cuisine.infrastructure.exceptions import RetrievalFailedException
from cuisine.infrastructure.firebase._rest_client import (
    DOCUMENT_ID_FIELD,
    FirestoreRESTClient,
    _Query,
)
from cuisine.infrastructure.firebase.collections import COLLECTION_RECIPES

logger = logging.getLogger(__name__)

# Firestore caps array-contains-any at 30 values.
MAX_CONTAINS_ANY_VALUES = 30


def _str_or_none(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _to_item(doc_id: str, data: dict[str, Any]) -> SearchableItem | None:
    """Validate a recipe document; None when it has no usable title."""
    title = data.get(FIELD_TITLE)
    if not isinstance(title, str) or not title.strip():
        logger.warning("Skipping recipe %s without a title", doc_id)
        return None
    keywords = data.get(FIELD_TITLE_KEYWORDS) or []
    images = data.get(FIELD_IMAGES) or []
    return SearchableItem(
        id=doc_id,
        title=title,
        category=_str_or_none(data.get(FIELD_TYPE)),
        region=_str_or_none(data.get(FIELD_POSITION)),
        keywords=tuple(str(k) for k in keywords if isinstance(k, str)),
        images=tuple(str(i) for i in images if isinstance(i, str)),
        url=_str_or_none(data.get(FIELD_URL)),
    )


class FirestoreRecipeRepository:
    """Recipe repository using Firestore runQuery.

    Every ordered read adds __name__ as a tiebreak so cursors resume at a
    unique position even when titles repeat.
    """

    def __init__(
        self, client: FirestoreRESTClient, collection: str = COLLECTION_RECIPES
    ) -> None:
        self._client = client
        self._coll = client.collection(collection)

    async def _collect(self, q: _Query, operation: str) -> list[SearchableItem]:
        results: list[SearchableItem] = []
        try:
            async for snapshot in q.stream():
                item = _to_item(snapshot.id, snapshot.to_dict())
                if item is not None:
                    results.append(item)
        except httpx.HTTPError as e:
            logger.error("Recipe query %s failed: %s", operation, e)
            raise RetrievalFailedException(operation, str(e)) from e
        return results

    def _after(self, q: _Query, cursor: PageCursor | None) -> _Query:
        q = q.order_by(DOCUMENT_ID_FIELD)
        if cursor is not None:
            q = q.start_after(cursor.title, q.document_reference(cursor.id))
        return q

    async def query_by_field_contains_any(
        self,
        field: str,
        values: list[str],
        order_by: str,
        limit: int,
    ) -> list[SearchableItem]:
        """Return recipes whose array field contains any of values (server-side)."""
        if not values:
            return []
        q = self._coll.where(
            field, "array-contains-any", list(values[:MAX_CONTAINS_ANY_VALUES])
        )
        q = q.order_by(order_by).order_by(DOCUMENT_ID_FIELD).limit(limit)
        return await self._collect(q, "contains_any")

    async def query_by_equality_filters(
        self,
        filters: dict[str, str],
        order_by: str,
        limit: int,
        cursor: PageCursor | None = None,
    ) -> list[SearchableItem]:
        """Return recipes matching every field == value, ordered, after cursor."""
        if not filters:
            return await self.get_all(order_by, limit, cursor)
        fields = sorted(filters)
        q = self._coll.where(fields[0], "==", filters[fields[0]])
        for field in fields[1:]:
            q = q.where(field, "==", filters[field])
        q = self._after(q.order_by(order_by), cursor).limit(limit)
        return await self._collect(q, "equality_filters")

    async def get_all(
        self,
        order_by: str,
        limit: int,
        cursor: PageCursor | None = None,
    ) -> list[SearchableItem]:
        """Return recipes ordered by order_by then document ID."""
        q = self._after(self._coll.order_by(order_by), cursor).limit(limit)
        return await self._collect(q, "get_all")

    async def get_by_id(self, recipe_id: str) -> SearchableItem | None:
        """Return recipe by ID."""
        try:
            doc = await self._coll.document(recipe_id).get()
        except httpx.HTTPError as e:
            logger.error("Recipe read %s failed: %s", recipe_id, e)
            raise RetrievalFailedException("get_by_id", str(e)) from e
        if not doc:
            return None
        return _to_item(doc.id, doc.to_dict())

    async def update_search_fields(
        self, recipe_id: str, keywords: list[str], url: str
    ) -> None:
        """Overwrite titleKeywords and url, leaving other fields untouched."""
        try:
            await self._coll.document(recipe_id).update(
                {FIELD_TITLE_KEYWORDS: keywords, FIELD_URL: url}
            )
        except httpx.HTTPError as e:
            logger.error("Recipe update %s failed: %s", recipe_id, e)
            raise RetrievalFailedException("update_search_fields", str(e)) from e
