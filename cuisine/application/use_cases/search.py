"""Recipe search use case: retrieval, merge, ranking and pagination.

Three modes, picked from the query:

- keyword: free text present. Words are spell-corrected against the known
  titles, expanded into variants and looked up in the titleKeywords index
  one word at a time; a general batch tops up thin results. Candidates are
  scored, thresholded, post-filtered and sorted. Single page, no cursor.
- filter: filters only. Store-side equality predicates, cursor pagination.
- browse: nothing set. Ascending-title scan with cursor pagination.

Store failures propagate to the caller; there is no retry here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from cuisine.application.dtos.search import Candidate, SearchPage, SearchTuning
from cuisine.application.services.keyword_variants import generate_variants
from cuisine.application.services.relevance_scorer import RelevanceScorer
from cuisine.application.services.spell_corrector import SpellCorrector
from cuisine.core.constants import FIELD_TITLE, FIELD_TITLE_KEYWORDS
from cuisine.domain.entities.recipe import SearchableItem
from cuisine.domain.enums import SearchMode
from cuisine.domain.exceptions import ValidationException
from cuisine.domain.value_objects.search import PageCursor, SearchQuery
from cuisine.shared.telemetry.tracing import add_span_attributes, add_span_event, traced

if TYPE_CHECKING:
    from cuisine.application.interfaces.repositories import (
        IRecipeRepository,
        ITitleCorpus,
    )

logger = logging.getLogger(__name__)


def merge_candidates(*batches: Iterable[SearchableItem]) -> list[SearchableItem]:
    """Merge retrieval batches into one list with at most one item per id.

    A later batch overwrites an earlier entry for the same id; the entry
    keeps the position where the id was first seen.
    """
    merged: dict[str, SearchableItem] = {}
    for batch in batches:
        for item in batch:
            merged[item.id] = item
    return list(merged.values())


class RecipeSearchService:
    """Spelling-tolerant recipe search over the recipe store."""

    def __init__(
        self,
        recipe_repo: "IRecipeRepository",
        title_corpus: "ITitleCorpus",
        tuning: SearchTuning | None = None,
    ) -> None:
        self.recipe_repo = recipe_repo
        self.title_corpus = title_corpus
        self.tuning = tuning or SearchTuning()
        self.scorer = RelevanceScorer(self.tuning)

    @traced("recipe_search.search")
    async def search(
        self,
        query: SearchQuery,
        page_size: int,
        cursor: str | None = None,
    ) -> SearchPage:
        """Return one page of recipes for query.

        Args:
            query: Free text and filters.
            page_size: Number of items per page; must be positive.
            cursor: Token from a previous page's next_cursor (browse and
                filter modes only; ignored in keyword mode).

        Raises:
            ValidationException: page_size is not positive.
            InvalidCursorException: cursor is not a token we issued.
        """
        if page_size <= 0:
            raise ValidationException(
                f"page_size must be a positive integer, got: {page_size}",
                field="page_size",
            )

        if query.has_free_text:
            if cursor:
                logger.debug("Cursor ignored for keyword search")
            page = await self._keyword_search(query, page_size)
        else:
            page_cursor = self._resolve_cursor(cursor, query.scope)
            if query.has_filters:
                rows = await self.recipe_repo.query_by_equality_filters(
                    query.store_filters(), FIELD_TITLE, page_size + 1, page_cursor
                )
                page = self._paginate(rows, page_size, query.scope, SearchMode.FILTER)
            else:
                rows = await self.recipe_repo.get_all(
                    FIELD_TITLE, page_size + 1, page_cursor
                )
                page = self._paginate(rows, page_size, query.scope, SearchMode.BROWSE)

        add_span_attributes(
            **{"search.mode": page.mode.value, "search.result_count": len(page.items)}
        )
        logger.debug(
            "Search mode=%s returned %s items (has_more=%s)",
            page.mode.value,
            len(page.items),
            page.has_more,
        )
        return page

    async def _keyword_search(self, query: SearchQuery, page_size: int) -> SearchPage:
        titles = await self.title_corpus.get_titles()
        corrector = SpellCorrector(titles, self.tuning.max_correction_distance)
        corrected = corrector.correct_words(query.words)
        if corrected != query.words:
            logger.debug("Query corrected: %r -> %r", query.words, corrected)
            add_span_event("search.query_corrected", {"words": len(corrected)})

        candidates = await self.retrieve_keyword_candidates(corrected, page_size)
        ranked = self.rank(candidates, corrected, page_size, query.filters)
        return SearchPage(
            items=ranked,
            has_more=False,
            mode=SearchMode.KEYWORD,
            corrected_query=" ".join(corrected),
        )

    async def retrieve_keyword_candidates(
        self, words: list[str], page_size: int
    ) -> list[SearchableItem]:
        """Look up each word's variants in the keyword index, then top up.

        Words are queried one after another. When no word hits the index, or
        fewer than page_size recipes were found, a general title-ordered batch
        is merged in so fuzzy scoring has material to work with.
        """
        batches: list[list[SearchableItem]] = []
        found_by_keywords = False
        for word in words:
            variants = sorted(generate_variants(word))
            if not variants:
                continue
            batch = await self.recipe_repo.query_by_field_contains_any(
                FIELD_TITLE_KEYWORDS,
                variants,
                FIELD_TITLE,
                page_size * self.tuning.keyword_overfetch,
            )
            if batch:
                found_by_keywords = True
            batches.append(batch)

        merged = merge_candidates(*batches)
        if not found_by_keywords or len(merged) < page_size:
            general = await self.recipe_repo.get_all(
                FIELD_TITLE, page_size * self.tuning.fallback_overfetch
            )
            merged = merge_candidates(merged, general)
        return merged

    def rank(
        self,
        items: Iterable[SearchableItem],
        words: list[str],
        page_size: int,
        filters: dict[str, str] | None = None,
    ) -> list[Candidate]:
        """Score, threshold, post-filter, sort (stable, descending) and truncate."""
        filters = filters or {}
        kept: list[Candidate] = []
        for item in items:
            if any(item.tag(name) != value for name, value in filters.items()):
                continue
            score = self.scorer.score(item, words)
            if self.scorer.passes(score):
                kept.append(Candidate(item=item, score=score))
        kept.sort(key=lambda c: c.score, reverse=True)
        return kept[:page_size]

    @staticmethod
    def _resolve_cursor(token: str | None, scope: str) -> PageCursor | None:
        if not token:
            return None
        cursor = PageCursor.decode(token)
        if cursor.scope != scope:
            logger.info(
                "Cursor issued for scope %r does not match %r; restarting from the first page",
                cursor.scope,
                scope,
            )
            return None
        return cursor

    @staticmethod
    def _paginate(
        rows: list[SearchableItem], page_size: int, scope: str, mode: SearchMode
    ) -> SearchPage:
        has_more = len(rows) > page_size
        page = rows[:page_size]
        next_cursor = (
            PageCursor.from_item(page[-1], scope).encode() if has_more and page else None
        )
        return SearchPage(
            items=[Candidate(item=item) for item in page],
            has_more=has_more,
            mode=mode,
            next_cursor=next_cursor,
        )
