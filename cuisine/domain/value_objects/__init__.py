"""Domain value objects."""

from cuisine.domain.value_objects.search import SCOPE_BROWSE, PageCursor, SearchQuery

__all__ = ["SCOPE_BROWSE", "PageCursor", "SearchQuery"]
