"""Domain enumerations for recipe search.

Enums represent fixed sets of domain values (search mode, session state).
"""

from enum import Enum


class SearchMode(str, Enum):
    """Retrieval strategy chosen for a query.

    BROWSE: no free text, no filters; cursor pagination over all recipes.
    FILTER: filters only; store-side equality predicates, cursor pagination.
    KEYWORD: free text present; keyword lookup, fuzzy scoring, single page.
    """

    BROWSE = "browse"
    FILTER = "filter"
    KEYWORD = "keyword"


class SearchState(str, Enum):
    """Lifecycle of a search session (see SearchSession)."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
