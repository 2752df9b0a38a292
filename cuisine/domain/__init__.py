"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from cuisine.domain.entities import SearchableItem
from cuisine.domain.enums import SearchMode, SearchState
from cuisine.domain.exceptions import (
    CuisineException,
    InvalidCursorException,
    ResourceNotFoundException,
    ValidationException,
)
from cuisine.domain.value_objects import PageCursor, SearchQuery

__all__ = [
    # Entities
    "SearchableItem",
    # Enums
    "SearchMode",
    "SearchState",
    # Exceptions
    "CuisineException",
    "InvalidCursorException",
    "ResourceNotFoundException",
    "ValidationException",
    # Value objects
    "PageCursor",
    "SearchQuery",
]
