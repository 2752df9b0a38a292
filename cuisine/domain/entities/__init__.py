"""Domain entities."""

from cuisine.domain.entities.recipe import SearchableItem

__all__ = ["SearchableItem"]
