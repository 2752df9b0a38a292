"""Recipe read model used by the search and recommendation pipelines."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchableItem:
    """Snapshot of a recipe document, validated at the store boundary.

    The search engine only reads these; it never mutates the underlying
    document.
    """

    id: str
    title: str
    category: str | None = None  # document field "type"
    region: str | None = None  # document field "position" (department code)
    keywords: tuple[str, ...] = ()
    images: tuple[str, ...] = ()
    url: str | None = None

    def tag(self, name: str) -> str | None:
        """Return the category tag for a filter name ('category' or 'region')."""
        if name == "category":
            return self.category
        if name == "region":
            return self.region
        return None
