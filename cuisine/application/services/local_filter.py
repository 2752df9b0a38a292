"""In-memory filtering of an already loaded recipe list (map view)."""

from collections.abc import Iterable

from cuisine.application.services.spell_corrector import SpellCorrector
from cuisine.domain.entities.recipe import SearchableItem
from cuisine.domain.value_objects.search import SearchQuery


def filter_recipes_locally(
    items: Iterable[SearchableItem],
    query: SearchQuery,
    corrector: SpellCorrector | None = None,
) -> list[SearchableItem]:
    """Keep items matching the query without going back to the store.

    Each free-text word is spell-corrected against the loaded titles (unless
    a corrector is given); an item matches when its lowercased title contains
    any corrected word. Empty free text matches every item. Filters are exact.
    """
    items = list(items)
    words = query.words
    if words:
        corrector = corrector or SpellCorrector(i.title for i in items)
        words = corrector.correct_words(words)

    matched: list[SearchableItem] = []
    for item in items:
        title = item.title.lower()
        if words and not any(w in title for w in words):
            continue
        if any(item.tag(name) != value for name, value in query.filters.items()):
            continue
        matched.append(item)
    return matched
