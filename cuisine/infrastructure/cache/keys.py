"""Cache key builders. Single place for key format.

Collection names used in keys must not contain CACHE_KEY_SEP to avoid
ambiguous or colliding keys.
"""

from cuisine.core.constants import (
    CACHE_KEY_SEP,
    CACHE_PREFIX_LIKES,
    CACHE_PREFIX_SEARCH,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value contains CACHE_KEY_SEP.
    """
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def title_corpus_key(collection: str, limit: int) -> str:
    """Cache key for the known-title corpus of a recipe collection."""
    _validate_key_component(collection, "collection")
    return (
        f"{CACHE_PREFIX_SEARCH}{CACHE_KEY_SEP}titles{CACHE_KEY_SEP}"
        f"{collection}{CACHE_KEY_SEP}{limit}"
    )


def title_corpus_pattern(collection: str) -> str:
    """SCAN pattern matching every title corpus key of a collection."""
    _validate_key_component(collection, "collection")
    return f"{CACHE_PREFIX_SEARCH}{CACHE_KEY_SEP}titles{CACHE_KEY_SEP}{collection}{CACHE_KEY_SEP}*"


def like_counts_key(collection: str) -> str:
    """Cache key for per-recipe like counts of a likes collection."""
    _validate_key_component(collection, "collection")
    return f"{CACHE_PREFIX_LIKES}{CACHE_KEY_SEP}counts{CACHE_KEY_SEP}{collection}"
