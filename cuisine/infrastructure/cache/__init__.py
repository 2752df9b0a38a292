"""Cache: Redis service and cache key utilities.

Used for the spell-correction title corpus and like counts.
CacheService uses cuisine.core.config; key format is in keys.py.
"""

from cuisine.infrastructure.cache.cache_protocol import CacheProtocol
from cuisine.infrastructure.cache.keys import (
    like_counts_key,
    title_corpus_key,
    title_corpus_pattern,
)
from cuisine.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheProtocol",
    "CacheService",
    "like_counts_key",
    "title_corpus_key",
    "title_corpus_pattern",
]
