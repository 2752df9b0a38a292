"""Core constants: cache key prefixes, recipe document fields and filters.

Single source of truth for cache key structure and for the Firestore field
names the search engine reads.
"""

# Cache key prefixes
CACHE_PREFIX_SEARCH = "search"
CACHE_PREFIX_LIKES = "likes"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Recipe document fields
FIELD_TITLE = "title"
FIELD_TYPE = "type"
FIELD_POSITION = "position"
FIELD_TITLE_KEYWORDS = "titleKeywords"
FIELD_IMAGES = "images"
FIELD_URL = "url"

# Like document fields
FIELD_LIKE_RECIPE_ID = "recetteId"
FIELD_LIKE_USER_ID = "userId"

# Public filter name -> recipe document field (exact-match filters)
FILTER_FIELDS: dict[str, str] = {
    "category": FIELD_TYPE,
    "region": FIELD_POSITION,
}
