"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Central limit strings and decorators
keep rate limits DRY.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Keyword search reads several store queries per request.
SEARCH_LIMIT = "60/minute"
# Recommendations scan the like collection.
RECOMMEND_LIMIT = "30/minute"

limit_search = limiter.limit(SEARCH_LIMIT)
limit_recommend = limiter.limit(RECOMMEND_LIMIT)
