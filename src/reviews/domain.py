"""Reviews bounded context: customer reviews and the featured carousel."""

import structlog

from shared.cache import caches
from shared.config import get_settings

logger = structlog.get_logger(__name__)

review_cache = caches.register("reviews", ttl=get_settings().reviews_cache_ttl)
