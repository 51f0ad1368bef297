"""Catalogue bounded context: products, categories, collections, carousel
slides and site-wide settings.

Everything the storefront browses lives here. Public reads are served through
the storefront caches registered below; back-office writes invalidate them.
"""

import structlog

from shared.cache import caches
from shared.config import get_settings

logger = structlog.get_logger(__name__)

_ttl = get_settings().storefront_cache_ttl

product_cache = caches.register("products", ttl=_ttl)
category_cache = caches.register("categories", ttl=_ttl)
collection_cache = caches.register("collections", ttl=_ttl)
carousel_cache = caches.register("carousel", ttl=_ttl)
settings_cache = caches.register("settings", ttl=_ttl)
