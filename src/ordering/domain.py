"""Ordering bounded context: orders, offers and back-office reporting.

Orders are created by the payment verification flow, by cash-on-delivery
checkout, or manually by a superuser. Customers may cancel early-stage orders;
back-office staff move orders through fulfilment and manage refunds.
"""

import structlog

from shared.cache import caches
from shared.config import get_settings

logger = structlog.get_logger(__name__)

_settings = get_settings()

offer_cache = caches.register("offers", ttl=_settings.storefront_cache_ttl)
stats_cache = caches.register("stats", ttl=_settings.stats_cache_ttl)
