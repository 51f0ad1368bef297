"""Payments bounded context: the online checkout handshake with the gateway.

A checkout opens a gateway order, the customer pays in the gateway's widget,
and the signed confirmation that comes back is verified here before the order
is persisted by the ordering context.
"""

import structlog

logger = structlog.get_logger(__name__)
