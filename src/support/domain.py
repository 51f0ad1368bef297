"""Support bounded context: contact-form messages from storefront visitors."""

import structlog

logger = structlog.get_logger(__name__)
