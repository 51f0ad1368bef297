"""Fulfillment bounded context: back-office tasks and the packing workflow.

Superusers hand paid orders to workers as tasks. Completing a task queues the
next workflow step for the same worker and nudges the order's status along.
"""

import structlog

logger = structlog.get_logger(__name__)
