"""Offer redemption accounting."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from ordering.domain import logger
from ordering.offer.offer import Offer, OfferUsage
from shared.cache import caches


def has_used_offer(session: Session, offer_id: str, customer_email: str | None, customer_id: str | None) -> bool:
    if customer_id:
        query = select(OfferUsage.id).where(OfferUsage.offer_id == offer_id, OfferUsage.customer_id == customer_id)
        if session.scalar(query.limit(1)) is not None:
            return True
    if customer_email:
        query = select(OfferUsage.id).where(
            OfferUsage.offer_id == offer_id, OfferUsage.customer_email == customer_email
        )
        if session.scalar(query.limit(1)) is not None:
            return True
    return False


def record_offer_usage(
    session: Session,
    offer_id: str,
    customer_email: str | None = None,
    customer_id: str | None = None,
    order_id: str | None = None,
) -> Offer | None:
    """Count one redemption; one-time offers also remember who redeemed them."""
    offer = session.get(Offer, offer_id)
    if offer is None:
        logger.warning("offer_usage_skipped", offer_id=offer_id, reason="offer not found")
        return None

    offer.used_count = (offer.used_count or 0) + 1
    if offer.one_time_per_user and (customer_email or customer_id):
        session.add(
            OfferUsage(
                offer_id=offer.id,
                customer_email=customer_email,
                customer_id=customer_id,
                order_id=order_id,
            )
        )
    session.commit()

    caches.invalidate("offers")
    logger.info("offer_used", offer_id=offer.id, used_count=offer.used_count, order_id=order_id)
    return offer
