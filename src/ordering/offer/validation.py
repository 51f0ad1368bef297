"""Offer lookup and redemption checks for the storefront checkout."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from ordering.domain import offer_cache
from ordering.offer.offer import Offer
from ordering.offer.usage import has_used_offer
from shared.database import utc_now
from shared.exceptions import ObjectNotFoundError, PermissionDenied, ValidationError


def find_offer(session: Session, offer_id: str | None = None, offer_code: str | None = None) -> Offer | None:
    if offer_id:
        return session.get(Offer, offer_id)
    if offer_code:
        return session.scalar(select(Offer).where(Offer.code == offer_code.strip().upper()))
    return None


def validate_offer(
    session: Session,
    *,
    subtotal: float | None,
    offer_id: str | None = None,
    offer_code: str | None = None,
    customer_email: str | None = None,
    customer_id: str | None = None,
) -> tuple[Offer, float]:
    """Check that the offer can be redeemed now by this customer.

    Returns the offer and the discount it grants on ``subtotal``.
    """
    if not offer_id and not offer_code:
        raise ValidationError({"offer": ["Offer ID or code is required"]})
    if subtotal is None:
        raise ValidationError({"subtotal": ["Subtotal is required"]})
    customer_email = (customer_email or "").strip().lower() or None

    offer = find_offer(session, offer_id=offer_id, offer_code=offer_code)
    if offer is None:
        raise ObjectNotFoundError({"offer": ["Offer not found"]})
    if not offer.is_active:
        raise ValidationError({"offer": ["This offer is not active"]})
    if not offer.is_within_window(utc_now()):
        raise ValidationError({"offer": ["This offer has expired or is not yet valid"]})
    if offer.is_exhausted():
        raise ValidationError({"offer": ["This offer has reached its usage limit"]})
    if offer.one_time_per_user and has_used_offer(session, offer.id, customer_email, customer_id):
        raise ValidationError({"offer": ["You have already used this offer"]})
    if not offer.is_available_to(customer_email, customer_id):
        raise PermissionDenied({"offer": ["This offer is not available for your account"]})
    if offer.min_order_amount and subtotal < offer.min_order_amount:
        raise ValidationError({"subtotal": [f"Minimum order amount of ₹{offer.min_order_amount:g} required"]})

    return offer, offer.discount_for(subtotal)


def list_active_offers(
    session: Session, customer_email: str | None = None, customer_id: str | None = None
) -> list[dict]:
    """Offers this customer could redeem right now, newest first."""
    customer_email = (customer_email or "").strip().lower() or None

    def load():
        now = utc_now()
        offers = session.scalars(
            select(Offer).where(Offer.is_active.is_(True)).order_by(Offer.created_at.desc())
        ).all()
        redeemable = []
        for offer in offers:
            if not offer.is_within_window(now) or offer.is_exhausted():
                continue
            if offer.one_time_per_user and has_used_offer(session, offer.id, customer_email, customer_id):
                continue
            if not offer.is_available_to(customer_email, customer_id):
                continue
            redeemable.append(offer.to_dict())
        return redeemable

    return offer_cache.get_or_set((customer_email, customer_id), load)
