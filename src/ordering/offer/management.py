"""Back-office offer administration."""

from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from ordering.domain import logger
from ordering.offer.offer import Offer
from shared.cache import caches
from shared.database import get_or_raise, utc_now
from shared.exceptions import ConflictError, ValidationError

DEFAULT_VALIDITY = timedelta(days=30)


def _assert_code_available(session: Session, code: str | None, exclude_id: str | None = None) -> None:
    if not code:
        return
    query = select(Offer.id).where(Offer.code == code)
    if exclude_id:
        query = query.where(Offer.id != exclude_id)
    if session.scalar(query) is not None:
        raise ConflictError({"code": [f"Offer code {code} already exists"]})


def list_offers(session: Session) -> list[Offer]:
    return list(session.scalars(select(Offer).order_by(Offer.created_at.desc())).all())


def create_offer(session: Session, data: dict, created_by: str | None = None) -> Offer:
    values = {key: value for key, value in data.items() if value is not None}
    _assert_code_available(session, values.get("code"))
    now = utc_now()
    values.setdefault("valid_from", now)
    values.setdefault("valid_until", now + DEFAULT_VALIDITY)
    values.setdefault("description", "")
    values.setdefault("is_active", True)

    offer = Offer(**values, used_count=0, created_by=created_by)
    session.add(offer)
    session.commit()

    caches.invalidate("offers")
    logger.info("offer_created", offer_id=offer.id, code=offer.code, created_by=created_by)
    return offer


def update_offer(session: Session, offer_id: str, changes: dict) -> Offer:
    offer = get_or_raise(session, Offer, offer_id)
    if not changes:
        raise ValidationError({"_entity": ["No updates provided"]})
    if changes.get("code") and changes["code"] != offer.code:
        _assert_code_available(session, changes["code"], exclude_id=offer.id)

    for field, value in changes.items():
        setattr(offer, field, value)
    session.commit()

    caches.invalidate("offers")
    logger.info("offer_updated", offer_id=offer.id, fields=sorted(changes))
    return offer


def delete_offer(session: Session, offer_id: str) -> None:
    offer = get_or_raise(session, Offer, offer_id)
    session.delete(offer)
    session.commit()
    caches.invalidate("offers")
    logger.info("offer_deleted", offer_id=offer_id)
