"""Carousel slides: storefront listing and back-office maintenance."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from catalogue.carousel.slide import CarouselSlide
from catalogue.domain import carousel_cache, logger
from shared.cache import caches
from shared.database import get_or_raise
from shared.exceptions import ValidationError


def list_slides(session: Session, active_only: bool = True) -> list[dict]:
    def load():
        query = select(CarouselSlide).order_by(CarouselSlide.order, CarouselSlide.created_at)
        if active_only:
            query = query.where(CarouselSlide.is_active.is_(True))
        return [slide.to_dict() for slide in session.scalars(query).all()]

    return carousel_cache.get_or_set("active" if active_only else "all", load)


def create_slide(session: Session, data: dict) -> CarouselSlide:
    values = {key: value for key, value in data.items() if value is not None}
    if "order" not in values:
        max_order = session.scalar(select(func.max(CarouselSlide.order)))
        values["order"] = (max_order or 0) + 1

    slide = CarouselSlide(**values)
    session.add(slide)
    session.commit()
    caches.invalidate("carousel")
    logger.info("carousel_slide_created", slide_id=slide.id, order=slide.order)
    return slide


def update_slide(session: Session, slide_id: str, changes: dict) -> CarouselSlide:
    slide = get_or_raise(session, CarouselSlide, slide_id, label="Slide")
    if not changes:
        raise ValidationError({"_entity": ["No updates provided"]})

    for field, value in changes.items():
        setattr(slide, field, value)
    session.commit()
    caches.invalidate("carousel")
    return slide


def reorder_slides(session: Session, slide_orders: list[dict]) -> None:
    """Apply ``[{"id": ..., "order": n}, ...]`` in one commit."""
    for entry in slide_orders:
        slide = get_or_raise(session, CarouselSlide, entry["id"], label="Slide")
        slide.order = entry["order"]
    session.commit()
    caches.invalidate("carousel")


def delete_slide(session: Session, slide_id: str) -> None:
    slide = get_or_raise(session, CarouselSlide, slide_id, label="Slide")
    session.delete(slide)
    session.commit()
    caches.invalidate("carousel")
    logger.info("carousel_slide_deleted", slide_id=slide_id)
