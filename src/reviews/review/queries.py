from sqlalchemy import select
from sqlalchemy.orm import Session

from reviews.domain import review_cache
from reviews.review.review import Review

DEFAULT_FEATURED_LIMIT = 10


def list_reviews(session: Session, product_id: str | None = None) -> list[Review]:
    query = select(Review).order_by(Review.created_at.desc())
    if product_id:
        query = query.where(Review.product_id == product_id)
    return list(session.scalars(query).all())


def featured_reviews(session: Session, limit: int = DEFAULT_FEATURED_LIMIT) -> list[dict]:
    """Featured reviews, newest first; the latest reviews stand in when none are featured."""

    def load():
        newest = select(Review).order_by(Review.created_at.desc()).limit(limit)
        reviews = session.scalars(newest.where(Review.is_featured.is_(True))).all()
        if not reviews:
            reviews = session.scalars(newest).all()
        return [review.to_dict() for review in reviews]

    return review_cache.get_or_set(("featured", limit), load)
