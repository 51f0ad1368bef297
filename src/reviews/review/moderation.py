"""Back-office review moderation: featuring and removal."""

from sqlalchemy.orm import Session

from reviews.domain import logger
from reviews.review.review import Review
from shared.cache import caches
from shared.database import get_or_raise


def set_featured(session: Session, review_id: str, is_featured: bool) -> Review:
    review = get_or_raise(session, Review, review_id)
    review.is_featured = bool(is_featured)
    session.commit()
    caches.invalidate("reviews")
    logger.info("review_featured" if review.is_featured else "review_unfeatured", review_id=review.id)
    return review


def delete_review(session: Session, review_id: str) -> None:
    review = get_or_raise(session, Review, review_id)
    session.delete(review)
    session.commit()
    caches.invalidate("reviews")
    logger.info("review_deleted", review_id=review_id)
