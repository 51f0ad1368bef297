"""Customer review submission."""

from sqlalchemy.orm import Session

from reviews.domain import logger
from reviews.review.review import MAX_RATING, MIN_RATING, MIN_TEXT_LENGTH, Review
from shared.cache import caches
from shared.exceptions import ValidationError


def _rating(value) -> int:
    try:
        rating = int(value)
    except (TypeError, ValueError):
        rating = 0
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError({"rating": ["Rating must be between 1 and 5"]})
    return rating


def submit_review(
    session: Session,
    *,
    customer_name: str | None,
    customer_email: str | None,
    rating,
    review_text: str | None,
    product_id: str | None = None,
    user_id: str | None = None,
) -> Review:
    customer_name = (customer_name or "").strip()
    customer_email = (customer_email or "").strip().lower()
    review_text = (review_text or "").strip()
    if not customer_name or not customer_email or not review_text:
        raise ValidationError({"_entity": ["Name, email and review text are required"]})
    rating = _rating(rating)
    if len(review_text) < MIN_TEXT_LENGTH:
        raise ValidationError({"review_text": ["Review must be at least 10 characters long"]})

    review = Review(
        customer_name=customer_name,
        customer_email=customer_email,
        rating=rating,
        review_text=review_text,
        is_featured=False,
        product_id=product_id or None,
        user_id=user_id or None,
    )
    session.add(review)
    session.commit()

    caches.invalidate("reviews")
    logger.info("review_submitted", review_id=review.id, product_id=review.product_id, rating=rating)
    return review
