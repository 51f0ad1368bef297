"""FastAPI routes for the Reviews domain."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from reviews.api.schemas import FeatureReviewRequest, SubmitReviewRequest
from reviews.review.moderation import delete_review, set_featured
from reviews.review.queries import DEFAULT_FEATURED_LIMIT, featured_reviews, list_reviews
from reviews.review.submission import submit_review
from shared.auth import Principal, PrincipalKind, get_optional_principal, require_admin
from shared.database import get_session

review_router = APIRouter(prefix="/api/reviews", tags=["reviews"])
admin_review_router = APIRouter(prefix="/api/admin/reviews", tags=["admin-reviews"])


@review_router.post("", status_code=201)
async def create_review(
    body: SubmitReviewRequest,
    session: Session = Depends(get_session),
    principal: Principal | None = Depends(get_optional_principal),
):
    user_id = principal.subject if principal and principal.kind == PrincipalKind.CUSTOMER.value else None
    review = submit_review(
        session,
        customer_name=body.customer_name,
        customer_email=body.customer_email,
        rating=body.rating,
        review_text=body.review_text,
        product_id=body.product_id,
        user_id=user_id,
    )
    return {"success": True, "review_id": review.id, "review": review.to_dict()}


@review_router.get("")
async def get_reviews(product_id: str | None = None, session: Session = Depends(get_session)):
    return {"success": True, "reviews": [review.to_dict() for review in list_reviews(session, product_id)]}


@review_router.get("/featured")
async def get_featured_reviews(
    limit: int = Query(default=DEFAULT_FEATURED_LIMIT, ge=1, le=50),
    session: Session = Depends(get_session),
):
    return {"success": True, "reviews": featured_reviews(session, limit)}


@admin_review_router.get("")
async def get_all_reviews(session: Session = Depends(get_session), staff: Principal = Depends(require_admin)):
    return {"success": True, "reviews": [review.to_dict() for review in list_reviews(session)]}


@admin_review_router.put("/{review_id}")
async def feature_review(
    review_id: str,
    body: FeatureReviewRequest,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    review = set_featured(session, review_id, body.is_featured)
    return {"success": True, "review": review.to_dict()}


@admin_review_router.delete("/{review_id}")
async def remove_review(
    review_id: str,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    delete_review(session, review_id)
    return {"success": True, "message": "Review deleted successfully"}
