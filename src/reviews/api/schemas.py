"""Pydantic request schemas for the Reviews API."""

from pydantic import BaseModel


class SubmitReviewRequest(BaseModel):
    customer_name: str | None = None
    customer_email: str | None = None
    rating: int | None = None
    review_text: str | None = None
    product_id: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_name": "Asha Rao",
                    "customer_email": "asha@example.com",
                    "rating": 5,
                    "review_text": "Beautiful finish and it arrived well packed.",
                    "product_id": "va-01",
                }
            ]
        }
    }


class FeatureReviewRequest(BaseModel):
    is_featured: bool
