"""Pydantic request schemas for the Support API."""

from pydantic import BaseModel


class ContactMessageRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    message: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha Rao",
                    "email": "asha@example.com",
                    "phone": "9876543210",
                    "message": "Do you ship the temple necklace to Pune?",
                }
            ]
        }
    }


class MarkReadRequest(BaseModel):
    is_read: bool = True
