"""FastAPI routes for the Support domain."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.auth import Principal, require_admin
from shared.config import get_settings
from shared.database import get_session
from shared.ratelimit import rate_limited, register_limiter
from support.api.schemas import ContactMessageRequest, MarkReadRequest
from support.message.message import create_message, delete_message, list_messages, mark_read

_settings = get_settings()
message_limiter = register_limiter(_settings.message_rate_limit, _settings.rate_limit_window_seconds)

message_router = APIRouter(prefix="/api/messages", tags=["messages"])


@message_router.post("", status_code=201, dependencies=[Depends(rate_limited(message_limiter))])
async def send_message(body: ContactMessageRequest, session: Session = Depends(get_session)):
    contact = create_message(session, name=body.name, email=body.email, message=body.message, phone=body.phone)
    return {"success": True, "message": "Message sent successfully", "id": contact.id}


admin_message_router = APIRouter(prefix="/api/admin/messages", tags=["admin-messages"])


@admin_message_router.get("")
async def get_messages(
    unread: bool = False,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    return {"success": True, "messages": [m.to_dict() for m in list_messages(session, unread_only=unread)]}


@admin_message_router.put("/{message_id}")
async def update_message(
    message_id: str,
    body: MarkReadRequest | None = None,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    contact = mark_read(session, message_id, body.is_read if body else True)
    return {"success": True, "message": contact.to_dict()}


@admin_message_router.delete("/{message_id}")
async def remove_message(
    message_id: str,
    session: Session = Depends(get_session),
    staff: Principal = Depends(require_admin),
):
    delete_message(session, message_id)
    return {"success": True, "message": "Message deleted successfully"}
