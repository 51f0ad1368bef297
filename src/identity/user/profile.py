from sqlalchemy.orm import Session

from identity.domain import logger
from identity.shared.phone import normalize_phone
from identity.user.user import User
from shared.database import get_or_raise
from shared.exceptions import ValidationError


def get_profile(session: Session, user_id: str) -> User:
    return get_or_raise(session, User, user_id, label="User")


def update_profile(session: Session, user_id: str, changes: dict) -> User:
    user = get_profile(session, user_id)
    if not changes:
        raise ValidationError({"_entity": ["No updates provided"]})

    if "name" in changes:
        user.name = changes["name"]
    if "phone" in changes:
        user.phone = normalize_phone(changes["phone"])
    session.commit()

    logger.info("profile_updated", user_id=user.id, fields=sorted(changes))
    return user
