"""Staff account administration (superadmin only) and first-admin bootstrap."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from identity.domain import logger
from identity.staff.staff import Staff
from shared.auth import Principal, Role, hash_password
from shared.exceptions import ConflictError, ObjectNotFoundError, ValidationError


def list_staff(session: Session) -> list[Staff]:
    return list(session.scalars(select(Staff).order_by(Staff.created_at)).all())


def _get_staff(session: Session, username: str) -> Staff:
    staff = session.get(Staff, username) if username else None
    if staff is None:
        raise ObjectNotFoundError({"username": ["Worker not found"]})
    return staff


def add_staff(session: Session, data: dict) -> Staff:
    username = data["username"]
    if session.get(Staff, username) is not None:
        raise ConflictError({"username": ["Worker already exists with this username"]})

    staff = Staff(
        username=username,
        name=data["name"],
        email=data.get("email") or "",
        role=data["role"],
        password_hash=hash_password(data["password"]),
    )
    session.add(staff)
    session.commit()
    logger.info("staff_added", username=username, role=staff.role)
    return staff


def update_staff(session: Session, username: str, changes: dict, acting: Principal) -> Staff:
    staff = _get_staff(session, username)
    if not changes:
        raise ValidationError({"_entity": ["At least one field (name, email, role or password) must be provided"]})
    if username == acting.subject and changes.get("role") == Role.WORKER.value:
        raise ValidationError({"role": ["You cannot demote yourself"]})

    changes = dict(changes)
    if "password" in changes:
        staff.password_hash = hash_password(changes.pop("password"))
    for field, value in changes.items():
        setattr(staff, field, value)
    session.commit()
    logger.info("staff_updated", username=username, role=staff.role, updated_by=acting.subject)
    return staff


def delete_staff(session: Session, username: str, acting: Principal) -> None:
    if username == acting.subject:
        raise ValidationError({"username": ["You cannot delete yourself"]})
    staff = _get_staff(session, username)
    session.delete(staff)
    session.commit()
    logger.info("staff_deleted", username=username, deleted_by=acting.subject)


def bootstrap_superadmin(session: Session, data: dict) -> Staff:
    """Create the very first back-office account; refused once any staff exists."""
    if session.scalar(select(func.count()).select_from(Staff)):
        raise ConflictError("Bootstrap is only available when no admins exist")
    return add_staff(session, data)
