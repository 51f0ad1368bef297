"""Staff sign-in."""

from sqlalchemy.orm import Session

from identity.domain import logger
from identity.staff.staff import Staff
from shared.auth import PrincipalKind, create_access_token, verify_password
from shared.exceptions import AuthenticationError, ValidationError


def issue_staff_token(staff: Staff) -> str:
    return create_access_token(
        staff.username,
        PrincipalKind.STAFF,
        role=staff.role_enum,
        name=staff.name,
        email=staff.email or None,
    )


def login_staff(session: Session, username: str | None, password: str | None) -> tuple[Staff, str]:
    if not username or not password:
        raise ValidationError({"_entity": ["Username and password are required"]})

    staff = session.get(Staff, username.strip())
    if staff is None or not verify_password(password, staff.password_hash):
        logger.warning("staff_login_failed", username=username)
        raise AuthenticationError("Invalid username or password")

    logger.info("staff_logged_in", username=staff.username, role=staff.role)
    return staff, issue_staff_token(staff)
