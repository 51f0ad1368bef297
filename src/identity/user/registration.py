"""Customer sign-up and sign-in."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from identity.customer.customer import upsert_customer
from identity.domain import logger
from identity.shared.email import normalize_email
from identity.shared.phone import normalize_phone
from identity.user.user import User
from shared.auth import PrincipalKind, create_access_token, hash_password, verify_password
from shared.exceptions import AuthenticationError, ValidationError


def find_user_by_email(session: Session, email: str) -> User | None:
    return session.scalar(select(User).where(User.email == email))


def register_user(
    session: Session,
    *,
    name: str | None,
    email: str | None,
    password: str | None,
    phone: str | None = None,
) -> User:
    name = (name or "").strip()
    if not name or not (email or "").strip() or not password:
        raise ValidationError({"_entity": ["Name, email and password are required"]})
    email = normalize_email(email)
    phone = normalize_phone(phone)

    if find_user_by_email(session, email) is not None:
        raise ValidationError({"email": ["User with this email already exists"]})

    user = User(name=name, email=email, phone=phone, password_hash=hash_password(password))
    session.add(user)
    session.commit()
    logger.info("user_registered", user_id=user.id)

    try:
        upsert_customer(session, email=email, name=name, phone=phone, user_id=user.id)
    except Exception:
        session.rollback()
        logger.exception("customer_sync_failed", user_id=user.id)
    return user


def issue_customer_token(user: User) -> str:
    return create_access_token(user.id, PrincipalKind.CUSTOMER, name=user.name, email=user.email)


def login_user(session: Session, email: str | None, password: str | None) -> tuple[User, str]:
    if not email or not password:
        raise ValidationError({"_entity": ["Email and password are required"]})

    user = find_user_by_email(session, email.strip().lower())
    if user is None or not verify_password(password, user.password_hash):
        logger.info("user_login_failed")
        raise AuthenticationError("Invalid email or password")

    logger.info("user_logged_in", user_id=user.id)
    return user, issue_customer_token(user)
