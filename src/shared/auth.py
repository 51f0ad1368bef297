"""Signed-token authentication and role-based authorization.

Two kinds of principal exist:

- ``customer``: a registered storefront user; the token subject is the user id.
- ``staff``: a back-office account; the token subject is the username and the
  token carries one of the three roles below.

Tokens are HS256 JWTs signed with ``SECRET_KEY``. Every gated endpoint depends
on one of the ``require_*`` dependencies, which verify the signature and expiry
on each request; nothing about identity or role is read from plain headers.

Role hierarchy:
    superadmin (superuser) > admin > worker
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import Enum

import bcrypt
import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from shared.config import get_settings
from shared.exceptions import AuthenticationError, PermissionDenied

logger = structlog.get_logger(__name__)

ALGORITHM = "HS256"


class Role(Enum):
    SUPERADMIN = "superadmin"
    ADMIN = "admin"
    WORKER = "worker"


class PrincipalKind(Enum):
    CUSTOMER = "customer"
    STAFF = "staff"


STAFF_ROLES = {role.value for role in Role}


@dataclass(frozen=True)
class Principal:
    subject: str
    kind: str
    role: str | None = None
    name: str | None = None
    email: str | None = None

    @property
    def is_staff(self) -> bool:
        return self.kind == PrincipalKind.STAFF.value

    @property
    def is_superuser(self) -> bool:
        return self.is_staff and self.role == Role.SUPERADMIN.value

    @property
    def is_worker(self) -> bool:
        return self.is_staff and self.role == Role.WORKER.value


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------
def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str | None) -> bool:
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------
def create_access_token(
    subject: str,
    kind: PrincipalKind,
    role: Role | None = None,
    name: str | None = None,
    email: str | None = None,
    expires_minutes: int | None = None,
) -> str:
    settings = get_settings()
    expires = datetime.now(UTC) + timedelta(minutes=expires_minutes or settings.access_token_expire_minutes)
    claims = {"sub": subject, "kind": kind.value, "exp": expires}
    if role is not None:
        claims["role"] = role.value
    if name:
        claims["name"] = name
    if email:
        claims["email"] = email
    return jwt.encode(claims, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Principal:
    try:
        claims = jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        logger.info("token_rejected", reason=str(exc))
        raise AuthenticationError("Unauthorized") from exc

    subject = claims.get("sub")
    kind = claims.get("kind")
    if not subject or kind not in {k.value for k in PrincipalKind}:
        raise AuthenticationError("Unauthorized")
    role = claims.get("role")
    if kind == PrincipalKind.STAFF.value and role not in STAFF_ROLES:
        raise AuthenticationError("Unauthorized")

    return Principal(
        subject=subject,
        kind=kind,
        role=role,
        name=claims.get("name"),
        email=claims.get("email"),
    )


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------
bearer_scheme = HTTPBearer(auto_error=False)


def get_optional_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Principal | None:
    if credentials is None or not credentials.credentials:
        return None
    return decode_access_token(credentials.credentials)


def get_principal(principal: Principal | None = Depends(get_optional_principal)) -> Principal:
    if principal is None:
        raise AuthenticationError("Unauthorized")
    return principal


def get_current_customer(principal: Principal = Depends(get_principal)) -> Principal:
    if principal.kind != PrincipalKind.CUSTOMER.value:
        raise AuthenticationError("Unauthorized")
    return principal


def require_roles(*roles: Role, message: str = "Forbidden: insufficient role"):
    """Build a dependency admitting staff principals holding one of ``roles``."""
    allowed = {role.value for role in roles}

    def dependency(principal: Principal = Depends(get_principal)) -> Principal:
        if not principal.is_staff:
            raise PermissionDenied("Staff access required")
        if principal.role not in allowed:
            raise PermissionDenied(message)
        return principal

    return dependency


require_staff = require_roles(Role.SUPERADMIN, Role.ADMIN, Role.WORKER)
require_admin = require_roles(Role.SUPERADMIN, Role.ADMIN, message="Forbidden: admin access required")
require_superuser = require_roles(Role.SUPERADMIN, message="Unauthorized: Only superusers can perform this action")
