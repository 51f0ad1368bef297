"""Persistence: one SQLAlchemy engine and session factory per process.

The store is chosen at deploy time through ``DATABASE_URL``. Every bounded
context declares its tables on :class:`Base`.
"""

from collections.abc import Iterator
from datetime import UTC, datetime
from uuid import uuid4

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from shared.config import get_settings
from shared.exceptions import ObjectNotFoundError

_IN_MEMORY_URLS = {"sqlite://", "sqlite:///:memory:"}

_engine: Engine | None = None
_session_factory: sessionmaker | None = None


class Base(DeclarativeBase):
    pass


def utc_now() -> datetime:
    return datetime.now(UTC)


def new_id() -> str:
    return str(uuid4())


def _build_engine(url: str) -> Engine:
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in _IN_MEMORY_URLS:
            # A single shared connection keeps the in-memory database alive
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


def get_engine() -> Engine:
    global _engine, _session_factory
    if _engine is None:
        _engine = _build_engine(get_settings().database_url)
        _session_factory = sessionmaker(bind=_engine, expire_on_commit=False)
    return _engine


def reset_engine() -> None:
    """Dispose the current engine (used when settings change, e.g. in tests)."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


def new_session() -> Session:
    get_engine()
    return _session_factory()


def get_session() -> Iterator[Session]:
    """FastAPI dependency yielding a request-scoped session.

    Application services commit their own work; anything left uncommitted
    when the request fails is rolled back.
    """
    session = new_session()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_or_raise(session: Session, model, identifier, label: str | None = None):
    """Load a row by primary key or raise ObjectNotFoundError."""
    instance = session.get(model, identifier) if identifier else None
    if instance is None:
        name = label or model.__name__
        raise ObjectNotFoundError({"_entity": [f"{name} not found"]})
    return instance


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from backends without tz support (SQLite)."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def isoformat(value: datetime | None) -> str | None:
    return as_utc(value).isoformat() if value is not None else None
