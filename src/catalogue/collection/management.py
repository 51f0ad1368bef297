"""Collections: storefront listing and back-office CRUD."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from catalogue.collection.collection import Collection
from catalogue.domain import collection_cache, logger
from shared.cache import caches
from shared.database import get_or_raise
from shared.exceptions import ValidationError

def _ordered(session: Session):
    return session.scalars(select(Collection).order_by(Collection.display_order, Collection.created_at)).all()


def list_public_collections(session: Session, featured_only: bool = False) -> list[dict]:
    key = "featured" if featured_only else "active"

    def load():
        collections = [c for c in _ordered(session) if c.is_active]
        if featured_only:
            collections = [c for c in collections if c.is_featured]
        return [c.to_dict() for c in collections]

    return collection_cache.get_or_set(key, load)


def list_all_collections(session: Session) -> list[Collection]:
    return list(_ordered(session))


def _assert_slug_available(session: Session, slug: str, exclude_id: str | None = None) -> None:
    query = select(Collection.id).where(Collection.slug == slug)
    if exclude_id:
        query = query.where(Collection.id != exclude_id)
    if session.scalar(query) is not None:
        raise ValidationError({"slug": ["Collection with this slug already exists"]})


def create_collection(session: Session, data: dict) -> Collection:
    values = {key: value for key, value in data.items() if value is not None}
    _assert_slug_available(session, values["slug"])

    collection = Collection(**values)
    session.add(collection)
    session.commit()
    caches.invalidate("collections")
    logger.info("collection_created", collection_id=collection.id, slug=collection.slug)
    return collection


def update_collection(session: Session, collection_id: str, changes: dict) -> Collection:
    collection = get_or_raise(session, Collection, collection_id)
    if not changes:
        raise ValidationError({"_entity": ["No updates provided"]})
    if "slug" in changes and changes["slug"] != collection.slug:
        _assert_slug_available(session, changes["slug"], exclude_id=collection.id)

    for field, value in changes.items():
        setattr(collection, field, value)
    session.commit()
    caches.invalidate("collections")
    return collection


def delete_collection(session: Session, collection_id: str) -> None:
    collection = get_or_raise(session, Collection, collection_id)
    session.delete(collection)
    session.commit()
    caches.invalidate("collections")
    logger.info("collection_deleted", collection_id=collection_id)
