"""Category management.

Category names are stored lowercase and trimmed; every operation returns the
full sorted list of names so the back-office can refresh in one round trip.
"""

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from catalogue.category.category import Category, normalize_category_name
from catalogue.domain import category_cache, logger
from catalogue.product.product import Product
from shared.cache import caches
from shared.exceptions import ObjectNotFoundError, ValidationError

DEFAULT_CATEGORIES = ("rings", "earrings", "pendants", "bracelets", "necklaces")


def stored_category_names(session: Session) -> list[str]:
    return sorted(session.scalars(select(Category.name)).all())


def list_categories(session: Session) -> list[str]:
    """Stored categories plus any category in use by a product."""

    def load():
        names = set(stored_category_names(session))
        names.update(session.scalars(select(Product.category).distinct()).all())
        return sorted(name for name in names if name)

    return category_cache.get_or_set("all", load)


def _find(session: Session, name: str) -> Category | None:
    return session.scalar(select(Category).where(Category.name == name))


def _required(name: str | None) -> str:
    normalized = normalize_category_name(name)
    if not normalized:
        raise ValidationError({"name": ["Category name is required"]})
    return normalized


def add_category(session: Session, name: str) -> list[str]:
    normalized = _required(name)
    if _find(session, normalized) is not None:
        raise ValidationError({"name": ["Category already exists"]})

    session.add(Category(name=normalized))
    session.commit()
    caches.invalidate("categories")
    logger.info("category_added", category=normalized)
    return stored_category_names(session)


def rename_category(session: Session, old_name: str, new_name: str) -> list[str]:
    old = _required(old_name)
    new = _required(new_name)
    if old == new:
        return stored_category_names(session)

    category = _find(session, old)
    if category is None:
        raise ObjectNotFoundError({"name": ["Category not found"]})
    if _find(session, new) is not None:
        raise ValidationError({"name": ["Category with that name already exists"]})

    category.name = new
    session.execute(update(Product).where(Product.category == old).values(category=new))
    session.commit()
    caches.invalidate("categories", "products")
    logger.info("category_renamed", old=old, new=new)
    return stored_category_names(session)


def delete_category(session: Session, name: str) -> list[str]:
    normalized = _required(name)
    category = _find(session, normalized)
    if category is None:
        raise ObjectNotFoundError({"name": ["Category not found"]})

    session.delete(category)
    session.commit()
    caches.invalidate("categories")
    logger.info("category_deleted", category=normalized)
    return stored_category_names(session)


def seed_categories(session: Session, names=DEFAULT_CATEGORIES) -> list[str]:
    for name in names:
        normalized = normalize_category_name(name)
        if normalized and _find(session, normalized) is None:
            session.add(Category(name=normalized))
    session.commit()
    caches.invalidate("categories")
    return stored_category_names(session)
