"""Storefront product reads: listing, lookups, suggestions and purchase checks."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from catalogue.collection.collection import Collection
from catalogue.domain import product_cache
from catalogue.product.product import Product, product_number
from ordering.order.order import Order, OrderStatus, PaymentStatus
from shared.exceptions import ObjectNotFoundError

SUGGESTION_LIMIT = 8
SUGGESTED_COLLECTION_LIMIT = 4


def _all_products(session: Session) -> list[dict]:
    def load():
        products = session.scalars(select(Product)).all()
        ordered = sorted(products, key=lambda p: (product_number(p.id), p.id))
        return [product.to_dict() for product in ordered]

    return product_cache.get_or_set("all", load)


def list_products(
    session: Session,
    limit: int = 20,
    offset: int = 0,
    category: str | None = None,
    include_all: bool = False,
) -> dict:
    products = _all_products(session)
    if category:
        wanted = category.strip().lower()
        products = [p for p in products if p["category"] == wanted]

    total = len(products)
    if include_all:
        page = products
    else:
        page = products[offset : offset + limit]
    return {
        "products": page,
        "total": total,
        "hasMore": (not include_all) and offset + len(page) < total,
    }


def get_product_by_slug(session: Session, slug: str) -> Product:
    product = session.scalar(select(Product).where(Product.slug == slug))
    if product is None:
        raise ObjectNotFoundError({"slug": ["Product not found"]})
    return product


def get_product_by_id(session: Session, product_id: str) -> Product:
    product = session.get(Product, product_id)
    if product is None:
        raise ObjectNotFoundError({"product_id": ["Product not found"]})
    return product


def _related(session: Session, product: Product, **criteria) -> list[dict]:
    query = select(Product).where(Product.id != product.id).limit(SUGGESTION_LIMIT)
    for field, value in criteria.items():
        query = query.where(getattr(Product, field) == value)
    return [p.to_dict() for p in session.scalars(query).all()]


def product_suggestions(session: Session, slug: str) -> dict:
    product = get_product_by_slug(session, slug)

    collections = session.scalars(select(Collection).where(Collection.is_active.is_(True))).all()
    containing = [c for c in collections if product.id in (c.product_ids or [])]
    featured_elsewhere = [c for c in collections if c.is_featured and product.id not in (c.product_ids or [])]

    return {
        "related_products": _related(session, product, category=product.category),
        "same_metal_finish": _related(session, product, metal_finish=product.metal_finish)
        if product.metal_finish
        else [],
        "collections": [c.to_dict() for c in containing],
        "suggested_collections": [c.to_dict() for c in featured_elsewhere[:SUGGESTED_COLLECTION_LIMIT]],
    }


def has_purchased(session: Session, slug: str, user_id: str) -> bool:
    """True when a paid, delivered order of ``user_id`` contains the product."""
    product = get_product_by_slug(session, slug)
    orders = session.scalars(
        select(Order).where(
            Order.user_id == user_id,
            Order.payment_status == PaymentStatus.PAID.value,
            Order.status == OrderStatus.DELIVERED.value,
        )
    ).all()
    return any(item.get("product_id") == product.id for order in orders for item in order.items or [])
