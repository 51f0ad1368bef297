"""Back-office product management: create, update and delete.

Values arrive already validated by the request schemas; this module owns the
rules that need the database: unique slugs and SKUs, generated ids.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from catalogue.domain import logger
from catalogue.product.product import Product, next_product_id, next_sku
from shared.cache import caches
from shared.database import get_or_raise
from shared.exceptions import ValidationError


def _assert_slug_available(session: Session, slug: str, exclude_id: str | None = None) -> None:
    query = select(Product.id).where(Product.slug == slug)
    if exclude_id:
        query = query.where(Product.id != exclude_id)
    if session.scalar(query) is not None:
        raise ValidationError({"slug": ["Product with this slug already exists"]})


def _assert_sku_available(session: Session, sku: str, exclude_id: str | None = None) -> None:
    query = select(Product.id).where(Product.sku == sku)
    if exclude_id:
        query = query.where(Product.id != exclude_id)
    if session.scalar(query) is not None:
        raise ValidationError({"sku": ["Product with this SKU already exists"]})


def create_product(session: Session, data: dict) -> Product:
    values = {key: value for key, value in data.items() if value is not None}
    _assert_slug_available(session, values["slug"])

    product_id = values.pop("product_id", None) or next_product_id(session)
    if session.get(Product, product_id) is not None:
        raise ValidationError({"product_id": [f"Product {product_id} already exists"]})

    if values.get("sku"):
        _assert_sku_available(session, values["sku"])
    else:
        values["sku"] = next_sku(session, values["category"])

    product = Product(id=product_id, **values)
    session.add(product)
    session.commit()

    caches.invalidate("products", "categories", "stats")
    logger.info("product_created", product_id=product.id, sku=product.sku)
    return product


def update_product(session: Session, product_id: str, changes: dict) -> Product:
    product = get_or_raise(session, Product, product_id)
    if not changes:
        raise ValidationError({"_entity": ["No updates provided"]})
    if "slug" in changes and changes["slug"] != product.slug:
        _assert_slug_available(session, changes["slug"], exclude_id=product.id)
    if "sku" in changes and changes["sku"] != product.sku:
        _assert_sku_available(session, changes["sku"], exclude_id=product.id)

    for field, value in changes.items():
        setattr(product, field, value)
    session.commit()

    caches.invalidate("products", "categories", "stats")
    logger.info("product_updated", product_id=product.id, fields=sorted(changes))
    return product


def delete_product(session: Session, product_id: str) -> None:
    product = get_or_raise(session, Product, product_id)
    session.delete(product)
    session.commit()

    caches.invalidate("products", "categories", "collections", "stats")
    logger.info("product_deleted", product_id=product_id)
