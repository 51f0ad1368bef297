"""Product model and identifier generation.

Products are keyed by a short human readable id (``va-01``, ``va-02`` ...)
and carry a category scoped SKU (``VA-RIN-001``). Both are generated when the
creator does not supply them.
"""

import re
from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String, Text, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from shared.database import Base, isoformat, utc_now

_PRODUCT_ID_PATTERN = re.compile(r"va-(\d+)")


class MetalFinish(Enum):
    GOLD = "gold"
    ROSE_GOLD = "rose-gold"
    SILVER = "silver"
    PLATINUM = "platinum"


class Product(Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    sku: Mapped[str] = mapped_column(String(50), unique=True)
    title: Mapped[str] = mapped_column(String(255))
    category: Mapped[str] = mapped_column(String(100), index=True)
    price: Mapped[float] = mapped_column(Float)
    mrp: Mapped[float | None] = mapped_column(Float, nullable=True)
    cost_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    stock_qty: Mapped[int] = mapped_column(Integer, default=0)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    metal_finish: Mapped[str | None] = mapped_column(String(20), nullable=True)
    images: Mapped[list] = mapped_column(JSON, default=list)
    description: Mapped[str] = mapped_column(Text, default="")
    short_description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    tags: Mapped[list] = mapped_column(JSON, default=list)
    dimensions: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    shipping_class: Mapped[str | None] = mapped_column(String(50), nullable=True)
    slug: Mapped[str] = mapped_column(String(200), unique=True, index=True)
    is_new: Mapped[bool] = mapped_column(Boolean, default=False)
    size_options: Mapped[list | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    def decrement_stock(self, quantity: int) -> None:
        """Reduce stock by ``quantity``, never going below zero."""
        self.stock_qty = max(0, (self.stock_qty or 0) - quantity)

    def to_dict(self) -> dict:
        return {
            "product_id": self.id,
            "sku": self.sku,
            "title": self.title,
            "category": self.category,
            "price": self.price,
            "mrp": self.mrp,
            "cost_price": self.cost_price,
            "stock_qty": self.stock_qty,
            "weight": self.weight,
            "metal_finish": self.metal_finish,
            "images": list(self.images or []),
            "description": self.description,
            "short_description": self.short_description,
            "tags": list(self.tags or []),
            "dimensions": self.dimensions,
            "shipping_class": self.shipping_class,
            "slug": self.slug,
            "is_new": bool(self.is_new),
            "size_options": self.size_options,
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }


def product_number(product_id: str) -> int:
    match = _PRODUCT_ID_PATTERN.fullmatch(product_id or "")
    return int(match.group(1)) if match else 0


def next_product_id(session: Session) -> str:
    ids = session.scalars(select(Product.id)).all()
    next_number = max([0, *(product_number(pid) for pid in ids)]) + 1
    return f"va-{next_number:02d}"


def next_sku(session: Session, category: str) -> str:
    prefix = category[:3].upper()
    pattern = re.compile(rf"{re.escape(prefix)}-(\d+)")
    skus = session.scalars(select(Product.sku).where(Product.category == category)).all()
    numbers = [int(m.group(1)) for m in (pattern.search(sku or "") for sku in skus) if m]
    return f"VA-{prefix}-{max([0, *numbers]) + 1:03d}"
