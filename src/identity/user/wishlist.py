from datetime import datetime

from sqlalchemy import DateTime, String, UniqueConstraint, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from identity.domain import logger
from shared.database import Base, isoformat, new_id, utc_now
from shared.exceptions import ValidationError


class WishlistItem(Base):
    __tablename__ = "wishlist_items"
    __table_args__ = (UniqueConstraint("user_id", "product_id", name="uq_wishlist_user_product"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    product_id: Mapped[str] = mapped_column(String(32))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "product_id": self.product_id,
            "created_at": isoformat(self.created_at),
        }


def _find(session: Session, user_id: str, product_id: str) -> WishlistItem | None:
    return session.scalar(
        select(WishlistItem).where(WishlistItem.user_id == user_id, WishlistItem.product_id == product_id)
    )


def list_wishlist(session: Session, user_id: str) -> list[WishlistItem]:
    query = select(WishlistItem).where(WishlistItem.user_id == user_id).order_by(WishlistItem.created_at.desc())
    return list(session.scalars(query).all())


def add_to_wishlist(session: Session, user_id: str, product_id: str | None) -> WishlistItem:
    """Idempotent: adding a product twice returns the existing entry."""
    if not product_id:
        raise ValidationError({"product_id": ["Product ID is required"]})
    item = _find(session, user_id, product_id)
    if item is not None:
        return item

    item = WishlistItem(user_id=user_id, product_id=product_id)
    session.add(item)
    session.commit()
    logger.info("wishlist_item_added", user_id=user_id, product_id=product_id)
    return item


def remove_from_wishlist(session: Session, user_id: str, product_id: str | None) -> None:
    if not product_id:
        raise ValidationError({"product_id": ["Product ID is required"]})
    item = _find(session, user_id, product_id)
    if item is None:
        return
    session.delete(item)
    session.commit()
    logger.info("wishlist_item_removed", user_id=user_id, product_id=product_id)
