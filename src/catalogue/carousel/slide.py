from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from shared.database import Base, isoformat, new_id, utc_now


class CarouselSlide(Base):
    """A hero-carousel slide on the storefront home page."""

    __tablename__ = "carousel_slides"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    image_url: Mapped[str] = mapped_column(String(500))
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    subtitle: Mapped[str | None] = mapped_column(String(300), nullable=True)
    link_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    link_text: Mapped[str | None] = mapped_column(String(100), nullable=True)
    order: Mapped[int] = mapped_column("display_order", Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "image_url": self.image_url,
            "title": self.title,
            "subtitle": self.subtitle,
            "link_url": self.link_url,
            "link_text": self.link_text,
            "order": self.order,
            "is_active": bool(self.is_active),
            "created_at": isoformat(self.created_at),
            "updated_at": isoformat(self.updated_at),
        }
