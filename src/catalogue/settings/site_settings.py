"""Site-wide branding settings, stored as a single ``main`` row."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, Session, mapped_column

from catalogue.domain import logger, settings_cache
from shared.cache import caches
from shared.database import Base, isoformat, utc_now
from shared.exceptions import ValidationError

SETTINGS_ID = "main"
DEFAULT_SITE_LOGO = "/images/logo-ivory.png"


class SiteSettings(Base):
    __tablename__ = "site_settings"

    id: Mapped[str] = mapped_column(String(20), primary_key=True, default=SETTINGS_ID)
    site_icon: Mapped[str | None] = mapped_column(String(500), nullable=True)
    site_logo: Mapped[str] = mapped_column(String(500), default=DEFAULT_SITE_LOGO)
    updated_by: Mapped[str | None] = mapped_column(String(100), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    def to_dict(self) -> dict:
        return {
            "site_icon": self.site_icon,
            "site_logo": self.site_logo or DEFAULT_SITE_LOGO,
            "updated_by": self.updated_by,
            "updated_at": isoformat(self.updated_at),
        }


def get_site_settings(session: Session) -> dict:
    def load():
        settings = session.get(SiteSettings, SETTINGS_ID)
        if settings is None:
            return {"site_icon": None, "site_logo": DEFAULT_SITE_LOGO, "updated_by": None, "updated_at": None}
        return settings.to_dict()

    return settings_cache.get_or_set(SETTINGS_ID, load)


def update_site_settings(session: Session, changes: dict, updated_by: str) -> SiteSettings:
    if not changes:
        raise ValidationError({"_entity": ["No updates provided"]})

    settings = session.get(SiteSettings, SETTINGS_ID)
    if settings is None:
        settings = SiteSettings(id=SETTINGS_ID, site_logo=DEFAULT_SITE_LOGO)
        session.add(settings)
    for field, value in changes.items():
        setattr(settings, field, value)
    settings.updated_by = updated_by
    session.commit()

    caches.invalidate("settings")
    logger.info("site_settings_updated", fields=sorted(changes), updated_by=updated_by)
    return settings
