import importlib

from sqlalchemy import delete

from shared.database import Base, get_engine, new_session

# Modules declaring ORM models; importing them registers their tables on Base.metadata
MODEL_MODULES = (
    "identity.user.user",
    "identity.user.address",
    "identity.user.wishlist",
    "identity.staff.staff",
    "identity.customer.customer",
    "catalogue.product.product",
    "catalogue.category.category",
    "catalogue.collection.collection",
    "catalogue.carousel.slide",
    "catalogue.settings.site_settings",
    "ordering.order.order",
    "ordering.offer.offer",
    "fulfillment.task.task",
    "reviews.review.review",
    "support.message.message",
)


def load_models() -> None:
    for module in MODEL_MODULES:
        importlib.import_module(module)


def setup_db() -> None:
    """Setup database schema"""
    load_models()
    Base.metadata.create_all(get_engine())


def drop_db() -> None:
    """Drop database schema"""
    load_models()
    Base.metadata.drop_all(get_engine())


def reset_data() -> None:
    """Delete every row from every table, children first."""
    with new_session() as session:
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(delete(table))
        session.commit()
