import os
from pathlib import Path

import pytest

TEST_ENVIRONMENT = {
    "DATABASE_URL": "sqlite://",
    "SECRET_KEY": "test-secret-key",
    "BCRYPT_ROUNDS": "4",
    "RAZORPAY_KEY_ID": "rzp_test_key",
    "RAZORPAY_KEY_SECRET": "rzp_test_secret",
    "PAYMENT_GATEWAY": "fake",
    "ORDER_RATE_LIMIT": "5",
    "MESSAGE_RATE_LIMIT": "3",
    "LOG_LEVEL": "WARNING",
}


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_configure(config):
    """Point the application at the test configuration before any module under test is imported.

    Caches and rate limiters read their settings at import time.
    """
    os.environ["VAIRANYA_ENV"] = config.getoption("--env")
    for name, value in TEST_ENVIRONMENT.items():
        os.environ[name] = value


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from shared.config import reset_settings
    from shared.database import reset_engine
    from shared.utils.db import drop_db, setup_db

    reset_settings()
    reset_engine()
    setup_db()

    yield

    drop_db()
    reset_engine()


@pytest.fixture(autouse=True)
def run_around_tests():
    """Empty every table and in-process cache after each test."""
    from payments.gateway import reset_gateway
    from shared.cache import caches
    from shared.ratelimit import reset_limiters
    from shared.utils.db import reset_data

    caches.clear_all()

    yield

    reset_data()
    caches.clear_all()
    reset_limiters()
    reset_gateway()


@pytest.fixture()
def session():
    from shared.database import new_session

    db_session = new_session()
    yield db_session
    db_session.close()


# ---------------------------------------------------------------------------
# Principals and tokens
# ---------------------------------------------------------------------------
@pytest.fixture()
def superadmin():
    from shared.auth import Principal

    return Principal(subject="priya", kind="staff", role="superadmin", name="Priya")


@pytest.fixture()
def admin():
    from shared.auth import Principal

    return Principal(subject="arjun", kind="staff", role="admin", name="Arjun")


@pytest.fixture()
def worker():
    from shared.auth import Principal

    return Principal(subject="meera", kind="staff", role="worker", name="Meera")


@pytest.fixture()
def other_worker():
    from shared.auth import Principal

    return Principal(subject="ravi", kind="staff", role="worker", name="Ravi")


def _staff_token(principal):
    from shared.auth import PrincipalKind, Role, create_access_token

    return create_access_token(principal.subject, PrincipalKind.STAFF, role=Role(principal.role), name=principal.name)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def headers_for():
    """Build bearer headers for an arbitrary staff principal."""
    return lambda principal: bearer(_staff_token(principal))


@pytest.fixture()
def superadmin_headers(superadmin):
    return bearer(_staff_token(superadmin))


@pytest.fixture()
def admin_headers(admin):
    return bearer(_staff_token(admin))


@pytest.fixture()
def worker_headers(worker):
    return bearer(_staff_token(worker))


@pytest.fixture()
def customer_user(session):
    from identity.user.registration import register_user

    return register_user(session, name="Asha Rao", email="asha@example.com", password="s3cret-pass", phone="9876543210")


@pytest.fixture()
def customer(customer_user):
    from shared.auth import Principal

    return Principal(subject=customer_user.id, kind="customer", name=customer_user.name, email=customer_user.email)


@pytest.fixture()
def customer_headers(customer_user):
    from identity.user.registration import issue_customer_token

    return bearer(issue_customer_token(customer_user))


# ---------------------------------------------------------------------------
# Test data builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def order_draft():
    def build(**overrides):
        draft = {
            "items": [
                {"product_id": "va-01", "sku": "VA-EAR-001", "title": "Kundan Jhumka", "quantity": 1, "price": 2499}
            ],
            "customer": {"name": "Asha Rao", "email": "Asha@Example.com", "phone": "9876543210"},
            "shipping_address": {
                "name": "Asha Rao",
                "address_line1": "12 MG Road",
                "city": "Bengaluru",
                "state": "Karnataka",
                "pincode": "560001",
            },
            "subtotal": 2499,
            "shipping": 0,
            "total": 2499,
            "payment_method": "cod",
        }
        draft.update(overrides)
        return draft

    return build


@pytest.fixture()
def product(session):
    from catalogue.product.management import create_product

    return create_product(
        session,
        {
            "title": "Kundan Jhumka",
            "category": "earrings",
            "price": 2499,
            "slug": "kundan-jhumka",
            "stock_qty": 10,
            "metal_finish": "gold",
        },
    )
