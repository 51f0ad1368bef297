from datetime import UTC, datetime
from unittest.mock import patch

import pytest
from catalogue.product.product import Product
from identity.customer.customer import Customer
from ordering.offer.management import create_offer
from ordering.offer.offer import Offer
from ordering.order.creation import create_manual_order, generate_order_number, place_cod_order
from ordering.order.draft import OrderDraft, StorefrontOrderDraft
from ordering.order.order import order_number_for
from pydantic import ValidationError
from sqlalchemy import select


def _storefront(order_draft, **overrides):
    return StorefrontOrderDraft.model_validate(order_draft(**overrides))


class TestPlaceCodOrder:
    def test_creates_pending_order_with_cleaned_details(self, session, order_draft):
        order = place_cod_order(session, _storefront(order_draft))

        assert order.status == "pending"
        assert order.payment_status == "pending"
        assert order.payment_method == "cod"
        assert order.order_number.startswith(f"ORD-{order.created_at.year}-")
        assert order.customer["email"] == "asha@example.com"
        assert order.shipping_address["country"] == "India"
        assert order.items[0]["quantity"] == 1

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"items": []}, "items"),
            ({"items": [{"product_id": "va-01", "quantity": 0}]}, "items.0.quantity"),
            ({"customer": {"name": "Asha", "email": "asha@example.com"}}, "customer.phone"),
            ({"customer": {"name": 42, "email": "asha@example.com", "phone": "98765"}}, "customer.name"),
            ({"shipping_address": {"city": "Pune"}}, "shipping_address.address_line1"),
            ({"status": "lost"}, "status"),
            ({"payment_method": "barter"}, "payment_method"),
        ],
        ids=["no_items", "zero_quantity", "no_phone", "non_string_name", "no_address", "bad_status", "bad_method"],
    )
    def test_incomplete_or_malformed_drafts_are_rejected(self, order_draft, overrides, field):
        with pytest.raises(ValidationError) as exc:
            _storefront(order_draft, **overrides)

        assert field in {".".join(str(part) for part in error["loc"]) for error in exc.value.errors()}

    def test_decrements_stock_without_going_negative(self, session, product, order_draft):
        items = [{"product_id": "va-01", "sku": "VA-EAR-001", "title": "Kundan Jhumka", "quantity": 12, "price": 2499}]

        place_cod_order(session, _storefront(order_draft, items=items))

        session.refresh(product)
        assert product.stock_qty == 0

    def test_unknown_product_does_not_block_the_order(self, session, order_draft):
        items = [{"product_id": "va-99", "quantity": 1, "price": 100}]

        order = place_cod_order(session, _storefront(order_draft, items=items))

        assert order.id is not None
        assert session.get(Product, "va-99") is None

    def test_records_customer_in_directory(self, session, order_draft):
        place_cod_order(session, _storefront(order_draft))

        customer = session.scalar(select(Customer).where(Customer.email == "asha@example.com"))
        assert customer is not None
        assert customer.phone == "9876543210"

    def test_counts_offer_usage(self, session, order_draft):
        offer = create_offer(session, {"title": "Welcome", "discount_type": "fixed", "discount_value": 100})

        place_cod_order(session, _storefront(order_draft, offer_id=offer.id, discount=100, total=2399))

        session.refresh(offer)
        assert offer.used_count == 1

    def test_follow_up_failure_keeps_the_order(self, session, product, order_draft):
        with patch("ordering.order.creation.record_offer_usage", side_effect=RuntimeError("store down")):
            order = place_cod_order(session, _storefront(order_draft, offer_id="offer-1"))

        assert order.id is not None
        session.refresh(product)
        assert product.stock_qty == 9


class TestOrderNumbers:
    def test_collision_steps_forward_one_millisecond(self, session, order_draft):
        moment = datetime(2025, 1, 1, 10, 0, 0, 0, tzinfo=UTC)
        with patch("ordering.order.creation.utc_now", return_value=moment):
            first = place_cod_order(session, _storefront(order_draft))
            second = place_cod_order(session, _storefront(order_draft))

        assert first.order_number == order_number_for(moment)
        assert second.order_number != first.order_number
        assert generate_order_number(session, moment) not in {first.order_number, second.order_number}


class TestManualOrder:
    def test_back_office_order_needs_items_customer_and_address(self):
        with pytest.raises(ValidationError) as exc:
            OrderDraft.model_validate({"items": [{"product_id": "va-01", "quantity": 1}]})

        assert {error["loc"][0] for error in exc.value.errors()} == {"customer", "shipping_address"}

    def test_back_office_order_skips_stock_and_offer_effects(self, session, product, order_draft):
        offer = create_offer(session, {"title": "Welcome", "discount_type": "fixed", "discount_value": 100})
        draft = order_draft(offer_id=offer.id, status="confirmed", payment_status="paid")
        draft["customer"] = {"name": "Walk-in", "email": "walkin@example.com"}

        order = create_manual_order(session, OrderDraft.model_validate(draft))

        assert order.status == "confirmed"
        session.refresh(product)
        assert product.stock_qty == 10
        assert session.get(Offer, offer.id).used_count == 0
