import pytest
from catalogue.product.product import Product
from identity.customer.customer import Customer
from ordering.offer.management import create_offer
from ordering.order.order import Order
from payments.checkout.creation import create_gateway_order
from payments.checkout.verification import verify_payment
from payments.gateway import get_gateway, reset_gateway, set_gateway
from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.port import compute_signature
from pydantic import ValidationError as SchemaValidationError
from shared.config import get_settings, reset_settings
from shared.exceptions import ConfigurationError, PaymentGatewayError, ValidationError
from sqlalchemy import func, select

CUSTOMER = {"name": "Asha Rao", "email": "asha@example.com", "phone": "9876543210"}


def _signed(order_id="order_abc", payment_id="pay_xyz"):
    secret = get_settings().razorpay_key_secret
    return {
        "razorpay_order_id": order_id,
        "razorpay_payment_id": payment_id,
        "razorpay_signature": compute_signature(secret, order_id, payment_id),
    }


def _order_count(session):
    return session.scalar(select(func.count()).select_from(Order))


class TestCreateGatewayOrder:
    def test_opens_order_with_customer_notes(self):
        gateway = FakeGateway("rzp_test_key", "rzp_test_secret")
        set_gateway(gateway)

        result = create_gateway_order(249900, CUSTOMER, notes={"items_count": 2})

        assert result["order_id"].startswith("order_fake_")
        assert result["amount"] == 249900
        assert result["currency"] == "INR"
        assert result["key_id"] == "rzp_test_key"
        assert result["receipt"].startswith("receipt_")
        assert gateway.calls[0]["notes"] == {
            "items_count": "2",
            "customer_name": "Asha Rao",
            "customer_email": "asha@example.com",
            "customer_phone": "9876543210",
        }

    def test_amount_below_one_rupee_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            create_gateway_order(99, CUSTOMER)

        assert exc.value.message == "Invalid amount. Minimum order value is ₹1"

    def test_customer_name_and_email_are_required(self):
        with pytest.raises(ValidationError) as exc:
            create_gateway_order(1000, {"name": "Asha"})

        assert exc.value.message == "Customer name and email are required"

    def test_gateway_refusal_surfaces_as_gateway_error(self):
        gateway = FakeGateway()
        gateway.configure(should_succeed=False, failure_reason="Authentication failed")
        set_gateway(gateway)

        with pytest.raises(PaymentGatewayError) as exc:
            create_gateway_order(1000, CUSTOMER)

        assert exc.value.status_code == 502
        assert exc.value.message == "Authentication failed"

    def test_missing_keys_mean_gateway_not_configured(self, monkeypatch):
        monkeypatch.delenv("RAZORPAY_KEY_SECRET")
        reset_settings()
        reset_gateway()
        try:
            with pytest.raises(ConfigurationError) as exc:
                get_gateway()
        finally:
            monkeypatch.undo()
            reset_settings()

        assert exc.value.message == "Payment gateway not configured"


class TestVerifyPayment:
    def test_valid_signature_creates_confirmed_paid_order(self, session, product, order_draft):
        order = verify_payment(session, **_signed(), order_data=order_draft(payment_method="razorpay"))

        assert order.status == "confirmed"
        assert order.payment_status == "paid"
        assert order.payment_method == "razorpay"
        assert order.razorpay_order_id == "order_abc"
        assert order.razorpay_payment_id == "pay_xyz"
        session.refresh(product)
        assert product.stock_qty == 9
        assert session.scalar(select(Customer).where(Customer.email == "asha@example.com")) is not None

    def test_invalid_signature_is_rejected_before_anything_is_written(self, session, order_draft):
        payload = _signed()
        payload["razorpay_signature"] = "0" * 64

        with pytest.raises(ValidationError) as exc:
            verify_payment(session, **payload, order_data=order_draft())

        assert exc.value.message == "Payment verification failed: Invalid signature"
        assert _order_count(session) == 0

    def test_signature_is_checked_before_order_data(self, session):
        with pytest.raises(ValidationError) as exc:
            verify_payment(
                session,
                razorpay_order_id="order_abc",
                razorpay_payment_id="pay_xyz",
                razorpay_signature="forged",
                order_data=None,
            )

        assert exc.value.message == "Payment verification failed: Invalid signature"

    def test_order_data_is_required(self, session):
        with pytest.raises(ValidationError) as exc:
            verify_payment(session, **_signed(), order_data=None)

        assert exc.value.message == "Order data is required"

    def test_malformed_order_data_is_rejected_without_writing(self, session, order_draft):
        with pytest.raises(SchemaValidationError):
            verify_payment(session, **_signed(), order_data=order_draft(items=[{"product_id": "va-01", "quantity": 0}]))

        assert _order_count(session) == 0

    def test_offer_usage_is_counted(self, session, order_draft):
        offer = create_offer(session, {"title": "Welcome", "discount_type": "percentage", "discount_value": 10})

        verify_payment(session, **_signed(), order_data=order_draft(offer_id=offer.id))

        session.refresh(offer)
        assert offer.used_count == 1

    def test_missing_product_does_not_fail_verification(self, session, order_draft):
        order = verify_payment(session, **_signed(), order_data=order_draft())

        assert order.id is not None
        assert session.get(Product, "va-01") is None
