import pytest
from ordering.order.cancellation import CANCELLED_MESSAGE, REFUND_STARTED_MESSAGE, cancel_order
from ordering.order.creation import create_order
from ordering.order.refund import refund_details, update_refund_status
from shared.auth import Principal
from shared.exceptions import ObjectNotFoundError, PermissionDenied, ValidationError


@pytest.fixture()
def place(session, order_draft):
    def build(**overrides):
        draft = order_draft()
        values = {
            "items": draft["items"],
            "customer": draft["customer"],
            "shipping_address": draft["shipping_address"],
            "total": 2499,
            "user_id": "user-1",
        }
        values.update(overrides)
        return create_order(session, **values)

    return build


@pytest.fixture()
def owner():
    return Principal(subject="user-1", kind="customer")


class TestCancelOrder:
    def test_cod_order_is_cancelled(self, session, place, owner):
        order = place(status="confirmed")

        cancelled, message = cancel_order(session, order.id, owner)

        assert cancelled.status == "cancelled"
        assert message == CANCELLED_MESSAGE

    def test_paid_online_order_starts_refund(self, session, place, owner):
        order = place(status="confirmed", payment_method="razorpay", payment_status="paid")

        cancelled, message = cancel_order(session, order.id, owner)

        assert cancelled.refund_status == "started"
        assert cancelled.payment_status == "paid"
        assert message == REFUND_STARTED_MESSAGE

    def test_shipped_order_cannot_be_cancelled(self, session, place, owner):
        order = place(status="shipped")

        with pytest.raises(ValidationError) as exc:
            cancel_order(session, order.id, owner)

        assert exc.value.message == "Order cannot be cancelled. Current status: shipped"

    def test_cannot_cancel_someone_elses_order(self, session, place):
        order = place(status="pending")

        with pytest.raises(PermissionDenied):
            cancel_order(session, order.id, Principal(subject="user-2", kind="customer"))

    def test_unknown_action_is_rejected(self, session, place, owner):
        order = place(status="pending")

        with pytest.raises(ValidationError):
            cancel_order(session, order.id, owner, action="return")

    def test_missing_order_is_not_found(self, session, owner):
        with pytest.raises(ObjectNotFoundError):
            cancel_order(session, "missing", owner)


class TestRefunds:
    def test_full_refund_workflow(self, session, place, owner):
        order = place(status="confirmed", payment_method="razorpay", payment_status="paid", razorpay_payment_id="pay_1")
        cancel_order(session, order.id, owner)

        assert refund_details(session, order.id)["can_refund"] is True

        update_refund_status(session, order.id, "processing")
        refunded = update_refund_status(session, order.id, "completed", refund_id="rfnd_1")

        assert refunded.payment_status == "refunded"
        details = refund_details(session, order.order_number)
        assert details["refund_status"] == "completed"
        assert details["refund_id"] == "rfnd_1"
        assert details["razorpay_payment_id"] == "pay_1"

    def test_cod_order_refund_is_rejected(self, session, place):
        order = place(status="cancelled", payment_status="paid")

        with pytest.raises(ValidationError) as exc:
            update_refund_status(session, order.id, "completed")

        assert exc.value.message == "Refund is not applicable for Cash on Delivery orders"

    def test_refund_status_is_required(self, session, place):
        order = place(status="cancelled", payment_method="razorpay", payment_status="paid")

        with pytest.raises(ValidationError):
            update_refund_status(session, order.id, None)

    @pytest.mark.parametrize("payment_status", ["pending", "failed"])
    def test_unpaid_order_refund_is_rejected(self, session, place, payment_status):
        order = place(status="cancelled", payment_method="razorpay", payment_status=payment_status)

        with pytest.raises(ValidationError) as exc:
            update_refund_status(session, order.id, "started")

        assert exc.value.message == "Order must have been paid to process refund"
        session.refresh(order)
        assert order.refund_status is None

    def test_refunded_order_can_still_be_updated(self, session, place):
        order = place(status="cancelled", payment_method="razorpay", payment_status="refunded")

        updated = update_refund_status(session, order.id, "completed", notes="Settled by bank")

        assert updated.refund_status == "completed"
        assert updated.refund_notes == "Settled by bank"
