from datetime import UTC, datetime

import pytest
from ordering.order.order import Order, order_number_for
from shared.exceptions import ValidationError


def _order(**overrides):
    values = {"status": "pending", "payment_method": "cod", "payment_status": "pending", "total": 2499.0}
    values.update(overrides)
    return Order(**values)


class TestOrderNumber:
    def test_uses_year_and_last_six_digits_of_epoch_millis(self):
        moment = datetime(2025, 3, 14, 9, 26, 53, 589000, tzinfo=UTC)
        millis = str(int(moment.timestamp() * 1000))

        assert order_number_for(moment) == f"ORD-2025-{millis[-6:]}"


class TestCancel:
    @pytest.mark.parametrize("status", ["pending", "confirmed", "processing", "packing"])
    def test_cancellable_statuses(self, status):
        order = _order(status=status)

        refund_started = order.cancel()

        assert order.status == "cancelled"
        assert refund_started is False
        assert order.refund_status is None

    @pytest.mark.parametrize("status", ["packed", "shipped", "delivered", "cancelled"])
    def test_late_statuses_cannot_be_cancelled(self, status):
        order = _order(status=status)

        with pytest.raises(ValidationError) as exc:
            order.cancel()

        assert exc.value.message == f"Order cannot be cancelled. Current status: {status}"
        assert order.status == status

    def test_cancelling_paid_online_order_starts_refund(self):
        order = _order(status="confirmed", payment_method="razorpay", payment_status="paid")

        assert order.cancel() is True
        assert order.refund_status == "started"
        assert order.payment_status == "paid"

    def test_cancelling_cod_order_never_starts_refund(self):
        order = _order(status="confirmed", payment_status="paid")

        assert order.cancel() is False
        assert order.refund_status is None


class TestChangeStatus:
    def test_any_valid_status_is_accepted(self):
        order = _order(status="delivered")

        order.change_status("processing")

        assert order.status == "processing"

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError):
            _order().change_status("lost")

    def test_admin_cancel_of_paid_online_order_starts_refund(self):
        order = _order(status="shipped", payment_method="upi", payment_status="paid")

        order.change_status("cancelled")

        assert order.refund_status == "started"


class TestRefund:
    def test_can_refund_only_cancelled_paid_online_orders(self):
        assert _order(status="cancelled", payment_method="razorpay", payment_status="paid").can_refund
        assert not _order(status="cancelled", payment_method="cod", payment_status="paid").can_refund
        assert not _order(status="confirmed", payment_method="razorpay", payment_status="paid").can_refund
        assert not _order(status="cancelled", payment_method="razorpay", payment_status="pending").can_refund

    def test_completing_refund_marks_payment_refunded(self):
        order = _order(status="cancelled", payment_method="razorpay", payment_status="paid", refund_status="started")

        order.update_refund("completed", refund_id="rfnd_1", notes="Back to card")

        assert order.refund_status == "completed"
        assert order.payment_status == "refunded"
        assert order.razorpay_refund_id == "rfnd_1"
        assert order.refund_notes == "Back to card"

    def test_processing_refund_keeps_payment_paid(self):
        order = _order(status="cancelled", payment_method="razorpay", payment_status="paid")

        order.update_refund("processing")

        assert order.payment_status == "paid"

    def test_refund_rejected_for_cod(self):
        order = _order(status="cancelled", payment_method="cod", payment_status="paid")

        with pytest.raises(ValidationError) as exc:
            order.update_refund("completed")

        assert exc.value.message == "Refund is not applicable for Cash on Delivery orders"

    def test_refund_rejected_for_order_not_cancelled(self):
        order = _order(status="delivered", payment_method="razorpay", payment_status="paid")

        with pytest.raises(ValidationError) as exc:
            order.update_refund("started")

        assert exc.value.message == "Refund can only be managed for cancelled orders"

    def test_refund_rejected_for_unpaid_order(self):
        order = _order(status="cancelled", payment_method="razorpay", payment_status="failed")

        with pytest.raises(ValidationError):
            order.update_refund("started")

    def test_unknown_refund_status_is_rejected(self):
        order = _order(status="cancelled", payment_method="razorpay", payment_status="paid")

        with pytest.raises(ValidationError):
            order.update_refund("reversed")
