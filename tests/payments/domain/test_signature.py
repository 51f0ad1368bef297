import hashlib
import hmac

from payments.gateway.fake_adapter import FakeGateway
from payments.gateway.port import compute_signature, signature_matches


def test_signature_is_hex_hmac_sha256_of_order_and_payment_ids():
    expected = hmac.new(b"secret", b"order_1|pay_1", hashlib.sha256).hexdigest()

    assert compute_signature("secret", "order_1", "pay_1") == expected


def test_matching_signature_is_accepted():
    signature = compute_signature("secret", "order_1", "pay_1")

    assert signature_matches("secret", "order_1", "pay_1", signature)


def test_signature_for_other_payment_is_rejected():
    signature = compute_signature("secret", "order_1", "pay_2")

    assert not signature_matches("secret", "order_1", "pay_1", signature)


def test_signature_with_wrong_secret_is_rejected():
    signature = compute_signature("other-secret", "order_1", "pay_1")

    assert not signature_matches("secret", "order_1", "pay_1", signature)


def test_missing_parts_are_rejected():
    signature = compute_signature("secret", "order_1", "pay_1")

    assert not signature_matches("secret", "order_1", "pay_1", None)
    assert not signature_matches("secret", "", "pay_1", signature)
    assert not signature_matches("secret", "order_1", None, signature)


def test_fake_gateway_records_calls_and_can_refuse_orders():
    gateway = FakeGateway("rzp_test", "secret")

    created = gateway.create_order(249900, "INR", "receipt_1", {"customer_name": "Asha"})
    gateway.configure(should_succeed=False, failure_reason="Gateway offline")
    refused = gateway.create_order(249900, "INR", "receipt_2", {})

    assert created.success
    assert created.gateway_order_id.startswith("order_fake_")
    assert not refused.success
    assert refused.failure_reason == "Gateway offline"
    assert [call["receipt"] for call in gateway.calls] == ["receipt_1", "receipt_2"]
