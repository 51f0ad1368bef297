import httpx
from payments.gateway.razorpay_adapter import RazorpayGateway


def _gateway(handler):
    return RazorpayGateway("rzp_test_key", "rzp_test_secret", transport=httpx.MockTransport(handler))


def test_create_order_posts_to_orders_with_basic_auth():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["authorization"]
        seen["body"] = request.read()
        return httpx.Response(
            200,
            json={"id": "order_Nz1", "amount": 249900, "currency": "INR", "receipt": "receipt_1", "status": "created"},
        )

    result = _gateway(handler).create_order(249900, "INR", "receipt_1", {"customer_name": "Asha"})

    assert result.success
    assert result.gateway_order_id == "order_Nz1"
    assert result.gateway_status == "created"
    assert seen["url"] == "https://api.razorpay.com/v1/orders"
    assert seen["auth"].startswith("Basic ")
    assert b'"receipt":"receipt_1"' in seen["body"].replace(b" ", b"")


def test_error_description_is_reported():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"code": "BAD_REQUEST_ERROR", "description": "Authentication failed"}})

    result = _gateway(handler).create_order(1000, "INR", "receipt_1", {})

    assert not result.success
    assert result.failure_reason == "Authentication failed"


def test_network_failure_is_reported_as_unavailable():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    result = _gateway(handler).create_order(1000, "INR", "receipt_1", {})

    assert not result.success
    assert result.failure_reason == "Payment gateway unavailable"
