import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient
from shared.api import register_exception_handlers
from shared.exceptions import RateLimitExceeded
from shared.ratelimit import RateLimiter, client_ip, rate_limited, register_limiter, reset_limiters


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestRateLimiter:
    def test_allows_up_to_max_requests_per_window(self):
        limiter = RateLimiter(3, 60, clock=FakeClock())

        assert limiter.hit("10.0.0.1") == 2
        assert limiter.hit("10.0.0.1") == 1
        assert limiter.hit("10.0.0.1") == 0
        with pytest.raises(RateLimitExceeded):
            limiter.hit("10.0.0.1")

    def test_keys_are_counted_independently(self):
        limiter = RateLimiter(1, 60, clock=FakeClock())

        limiter.hit("10.0.0.1")
        limiter.hit("10.0.0.2")

        with pytest.raises(RateLimitExceeded):
            limiter.hit("10.0.0.1")

    def test_window_resets_after_expiry(self):
        clock = FakeClock()
        limiter = RateLimiter(1, 60, clock=clock)
        limiter.hit("10.0.0.1")

        clock.now = 60

        assert limiter.hit("10.0.0.1") == 0

    def test_reset_limiters_clears_registered_limiters(self):
        limiter = register_limiter(1, 60)
        limiter.hit("10.0.0.1")

        reset_limiters()

        assert limiter.hit("10.0.0.1") == 0


def _request(peer, **headers):
    raw_headers = [(name.replace("_", "-").encode(), value.encode()) for name, value in headers.items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw_headers, "client": (peer, 5123)})


class TestClientIp:
    def test_forwarded_headers_are_ignored_from_untrusted_peers(self):
        request = _request("198.51.100.7", x_forwarded_for="203.0.113.9", x_real_ip="203.0.113.10")

        assert client_ip(request, trusted_proxies=()) == "198.51.100.7"

    def test_trusted_proxy_forwards_first_client_address(self):
        request = _request("10.0.0.2", x_forwarded_for="203.0.113.9, 10.0.0.1")

        assert client_ip(request, trusted_proxies=("10.0.0.2",)) == "203.0.113.9"

    def test_trusted_proxy_falls_back_to_real_ip_then_peer(self):
        proxies = ("10.0.0.2",)

        assert client_ip(_request("10.0.0.2", x_real_ip="203.0.113.10"), trusted_proxies=proxies) == "203.0.113.10"
        assert client_ip(_request("10.0.0.2"), trusted_proxies=proxies) == "10.0.0.2"

    def test_spoofed_header_does_not_escape_the_limit(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.post("/limited", dependencies=[Depends(rate_limited(RateLimiter(2, 60)))])
        async def limited():
            return {"success": True}

        client = TestClient(app)
        statuses = [
            client.post("/limited", headers={"X-Forwarded-For": f"203.0.113.{n}"}).status_code for n in range(3)
        ]

        assert statuses == [200, 200, 429]
