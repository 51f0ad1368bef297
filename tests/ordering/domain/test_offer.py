from datetime import UTC, datetime, timedelta

from ordering.offer.offer import Offer

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


def _offer(**overrides):
    values = {
        "title": "Monsoon sale",
        "discount_type": "percentage",
        "discount_value": 10.0,
        "valid_from": NOW - timedelta(days=1),
        "valid_until": NOW + timedelta(days=1),
        "customer_emails": [],
        "customer_ids": [],
        "used_count": 0,
    }
    values.update(overrides)
    return Offer(**values)


class TestDiscount:
    def test_percentage_discount(self):
        assert _offer().discount_for(2499) == 249.9

    def test_percentage_discount_is_capped(self):
        assert _offer(discount_value=50.0, max_discount=500.0).discount_for(2499) == 500.0

    def test_fixed_discount_never_exceeds_subtotal(self):
        offer = _offer(discount_type="fixed", discount_value=300.0)

        assert offer.discount_for(2499) == 300.0
        assert offer.discount_for(199) == 199.0


class TestAvailability:
    def test_window_is_inclusive(self):
        offer = _offer(valid_from=NOW, valid_until=NOW)

        assert offer.is_within_window(NOW)
        assert not offer.is_within_window(NOW + timedelta(seconds=1))

    def test_usage_limit(self):
        assert not _offer(usage_limit=None, used_count=100).is_exhausted()
        assert not _offer(usage_limit=3, used_count=2).is_exhausted()
        assert _offer(usage_limit=3, used_count=3).is_exhausted()

    def test_unrestricted_offer_is_available_to_anyone(self):
        assert _offer().is_available_to(None, None)

    def test_restricted_offer_matches_email_case_insensitively(self):
        offer = _offer(customer_emails=["asha@example.com"])

        assert offer.is_available_to("Asha@Example.com", None)
        assert not offer.is_available_to("ravi@example.com", None)
        assert not offer.is_available_to(None, None)

    def test_restricted_offer_matches_customer_id(self):
        offer = _offer(customer_ids=["user-1"])

        assert offer.is_available_to(None, "user-1")
        assert not offer.is_available_to("asha@example.com", "user-2")
