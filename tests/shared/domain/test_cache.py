from shared.cache import CacheService, TTLCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestTTLCache:
    def test_get_or_set_calls_factory_once_within_ttl(self):
        cache = TTLCache("products", ttl=60, clock=FakeClock())
        calls = []

        def load():
            calls.append(1)
            return ["va-01"]

        assert cache.get_or_set("all", load) == ["va-01"]
        assert cache.get_or_set("all", load) == ["va-01"]
        assert len(calls) == 1

    def test_entries_expire_after_ttl(self):
        clock = FakeClock()
        cache = TTLCache("stats", ttl=30, clock=clock)
        cache.set("dashboard", {"total_orders": 1})

        clock.now += 29
        assert cache.get("dashboard") == {"total_orders": 1}

        clock.now += 1
        assert cache.get("dashboard") is None

    def test_clear_drops_all_entries(self):
        cache = TTLCache("carousel", ttl=300)
        cache.set("active", [])
        cache.set("all", [])

        cache.clear()

        assert len(cache) == 0


class TestCacheService:
    def test_register_returns_same_cache_for_same_name(self):
        service = CacheService()
        assert service.register("offers", ttl=60) is service.register("offers", ttl=10)

    def test_invalidate_clears_only_named_caches(self):
        service = CacheService()
        products = service.register("products", ttl=60)
        reviews = service.register("reviews", ttl=60)
        products.set("all", [1])
        reviews.set("featured", [2])

        service.invalidate("products", "unknown")

        assert products.get("all") is None
        assert reviews.get("featured") == [2]
