from sources.cache import TTLCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_hit_within_ttl_and_miss_after():
    clock = FakeClock()
    cache = TTLCache(ttl_seconds=300, clock=clock)
    cache.set("k", [1, 2])
    clock.now += 299
    assert cache.get("k") == [1, 2]
    clock.now += 1
    assert cache.get("k") is None


def test_set_overwrites_and_refreshes_timestamp():
    clock = FakeClock()
    cache = TTLCache(ttl_seconds=10, clock=clock)
    cache.set("k", "old")
    clock.now += 8
    cache.set("k", "new")
    clock.now += 8
    assert cache.get("k") == "new"


def test_stale_entries_are_not_purged():
    clock = FakeClock()
    cache = TTLCache(ttl_seconds=1, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)
    clock.now += 5
    assert cache.get("a") is None
    assert len(cache) == 2


def test_unknown_key_is_miss():
    assert TTLCache().get("missing") is None
