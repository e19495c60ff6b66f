import pytest

from apolloconf.cache import CacheMissError, DefaultCache, DefaultCacheFactory


@pytest.fixture
def cache():
    c = DefaultCacheFactory().create()
    c.set("a", "b", 100)
    return c


def test_set_increments_count(cache):
    cache.set("k", "c", 100)
    assert cache.entry_count() == 2


def test_range_visits_all(cache):
    cache.set("k", "c", 100)
    seen = []

    def visit(key, value):
        seen.append((key, value))
        return True

    cache.range(visit)
    assert sorted(seen) == [("a", "b"), ("k", "c")]
    assert [cache.get(key) for key, _ in seen] == [value for _, value in seen]
    assert cache.entry_count() == len(seen)


def test_range_stops_when_false(cache):
    cache.set("k", "c", 100)
    seen = []

    def visit(key, value):
        seen.append((key, value))
        return False

    cache.range(visit)
    assert len(seen) == 1
    key, value = seen[0]
    assert key in ("a", "k")
    assert cache.get(key) == value


def test_delete(cache):
    cache.set("k", "c", 100)
    assert cache.delete("k") is True
    assert cache.entry_count() == 1
    with pytest.raises(CacheMissError):
        cache.get("k")


def test_get(cache):
    assert cache.get("a") == "b"


def test_get_missing_raises(cache):
    with pytest.raises(CacheMissError, match="load default cache fail"):
        cache.get("missing")


def test_clear(cache):
    cache.set("k", "c", 100)
    cache.clear()
    assert cache.entry_count() == 0
    with pytest.raises(CacheMissError):
        cache.get("a")


def test_count_tracks_every_set():
    c = DefaultCache()
    c.set("x", 1, 0)
    c.set("x", 2, 0)
    assert c.entry_count() == 2
    assert c.get("x") == 2


def test_factory_creates_independent_caches():
    factory = DefaultCacheFactory()
    first = factory.create()
    second = factory.create()
    first.set("a", 1, 0)
    assert second.entry_count() == 0
    with pytest.raises(CacheMissError):
        second.get("a")