import asyncio

import pytest

from arena_ladder.services.cache import TTLCache


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


def test_values_expire_after_ttl(clock):
    cache = TTLCache(ttl=300, clock=clock)
    cache.set(("us", "3v3"), "snapshot")

    clock.now += 299
    assert cache.get(("us", "3v3")) == "snapshot"
    clock.now += 1
    assert cache.get(("us", "3v3")) is None
    assert len(cache) == 0


def test_per_entry_ttl_override(clock):
    cache = TTLCache(ttl=300, clock=clock)
    cache.set("authoritative", 1, ttl=3600)
    cache.set("skipped", 2, ttl=0)

    clock.now += 1000
    assert cache.get("authoritative") == 1
    assert cache.get("skipped") is None


def test_eviction_keeps_newest_entries(clock):
    cache = TTLCache(ttl=60, max_entries=2, clock=clock)
    for idx in range(3):
        cache.set(idx, idx)
        clock.now += 1

    assert len(cache) == 2
    assert cache.get(0) is None
    assert cache.get(2) == 2


def test_invalidate(clock):
    cache = TTLCache(ttl=60, clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)

    cache.invalidate("a")
    assert cache.get("a") is None
    cache.invalidate()
    assert len(cache) == 0


async def test_concurrent_loads_share_one_call():
    cache = TTLCache(ttl=60)
    calls = 0

    async def loader():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        return "value"

    results = await asyncio.gather(*(cache.get_or_load("key", loader) for _ in range(5)))

    assert results == ["value"] * 5
    assert calls == 1
    assert await cache.get_or_load("key", loader) == "value"
    assert calls == 1


async def test_failed_loads_are_not_cached():
    cache = TTLCache(ttl=60)
    attempts = 0

    async def flaky():
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            raise RuntimeError("upstream down")
        return "recovered"

    with pytest.raises(RuntimeError):
        await cache.get_or_load("key", flaky)
    assert await cache.get_or_load("key", flaky) == "recovered"
    assert attempts == 2


async def test_cancelled_caller_leaves_shared_load_running():
    cache = TTLCache(ttl=60)

    async def loader():
        await asyncio.sleep(0.05)
        return "value"

    first = asyncio.ensure_future(cache.get_or_load("key", loader))
    await asyncio.sleep(0)
    follower = asyncio.ensure_future(cache.get_or_load("key", loader))
    await asyncio.sleep(0.01)
    first.cancel()

    assert await follower == "value"
    with pytest.raises(asyncio.CancelledError):
        await first
    assert cache.get("key") == "value"


async def test_expired_value_is_served_until_reload_finishes(clock):
    cache = TTLCache(ttl=10, clock=clock)
    cache.set("key", "old")
    clock.now += 11
    release = asyncio.Event()

    async def reload():
        await release.wait()
        return "new"

    refresh = asyncio.ensure_future(cache.get_or_load("key", reload))
    await asyncio.sleep(0)

    assert cache.get("key") == "old"
    assert await cache.get_or_load("key", reload) == "old"

    release.set()
    assert await refresh == "new"
    assert cache.get("key") == "new"


async def test_lifetime_can_depend_on_the_loaded_value(clock):
    cache = TTLCache(ttl=300, clock=clock)

    async def loader():
        return "authoritative"

    await cache.get_or_load("key", loader, ttl_for=lambda value: 3600)

    clock.now += 1000
    assert cache.get("key") == "authoritative"
