"""Unit tests for the QueryCache."""

import asyncio
import math
from datetime import datetime, timedelta, timezone

import pytest

from onerp_admin.application.state import QueryCache
from onerp_admin.domain.entities import CursorPaginationState, RequestStatus


# ── Helpers ──


class FakeClock:
    def __init__(self):
        self.now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class CountingFetcher:
    def __init__(self, *results):
        self.calls = 0
        self._results = list(results)

    async def __call__(self):
        self.calls += 1
        result = self._results[min(self.calls, len(self._results)) - 1]
        if isinstance(result, Exception):
            raise result
        return result


# ── Tests ──


@pytest.mark.asyncio
async def test_zero_stale_time_always_refetches():
    cache = QueryCache()
    fetcher = CountingFetcher("a", "b")

    assert await cache.fetch(("banks",), fetcher) == "a"
    assert await cache.fetch(("banks",), fetcher) == "b"
    assert fetcher.calls == 2


@pytest.mark.asyncio
async def test_fresh_data_is_served_from_cache():
    clock = FakeClock()
    cache = QueryCache(clock=clock)
    fetcher = CountingFetcher("a", "b")

    await cache.fetch(("banks",), fetcher, stale_time=30)
    clock.advance(29)
    assert await cache.fetch(("banks",), fetcher, stale_time=30) == "a"
    clock.advance(2)
    assert await cache.fetch(("banks",), fetcher, stale_time=30) == "b"
    assert fetcher.calls == 2


@pytest.mark.asyncio
async def test_infinite_stale_time_lasts_until_invalidated():
    clock = FakeClock()
    cache = QueryCache(clock=clock)
    fetcher = CountingFetcher("a", "b")

    await cache.fetch(("cities",), fetcher, stale_time=math.inf)
    clock.advance(10_000)
    assert await cache.fetch(("cities",), fetcher, stale_time=math.inf) == "a"

    cache.invalidate(("cities",))
    assert await cache.fetch(("cities",), fetcher, stale_time=math.inf) == "b"


@pytest.mark.asyncio
async def test_invalidate_matches_by_prefix():
    cache = QueryCache()
    first = CursorPaginationState(limit=10)
    second = first.next_page("c10")
    cache.set_data(("banks", first), "page-1")
    cache.set_data(("banks", second), "page-2")
    cache.set_data(("bank-accounts", first), "other")

    marked = cache.invalidate(("banks",))

    assert marked == 2
    assert cache.get_state(("banks", first)).is_stale
    assert cache.get_state(("banks", second)).is_stale
    assert not cache.get_state(("bank-accounts", first)).is_stale


@pytest.mark.asyncio
async def test_concurrent_fetches_share_one_request():
    cache = QueryCache()
    release = asyncio.Event()
    calls = 0

    async def slow():
        nonlocal calls
        calls += 1
        await release.wait()
        return "data"

    first = asyncio.create_task(cache.fetch(("lots",), slow))
    second = asyncio.create_task(cache.fetch(("lots",), slow))
    await asyncio.sleep(0)
    assert cache.is_fetching(("lots",))

    release.set()

    assert await asyncio.gather(first, second) == ["data", "data"]
    assert calls == 1
    assert not cache.is_fetching(("lots",))


@pytest.mark.asyncio
async def test_failed_fetch_keeps_previous_data():
    cache = QueryCache()
    fetcher = CountingFetcher("good", RuntimeError("boom"))

    await cache.fetch(("banks",), fetcher)
    with pytest.raises(RuntimeError):
        await cache.fetch(("banks",), fetcher)

    state = cache.get_state(("banks",))
    assert state.data == "good"
    assert state.status == RequestStatus.ERROR
    assert isinstance(state.error, RuntimeError)


@pytest.mark.asyncio
async def test_invalidation_during_flight_leaves_result_stale():
    cache = QueryCache()
    release = asyncio.Event()

    async def slow():
        await release.wait()
        return "old"

    task = asyncio.create_task(cache.fetch(("banks",), slow, stale_time=math.inf))
    # let both the caller and the shared fetch task start
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    assert cache.get_state(("banks",)).status == RequestStatus.PENDING
    cache.invalidate(("banks",))
    release.set()
    await task

    assert cache.get_state(("banks",)).is_stale


def test_remove_and_clear():
    cache = QueryCache()
    cache.set_data(("banks", 1), "x")
    cache.set_data(("banks", 2), "y")
    cache.set_data(("cities",), "z")

    assert cache.remove(("banks",)) == 2
    assert cache.keys() == [("cities",)]

    cache.clear()
    assert cache.keys() == []
    assert cache.get_data(("cities",)) is None


@pytest.mark.asyncio
async def test_fetch_after_invalidation_does_not_join_outdated_request():
    cache = QueryCache()
    release = asyncio.Event()
    results = iter(["before", "after"])
    calls = 0

    async def fetcher():
        nonlocal calls
        calls += 1
        value = next(results)
        if value == "before":
            await release.wait()
        return value

    outdated = asyncio.create_task(cache.fetch(("banks",), fetcher))
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    cache.invalidate(("banks",))

    assert await cache.fetch(("banks",), fetcher) == "after"
    release.set()
    assert await outdated == "before"

    state = cache.get_state(("banks",))
    assert calls == 2
    assert state.data == "after"
    assert not state.is_stale
    assert not cache.is_fetching(("banks",))


@pytest.mark.asyncio
async def test_invalidated_request_failing_late_keeps_newer_result():
    cache = QueryCache()
    release = asyncio.Event()
    calls = 0

    async def fetcher():
        nonlocal calls
        calls += 1
        if calls == 1:
            await release.wait()
            raise RuntimeError("late failure")
        return "fresh"

    outdated = asyncio.create_task(cache.fetch(("lots",), fetcher))
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    cache.invalidate(("lots",))
    await cache.fetch(("lots",), fetcher)

    release.set()
    with pytest.raises(RuntimeError):
        await outdated

    state = cache.get_state(("lots",))
    assert state.data == "fresh"
    assert state.status == RequestStatus.SUCCESS
    assert state.error is None
