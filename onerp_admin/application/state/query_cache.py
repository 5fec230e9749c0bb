"""Query cache: an explicitly constructed, keyed store of query results.

Each module receives the cache it should use, so tests and independent
sessions never share state by accident. Keys are tuples; invalidation and
removal match on a key prefix element by element, so ``("banks",)`` covers
``("banks", <any pagination state>)``.
"""

import asyncio
import logging
import math
from collections.abc import Awaitable, Callable, Hashable, Iterable
from datetime import datetime, timezone
from typing import Any, TypeVar

from onerp_admin.domain.entities import QueryState, RequestStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")
QueryKey = tuple[Hashable, ...]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QueryCache:
    """In-memory query cache with stale marking and in-flight de-duplication.

    No locking beyond the event loop: concurrent invalidations race and the
    last one wins. A fetch that completes after an invalidation of its key
    stays stale, and a caller arriving after the invalidation starts its own
    request instead of joining the outdated one. An outdated fetch never
    overwrites the result of a newer one.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._entries: dict[QueryKey, QueryState] = {}
        self._in_flight: dict[QueryKey, tuple[int, asyncio.Task[Any]]] = {}
        self._generations: dict[QueryKey, int] = {}
        self._written: dict[QueryKey, int] = {}
        self._clock = clock or _utcnow

    async def fetch(
        self,
        key: Iterable[Hashable],
        fn: Callable[[], Awaitable[T]],
        *,
        stale_time: float = 0.0,
    ) -> T:
        """Return fresh cached data for ``key`` or run ``fn`` to refresh it.

        Args:
            key: Cache key, e.g. ("lots", CursorPaginationState(...)).
            fn: Zero-argument coroutine function producing the data.
            stale_time: Seconds a successful result stays fresh.
                0 means always refetch; math.inf means until invalidated.

        Raises:
            Whatever ``fn`` raises. The entry keeps its previous data.
        """
        cache_key = tuple(key)
        state = self._entries.get(cache_key)
        if state is not None and self._is_fresh(state, stale_time):
            return state.data

        generation = self._generations.get(cache_key, 0)
        in_flight = self._in_flight.get(cache_key)
        if in_flight is not None and in_flight[0] == generation:
            logger.debug("Joining in-flight query %s", cache_key)
            task = in_flight[1]
        else:
            if in_flight is not None:
                logger.debug("In-flight query %s was invalidated, refetching", cache_key)
            self._entries.setdefault(cache_key, QueryState())
            task = asyncio.ensure_future(self._run(cache_key, fn, generation))
            self._in_flight[cache_key] = (generation, task)
        return await asyncio.shield(task)

    async def _run(
        self, key: QueryKey, fn: Callable[[], Awaitable[T]], generation: int
    ) -> T:
        state = self._entries.setdefault(key, QueryState())
        state.status = RequestStatus.PENDING
        try:
            data = await fn()
        except Exception as exc:
            if not self._is_superseded(key, generation):
                state.status = RequestStatus.ERROR
                state.error = exc
            logger.debug("Query %s failed: %s", key, exc)
            raise
        else:
            if self._is_superseded(key, generation):
                logger.debug("Discarding outdated result of query %s", key)
                return data
            self._written[key] = generation
            state.data = data
            state.error = None
            state.status = RequestStatus.SUCCESS
            state.updated_at = self._clock()
            state.fetch_count += 1
            state.is_stale = self._generations.get(key, 0) != generation
            return data
        finally:
            in_flight = self._in_flight.get(key)
            if in_flight is not None and in_flight[1] is asyncio.current_task():
                del self._in_flight[key]

    def _is_superseded(self, key: QueryKey, generation: int) -> bool:
        """True once a fetch from a later generation has landed or is running."""
        if self._written.get(key, -1) > generation:
            return True
        in_flight = self._in_flight.get(key)
        return in_flight is not None and in_flight[0] > generation

    def _is_fresh(self, state: QueryState, stale_time: float) -> bool:
        if state.is_stale or not state.has_data or stale_time <= 0:
            return False
        if math.isinf(stale_time):
            return True
        age = (self._clock() - state.updated_at).total_seconds()
        return age < stale_time

    @staticmethod
    def _matches(key: QueryKey, prefix: QueryKey) -> bool:
        return key[: len(prefix)] == prefix

    def invalidate(self, prefix: Iterable[Hashable]) -> int:
        """Mark every entry under ``prefix`` stale. Returns how many were marked."""
        cache_prefix = tuple(prefix)
        marked = 0
        for key, state in self._entries.items():
            if self._matches(key, cache_prefix):
                state.is_stale = True
                self._generations[key] = self._generations.get(key, 0) + 1
                marked += 1
        logger.debug("Invalidated %d cached queries under %s", marked, cache_prefix)
        return marked

    def remove(self, prefix: Iterable[Hashable]) -> int:
        """Drop every entry under ``prefix``. Returns how many were removed."""
        cache_prefix = tuple(prefix)
        doomed = [key for key in self._entries if self._matches(key, cache_prefix)]
        for key in doomed:
            del self._entries[key]
            self._generations.pop(key, None)
            self._written.pop(key, None)
        return len(doomed)

    def clear(self) -> None:
        self._entries.clear()
        self._generations.clear()
        self._written.clear()

    def get_state(self, key: Iterable[Hashable]) -> QueryState | None:
        return self._entries.get(tuple(key))

    def get_data(self, key: Iterable[Hashable]) -> Any:
        state = self._entries.get(tuple(key))
        return state.data if state is not None else None

    def set_data(self, key: Iterable[Hashable], data: Any) -> None:
        """Seed or overwrite an entry; it counts as freshly fetched."""
        state = self._entries.setdefault(tuple(key), QueryState())
        state.data = data
        state.error = None
        state.status = RequestStatus.SUCCESS
        state.is_stale = False
        state.updated_at = self._clock()

    def is_fetching(self, key: Iterable[Hashable]) -> bool:
        return tuple(key) in self._in_flight

    def keys(self) -> list[QueryKey]:
        return list(self._entries)
