"""List module: cached full list of a small reference table."""

from collections.abc import Hashable

from onerp_admin.application.interfaces import Notifier
from onerp_admin.application.state.base_module import BaseModule
from onerp_admin.application.state.mutation import MutationMessages
from onerp_admin.application.state.query_cache import QueryCache
from onerp_admin.application.use_cases import EntityRecord, ListActions


class ListModule(BaseModule):
    """Full-list query keyed by ``(module_key,)`` plus invalidating mutations.

    Only the newest load updates ``data`` and ``error``.
    """

    def __init__(
        self,
        module_key: str,
        actions: ListActions,
        cache: QueryCache,
        notifier: Notifier,
        *,
        stale_time: float = 0.0,
        messages: MutationMessages | None = None,
    ):
        super().__init__(module_key, actions, cache, notifier, messages=messages)
        self._list_actions = actions
        self._stale_time = stale_time
        self._data: list[EntityRecord] | None = None
        self._error: Exception | None = None
        self._load_seq = 0

    @property
    def query_key(self) -> tuple[Hashable, ...]:
        return (self._module_key,)

    async def load(self) -> list[EntityRecord]:
        """Fetch the list (or reuse a fresh cached copy). Query errors propagate."""
        self._load_seq += 1
        seq = self._load_seq
        try:
            records = await self._cache.fetch(
                self.query_key, self._list_actions.find_all, stale_time=self._stale_time
            )
        except Exception as exc:
            if seq == self._load_seq:
                self._error = exc
            raise
        if seq == self._load_seq:
            self._error = None
            self._data = records
        return records

    async def refresh(self) -> list[EntityRecord]:
        self.invalidate()
        return await self.load()

    @property
    def data(self) -> list[EntityRecord] | None:
        return self._data

    @property
    def error(self) -> Exception | None:
        return self._error

    @property
    def is_fetching(self) -> bool:
        return self._cache.is_fetching(self.query_key)

    @property
    def is_loading(self) -> bool:
        return self._data is None and self.is_fetching
