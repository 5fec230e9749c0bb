"""Paginated module: cursor-paged, cached listing of one entity type."""

import logging
from collections.abc import Hashable

from onerp_admin.application.interfaces import Notifier
from onerp_admin.application.schemas import CursorPaginationParams, PaginatedResponse
from onerp_admin.application.state.base_module import BaseModule
from onerp_admin.application.state.mutation import MutationMessages
from onerp_admin.application.state.query_cache import QueryCache
from onerp_admin.application.use_cases import EntityRecord, PaginatedActions
from onerp_admin.domain.entities import CursorPaginationState

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


class PaginatedModule(BaseModule):
    """Cursor pagination state, a page query and invalidating mutations.

    Pagination transitions:
        next page      -> {limit, start_cursor: page end cursor, end_cursor: None}
        previous page  -> {limit, start_cursor: None, end_cursor: page start cursor}
        page size      -> {new limit, None, None}

    The query is keyed by ``(module_key, pagination)``. While a new page is
    loading, ``data`` keeps showing the previous page. A response is shown
    only if it belongs to the newest load and to the current pagination, so a
    late answer for an older state never replaces a newer page.

    When a load with an active cursor comes back empty (typically after the
    last rows of a page were deleted) the module returns to the first page and
    loads once more instead of showing an empty page with dead cursors.
    """

    def __init__(
        self,
        module_key: str,
        actions: PaginatedActions,
        cache: QueryCache,
        notifier: Notifier,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        stale_time: float = 0.0,
        messages: MutationMessages | None = None,
    ):
        super().__init__(module_key, actions, cache, notifier, messages=messages)
        self._paginated_actions = actions
        self._stale_time = stale_time
        self._pagination = CursorPaginationState(limit=page_size)
        self._page: PaginatedResponse | None = None
        self._error: Exception | None = None
        self._load_seq = 0

    # ── Pagination state ──

    @property
    def pagination(self) -> CursorPaginationState:
        return self._pagination

    def set_pagination(self, pagination: CursorPaginationState) -> None:
        self._pagination = pagination

    def next_page(self) -> bool:
        """Advance past the current page. Returns False when there is no next page."""
        info = self._page.page_info if self._page is not None else None
        if info is None or not info.has_next_page or info.end_cursor is None:
            return False
        self._pagination = self._pagination.next_page(info.end_cursor)
        return True

    def previous_page(self) -> bool:
        """Step back before the current page. Returns False when already at the start."""
        info = self._page.page_info if self._page is not None else None
        if info is None or not info.has_previous_page or info.start_cursor is None:
            return False
        self._pagination = self._pagination.previous_page(info.start_cursor)
        return True

    def set_page_size(self, limit: int) -> None:
        self._pagination = self._pagination.with_page_size(limit)

    # ── Query ──

    @property
    def query_key(self) -> tuple[Hashable, ...]:
        return (self._module_key, self._pagination)

    async def load(self) -> PaginatedResponse:
        """Fetch the page for the current pagination state. Query errors propagate."""
        pagination = self._pagination
        response = await self._fetch_page(pagination)
        if (
            not response.data
            and not pagination.is_first_page
            and pagination == self._pagination
        ):
            logger.info(
                "%s: cursor page came back empty, returning to the first page",
                self._module_key,
            )
            self._pagination = pagination.first_page()
            response = await self._fetch_page(self._pagination)
        return response

    async def refresh(self) -> PaginatedResponse:
        self.invalidate()
        return await self.load()

    async def _fetch_page(self, pagination: CursorPaginationState) -> PaginatedResponse:
        params = CursorPaginationParams(
            limit=pagination.limit,
            after_cursor=pagination.start_cursor,
            before_cursor=pagination.end_cursor,
        )
        self._load_seq += 1
        seq = self._load_seq
        try:
            response = await self._cache.fetch(
                (self._module_key, pagination),
                lambda: self._paginated_actions.find_all_paginated(params),
                stale_time=self._stale_time,
            )
        except Exception as exc:
            if self._is_current(seq, pagination):
                self._error = exc
            raise
        if self._is_current(seq, pagination):
            self._error = None
            self._page = response
        else:
            logger.debug("%s: ignoring late page for %s", self._module_key, pagination)
        return response

    def _is_current(self, seq: int, pagination: CursorPaginationState) -> bool:
        return seq == self._load_seq and pagination == self._pagination

    @property
    def page(self) -> PaginatedResponse | None:
        """The last successfully loaded page (kept while the next one loads)."""
        return self._page

    @property
    def data(self) -> list[EntityRecord] | None:
        return self._page.data if self._page is not None else None

    @property
    def error(self) -> Exception | None:
        return self._error

    @property
    def is_fetching(self) -> bool:
        return self._cache.is_fetching(self.query_key)

    @property
    def is_loading(self) -> bool:
        return self._page is None and self.is_fetching
