"""Cursor pagination state held by a paginated module."""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class CursorPaginationState:
    """Client-side cursor position for one module instance.

    ``start_cursor`` is sent as ``afterCursor`` and ``end_cursor`` as
    ``beforeCursor``. After any user-driven transition at most one of them is
    set; both ``None`` means the first page. Instances are hashable so they can
    be part of a query cache key.
    """

    limit: int = 10
    start_cursor: str | None = None
    end_cursor: str | None = None

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise ValueError(f"limit must be positive, got {self.limit}")

    @property
    def is_first_page(self) -> bool:
        return self.start_cursor is None and self.end_cursor is None

    def next_page(self, end_cursor: str) -> "CursorPaginationState":
        """Move forward: read the page after the current page's end cursor."""
        return replace(self, start_cursor=end_cursor, end_cursor=None)

    def previous_page(self, start_cursor: str) -> "CursorPaginationState":
        """Move backward: read the page before the current page's start cursor."""
        return replace(self, start_cursor=None, end_cursor=start_cursor)

    def with_page_size(self, limit: int) -> "CursorPaginationState":
        """Change the page size; always returns to the first page."""
        return CursorPaginationState(limit=limit)

    def first_page(self) -> "CursorPaginationState":
        return CursorPaginationState(limit=self.limit)
