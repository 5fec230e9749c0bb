"""Pydantic DTOs for the cursor pagination endpoint (``POST {base}/pagination``)."""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class CursorPaginationParams(BaseModel):
    """Request body for one cursor page. Cursors are opaque and passed through."""

    limit: int = Field(10, gt=0)
    after_cursor: str | None = Field(None, alias="afterCursor")
    before_cursor: str | None = Field(None, alias="beforeCursor")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _single_cursor(self) -> "CursorPaginationParams":
        if self.after_cursor is not None and self.before_cursor is not None:
            raise ValueError("afterCursor and beforeCursor are mutually exclusive")
        return self

    def to_body(self) -> dict[str, Any]:
        """Wire representation: camelCase keys, unset cursors omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class PageInfo(BaseModel):
    """Cursor metadata of a returned page."""

    limit: int = 0
    has_next_page: bool = Field(False, alias="hasNextPage")
    has_previous_page: bool = Field(False, alias="hasPreviousPage")
    start_cursor: str | None = Field(None, alias="startCursor")
    end_cursor: str | None = Field(None, alias="endCursor")

    model_config = {"populate_by_name": True, "extra": "allow"}


class PaginatedResponse(BaseModel):
    """A page of entity records as returned by the gateway.

    Records are kept as raw dicts; no field is dropped or reshaped.
    """

    data: list[dict[str, Any]] = Field(default_factory=list)
    page_count: int = Field(0, alias="pageCount")
    row_count: int = Field(0, alias="rowCount")
    page_info: PageInfo = Field(default_factory=PageInfo, alias="pageInfo")

    model_config = {"populate_by_name": True, "extra": "allow"}


class SearchRequest(BaseModel):
    """Request body for a free-text search over the pagination endpoint."""

    limit: int = Field(20, gt=0)
    search: str
