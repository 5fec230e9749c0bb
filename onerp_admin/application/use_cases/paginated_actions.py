"""Paginated action factory: CRUD plus cursor pages for large entity tables."""

from onerp_admin.application.interfaces import ApiClient
from onerp_admin.application.schemas import CursorPaginationParams, PaginatedResponse
from onerp_admin.application.use_cases.entity_actions import EntityActions


class PaginatedActions(EntityActions):
    """CRUD operations plus ``find_all_paginated`` over ``POST {base}/pagination``.

    The backend owns cursor encoding and ordering. Cursor values are sent and
    returned verbatim; nothing here parses or builds them.
    """

    async def find_all_paginated(
        self, params: CursorPaginationParams
    ) -> PaginatedResponse:
        payload = await self._client.request(
            f"{self._base_path}/pagination",
            method="POST",
            body=params.to_body(),
        )
        return PaginatedResponse.model_validate(payload)


def create_paginated_actions(base_path: str, client: ApiClient) -> PaginatedActions:
    """Build the paginated action set for one entity base path."""
    return PaginatedActions(client, base_path)
