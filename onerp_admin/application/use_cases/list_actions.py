"""Simple list action factory for small reference tables loaded in full."""

from onerp_admin.application.interfaces import ApiClient
from onerp_admin.application.use_cases.entity_actions import EntityActions, EntityRecord
from onerp_admin.domain.exceptions import ApiRequestError


class ListActions(EntityActions):
    """CRUD operations plus ``find_all`` over ``GET {base}``."""

    async def find_all(self) -> list[EntityRecord]:
        payload = await self._client.request(self._base_path, method="GET")
        records = unwrap_records(payload)
        if records is None:
            raise ApiRequestError(f"Unexpected list response from {self._base_path}")
        return records


def unwrap_records(payload: object) -> list[EntityRecord] | None:
    """Return the records of a ``{"data": [...]}`` envelope or a bare array.

    Returns None when the payload is neither.
    """
    if isinstance(payload, dict) and isinstance(payload.get("data"), list):
        return payload["data"]
    if isinstance(payload, list):
        return payload
    return None


def create_list_actions(base_path: str, client: ApiClient) -> ListActions:
    """Build the list action set for one entity base path."""
    return ListActions(client, base_path)
