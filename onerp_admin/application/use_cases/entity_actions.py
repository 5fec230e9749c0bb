"""Shared CRUD operations for one REST resource root.

Every ONERP entity exposes the same shape under its base path:
``GET {base}/{id}``, ``POST {base}``, ``PATCH {base}/{id}`` and
``DELETE {base}/{id}``. Failures from the API client propagate unmodified.
"""

from typing import Any

from onerp_admin.application.interfaces import ApiClient

EntityRecord = dict[str, Any]


class EntityActions:
    """CRUD operations bound to a base path. Depends on the ApiClient port (DI)."""

    def __init__(self, client: ApiClient, base_path: str):
        self._client = client
        self._base_path = base_path.rstrip("/")

    @property
    def base_path(self) -> str:
        return self._base_path

    def _item_path(self, entity_id: str) -> str:
        return f"{self._base_path}/{entity_id}"

    async def find_by_id(self, entity_id: str) -> EntityRecord:
        return await self._client.request(self._item_path(entity_id), method="GET")

    async def create(self, data: EntityRecord) -> EntityRecord:
        """Create a record; the server assigns the identifier and returns the full entity."""
        return await self._client.request(self._base_path, method="POST", body=data)

    async def update(self, entity_id: str, data: EntityRecord) -> EntityRecord:
        """Partial update: fields left out of ``data`` are unchanged server-side."""
        return await self._client.request(
            self._item_path(entity_id), method="PATCH", body=data
        )

    async def remove(self, entity_id: str) -> None:
        await self._client.request(self._item_path(entity_id), method="DELETE")

    # ── Entity-specific endpoints ──

    async def _call(
        self,
        method: str,
        subpath: str,
        *,
        body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return await self._client.request(
            f"{self._base_path}/{subpath}", method=method, body=body, params=params
        )

    async def run_command(
        self,
        entity_id: str,
        command: str,
        payload: dict[str, Any] | None = None,
        *,
        method: str = "POST",
    ) -> Any:
        """Trigger a workflow transition: ``POST {base}/{id}/{command}``."""
        return await self._call(method, f"{entity_id}/{command}", body=payload)

    async def fetch(self, subpath: str, params: dict[str, Any] | None = None) -> Any:
        """Read a sub-resource: ``GET {base}/{subpath}``."""
        return await self._call("GET", subpath, params=params)

    async def post(self, subpath: str, payload: dict[str, Any] | None = None) -> Any:
        """Call a collection-level endpoint: ``POST {base}/{subpath}``."""
        return await self._call("POST", subpath, body=payload)
