"""Administration: users, companies and the system endpoints (feature flags, audit, preferences).

Users and companies are small tables loaded in full. Feature flags, audit
logs and preferences are not entity resources; they are plain services over
``/onerp/system``.
"""

import logging
from typing import Any, Literal

from onerp_admin.application.interfaces import ApiClient
from onerp_admin.application.modules.registry import ModuleEntry
from onerp_admin.application.schemas import (
    AuditLogFilters,
    AuditLogPage,
    FeatureFlagStatus,
    ResolvedPreference,
    SetCompanyFlagRequest,
)
from onerp_admin.application.use_cases import EntityRecord, ListActions
from onerp_admin.domain.entities import EntityModule, ModuleKind

logger = logging.getLogger(__name__)

SYSTEM_PATH = "/onerp/system"

UserStatus = Literal["active", "inactive", "blocked", "suspended"]


USERS = EntityModule(
    key="users",
    base_path="/onerp/user",
    kind=ModuleKind.LIST,
    id_field="user_Id",
    label="Users",
)

COMPANIES = EntityModule(
    key="companies",
    base_path="/onerp/company",
    kind=ModuleKind.LIST,
    id_field="company_Id",
    label="Companies",
)


class UserActions(ListActions):
    async def update_status(self, user_id: str, status: UserStatus) -> EntityRecord:
        return await self.update(user_id, {"status": status})


class FeatureFlagService:
    """Feature flag catalog and per-company overrides."""

    def __init__(self, client: ApiClient):
        self._client = client
        self._base_path = f"{SYSTEM_PATH}/feature-flags"

    async def list_flags(self) -> list[EntityRecord]:
        return await self._client.request(self._base_path, method="POST")

    async def is_enabled(self, code: str) -> FeatureFlagStatus:
        """Effective status for the current company; ``source`` tells where it came from."""
        payload = await self._client.request(
            f"{self._base_path}/check", method="POST", body={"code": code}
        )
        return FeatureFlagStatus.model_validate(payload)

    async def set_company_flag(
        self, code: str, enabled: bool, company_id: str | None = None
    ) -> None:
        request = SetCompanyFlagRequest(code=code, enabled=enabled, company_id=company_id)
        await self._client.request(
            f"{self._base_path}/company", method="PATCH", body=request.to_body()
        )
        logger.info("Feature flag %s set to %s", code, enabled)

    async def get_company_flags(self, company_id: str | None = None) -> dict[str, bool]:
        params = {"company_Id": company_id} if company_id else None
        return await self._client.request(
            f"{self._base_path}/company", method="GET", params=params
        )


class AuditLogService:
    def __init__(self, client: ApiClient):
        self._client = client
        self._base_path = f"{SYSTEM_PATH}/audit"

    async def get_logs(self, filters: AuditLogFilters | None = None) -> AuditLogPage:
        """Query audit entries (offset pagination)."""
        body = (filters or AuditLogFilters()).to_body()
        payload = await self._client.request(
            f"{self._base_path}/logs", method="POST", body=body
        )
        return AuditLogPage.model_validate(payload)

    async def get_entity_history(self, entity_type: str, entity_id: str) -> list[EntityRecord]:
        return await self._client.request(
            f"{self._base_path}/entity-history",
            method="POST",
            body={"entity_type": entity_type, "entity_id": entity_id},
        )


class PreferenceService:
    """Preference definitions and scoped values.

    Values resolve user > branch > company > system; the server does the
    resolution and reports the winning scope.
    """

    def __init__(self, client: ApiClient):
        self._client = client
        self._base_path = f"{SYSTEM_PATH}/preferences"

    async def get_definitions(
        self,
        *,
        module: str | None = None,
        category: str | None = None,
        search: str | None = None,
    ) -> list[EntityRecord]:
        params = {
            key: value
            for key, value in (("module", module), ("category", category), ("search", search))
            if value
        }
        return await self._client.request(
            f"{self._base_path}/definitions", method="GET", params=params or None
        )

    async def resolve(
        self,
        code: str,
        *,
        company_id: str | None = None,
        user_id: str | None = None,
    ) -> ResolvedPreference:
        body = _without_none({"code": code, "company_id": company_id, "user_id": user_id})
        payload = await self._client.request(
            f"{self._base_path}/resolve", method="POST", body=body
        )
        return ResolvedPreference.model_validate(payload)

    async def resolve_all(
        self,
        *,
        company_id: str | None = None,
        user_id: str | None = None,
    ) -> dict[str, ResolvedPreference]:
        body = _without_none({"company_id": company_id, "user_id": user_id})
        payload = await self._client.request(
            f"{self._base_path}/resolve-all", method="POST", body=body
        )
        return {
            code: ResolvedPreference.model_validate(value)
            for code, value in (payload or {}).items()
        }

    async def set_value(
        self,
        code: str,
        value: Any,
        *,
        company_id: str | None = None,
        user_id: str | None = None,
    ) -> None:
        body = _without_none(
            {"code": code, "value": value, "company_id": company_id, "user_id": user_id}
        )
        await self._client.request(f"{self._base_path}/value", method="PATCH", body=body)

    async def get_history(self, code: str, company_id: str) -> list[EntityRecord]:
        return await self._client.request(
            f"{self._base_path}/history",
            method="GET",
            params={"code": code, "company_Id": company_id},
        )


def _without_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


MODULES: list[ModuleEntry] = [
    (USERS, UserActions),
    (COMPANIES, None),
]
