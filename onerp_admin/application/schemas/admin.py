"""Pydantic DTOs for the system administration endpoints (feature flags, audit, preferences)."""

from typing import Any, Literal

from pydantic import BaseModel, Field

AuditAction = Literal["CREATE", "UPDATE", "DELETE", "READ"]
PreferenceScope = Literal["system", "company", "branch", "user"]


class AuditLogFilters(BaseModel):
    """Audit log query. Dates are ISO strings; unset filters are not sent."""

    company_id: str | None = None
    user_id: str | None = None
    action: AuditAction | None = None
    entity_type: str | None = None
    entity_id: str | None = None
    date_from: str | None = Field(None, serialization_alias="start_date")
    date_to: str | None = Field(None, serialization_alias="end_date")
    limit: int | None = Field(None, gt=0)
    offset: int | None = Field(None, ge=0)

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class AuditLogPage(BaseModel):
    """Offset-paginated audit log result."""

    data: list[dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    limit: int = 0
    offset: int = 0

    model_config = {"extra": "allow"}


class FeatureFlagStatus(BaseModel):
    code: str
    enabled: bool
    source: str | None = None

    model_config = {"extra": "allow"}


class SetCompanyFlagRequest(BaseModel):
    code: str
    enabled: bool
    company_id: str | None = Field(None, serialization_alias="company_Id")

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ResolvedPreference(BaseModel):
    """Effective value of a preference after scope resolution (user > branch > company > system)."""

    code: str
    value: Any = None
    effective_scope: PreferenceScope = "system"
    value_type: str = "string"
    system_value: str | None = None
    company_value: str | None = None
    branch_value: str | None = None
    user_value: str | None = None

    model_config = {"extra": "allow"}
