from .admin import (
    AuditLogFilters,
    AuditLogPage,
    FeatureFlagStatus,
    PreferenceScope,
    ResolvedPreference,
    SetCompanyFlagRequest,
)
from .documents import GeneratedPdf, SendEmailRequest, SignedUrl
from .pagination import (
    CursorPaginationParams,
    PageInfo,
    PaginatedResponse,
    SearchRequest,
)

__all__ = [
    "AuditLogFilters",
    "AuditLogPage",
    "FeatureFlagStatus",
    "PreferenceScope",
    "ResolvedPreference",
    "SetCompanyFlagRequest",
    "GeneratedPdf",
    "SendEmailRequest",
    "SignedUrl",
    "CursorPaginationParams",
    "PageInfo",
    "PaginatedResponse",
    "SearchRequest",
]
