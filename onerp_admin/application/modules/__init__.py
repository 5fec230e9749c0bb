from onerp_admin.application.interfaces import ApiClient
from onerp_admin.application.use_cases import SEARCH_PAGE_SIZE

from . import admin, inventory, maintenance, masters, purchasing, sales
from .admin import AuditLogService, FeatureFlagService, PreferenceService
from .documents import DocumentService
from .registry import ModuleEntry, ModuleRegistry, SearchBuilder, option_from

AREAS = (masters, inventory, sales, purchasing, maintenance, admin)


def build_registry(client: ApiClient, *, search_limit: int = SEARCH_PAGE_SIZE) -> ModuleRegistry:
    """Registry with every entity module and named search of the console."""
    registry = ModuleRegistry(client, search_limit=search_limit)
    for area in AREAS:
        registry.register_all(area.MODULES)
        for name, builder in getattr(area, "SEARCHES", {}).items():
            registry.register_search(name, builder)
    return registry


__all__ = [
    "AREAS",
    "AuditLogService",
    "DocumentService",
    "FeatureFlagService",
    "ModuleEntry",
    "ModuleRegistry",
    "PreferenceService",
    "SearchBuilder",
    "build_registry",
    "option_from",
]
