"""Dependency wiring: connects infrastructure adapters to the application layer."""

from dataclasses import dataclass, field

import httpx

from onerp_admin.application.interfaces import Notifier, SessionProvider
from onerp_admin.application.modules import (
    AuditLogService,
    DocumentService,
    FeatureFlagService,
    ModuleRegistry,
    PreferenceService,
    build_registry,
)
from onerp_admin.application.state import (
    AutocompleteSearch,
    ListModule,
    PaginatedModule,
    QueryCache,
)
from onerp_admin.application.use_cases import SearchPolicy
from onerp_admin.config import Settings, get_settings
from onerp_admin.domain.entities import ModuleKind
from onerp_admin.infrastructure.auth import StaticSessionProvider
from onerp_admin.infrastructure.http import OnerpApiClient
from onerp_admin.infrastructure.notifications import LoggingNotifier


def get_api_client(
    session_provider: SessionProvider,
    *,
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> OnerpApiClient:
    """Provides the gateway client configured from settings."""
    settings = settings or get_settings()
    return OnerpApiClient(
        base_url=settings.onerp_api_url,
        session_provider=session_provider,
        http_client=http_client,
        timeout=settings.onerp_api_timeout,
    )


@dataclass
class AdminConsole:
    """One signed-in console session: client, registry, cache and notifier.

    Every module built from the same console shares its cache, so a mutation
    in one module is visible to any other module reading the same key.
    """

    registry: ModuleRegistry
    cache: QueryCache
    notifier: Notifier
    settings: Settings
    feature_flags: FeatureFlagService
    audit: AuditLogService
    preferences: PreferenceService
    documents: DocumentService
    _modules: dict[str, PaginatedModule | ListModule] = field(default_factory=dict, repr=False)

    def module(self, key: str) -> PaginatedModule | ListModule:
        """The state holder for a module key, created on first use."""
        if key not in self._modules:
            options = {}
            if self.registry.get(key).kind == ModuleKind.PAGINATED:
                options["page_size"] = self.settings.default_page_size
            self._modules[key] = self.registry.build_module(
                key, self.cache, self.notifier, **options
            )
        return self._modules[key]

    def autocomplete(
        self, key: str, *, policy: SearchPolicy | None = None
    ) -> AutocompleteSearch:
        """A fresh autocomplete field over a module's (or a named) search."""
        return AutocompleteSearch(
            self.registry.search(key, policy=policy),
            self.cache,
            min_chars=self.settings.autocomplete_min_chars,
            stale_time=self.settings.autocomplete_stale_seconds,
            key_prefix=key,
        )


def create_console(
    session_provider: SessionProvider | None = None,
    *,
    settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
    notifier: Notifier | None = None,
) -> AdminConsole:
    """Wire a console from settings. Without a session provider requests go out unauthenticated."""
    settings = settings or get_settings()
    client = get_api_client(
        session_provider or StaticSessionProvider(),
        settings=settings,
        http_client=http_client,
    )
    return AdminConsole(
        registry=build_registry(client, search_limit=settings.search_page_size),
        cache=QueryCache(),
        notifier=notifier or LoggingNotifier(),
        settings=settings,
        feature_flags=FeatureFlagService(client),
        audit=AuditLogService(client),
        preferences=PreferenceService(client),
        documents=DocumentService(client),
    )
