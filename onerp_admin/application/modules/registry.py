"""Module registry: every entity module of the console, keyed by module key."""

import logging
from collections.abc import Callable, Iterator
from typing import Any

from onerp_admin.application.interfaces import ApiClient, Notifier
from onerp_admin.application.state import ListModule, PaginatedModule, QueryCache
from onerp_admin.application.use_cases import (
    SEARCH_PAGE_SIZE,
    EntityActions,
    ListActions,
    PaginatedActions,
    SearchAction,
    SearchPolicy,
)
from onerp_admin.domain.entities import AutocompleteOption, EntityModule, ModuleKind
from onerp_admin.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SearchBuilder = Callable[[ApiClient, SearchPolicy | None], Callable[[str], Any]]
ModuleEntry = tuple[EntityModule, type[EntityActions] | None]

_DEFAULT_ACTIONS: dict[ModuleKind, type[EntityActions]] = {
    ModuleKind.PAGINATED: PaginatedActions,
    ModuleKind.LIST: ListActions,
}


class ModuleRegistry:
    """Maps module keys to their descriptors, action sets and search actions.

    Action sets are built lazily and reused, one per module key.
    """

    def __init__(self, client: ApiClient, *, search_limit: int = SEARCH_PAGE_SIZE):
        self._client = client
        self._search_limit = search_limit
        self._modules: dict[str, EntityModule] = {}
        self._action_types: dict[str, type[EntityActions]] = {}
        self._actions: dict[str, EntityActions] = {}
        self._searches: dict[str, SearchBuilder] = {}

    def register(
        self,
        module: EntityModule,
        actions_cls: type[EntityActions] | None = None,
    ) -> None:
        if module.key in self._modules:
            raise ConfigurationError(f"Module '{module.key}' is already registered")

        if module.kind == ModuleKind.SEARCH_ONLY:
            if module.search_mapping is None:
                raise ConfigurationError(
                    f"Search-only module '{module.key}' needs a search mapping"
                )
        else:
            expected = _DEFAULT_ACTIONS[module.kind]
            actions_cls = actions_cls or expected
            if not issubclass(actions_cls, expected):
                raise ConfigurationError(
                    f"Module '{module.key}' is {module.kind.value} but "
                    f"{actions_cls.__name__} is not a {expected.__name__}"
                )
            self._action_types[module.key] = actions_cls

        self._modules[module.key] = module
        logger.debug("Registered module %s at %s (%s)", module.key, module.base_path, module.kind.value)

    def register_all(self, entries: list[ModuleEntry]) -> None:
        for module, actions_cls in entries:
            self.register(module, actions_cls)

    def register_search(self, name: str, builder: SearchBuilder) -> None:
        """Register a search with its own endpoint and projection under ``name``."""
        if name in self._searches:
            raise ConfigurationError(f"Search '{name}' is already registered")
        self._searches[name] = builder

    def get(self, key: str) -> EntityModule:
        try:
            return self._modules[key]
        except KeyError:
            raise ConfigurationError(f"Unknown module '{key}'") from None

    def actions(self, key: str) -> EntityActions:
        """Return the action set of a paginated or list module."""
        module = self.get(key)
        if module.kind == ModuleKind.SEARCH_ONLY:
            raise ConfigurationError(f"Module '{key}' only supports search")
        if key not in self._actions:
            self._actions[key] = self._action_types[key](self._client, module.base_path)
        return self._actions[key]

    def search(
        self, key: str, *, policy: SearchPolicy | None = None
    ) -> Callable[[str], Any]:
        """Return the autocomplete search for a module key or a named search.

        Returns:
            An async callable ``(query) -> list[AutocompleteOption]``.
        """
        if key in self._searches:
            return self._searches[key](self._client, policy)

        module = self.get(key)
        if module.search_mapping is None:
            raise ConfigurationError(f"Module '{key}' has no search mapping")
        return SearchAction(
            self._client,
            module.base_path,
            module.search_mapping,
            limit=self._search_limit,
            policy=policy,
        )

    def build_module(
        self,
        key: str,
        cache: QueryCache,
        notifier: Notifier,
        **options: Any,
    ) -> PaginatedModule | ListModule:
        """Create the state holder matching the module's kind."""
        actions = self.actions(key)
        if isinstance(actions, PaginatedActions):
            return PaginatedModule(key, actions, cache, notifier, **options)
        if isinstance(actions, ListActions):
            return ListModule(key, actions, cache, notifier, **options)
        raise ConfigurationError(f"Module '{key}' has no list or page query")

    def keys(self) -> list[str]:
        return list(self._modules)

    def search_names(self) -> list[str]:
        return list(self._searches)

    def __contains__(self, key: object) -> bool:
        return key in self._modules

    def __iter__(self) -> Iterator[EntityModule]:
        return iter(self._modules.values())

    def __len__(self) -> int:
        return len(self._modules)


def option_from(code: Any, value: Any, **meta: Any) -> AutocompleteOption:
    """Build an option from already-extracted values (custom projections)."""
    return AutocompleteOption(
        code="" if code is None else str(code),
        value="" if value is None else str(value),
        meta=meta,
    )
