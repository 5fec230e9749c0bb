"""Search action factory: autocomplete suggestions from the pagination endpoint.

The factory contract is strict: it always queries and always propagates
errors. Call sites that want to skip short queries or degrade to an empty
list pass an explicit ``SearchPolicy``.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from onerp_admin.application.interfaces import ApiClient
from onerp_admin.application.schemas import SearchRequest
from onerp_admin.application.use_cases.entity_actions import EntityRecord
from onerp_admin.application.use_cases.list_actions import unwrap_records
from onerp_admin.domain.entities import AutocompleteFieldMapping, AutocompleteOption
from onerp_admin.domain.exceptions import ApiRequestError, AuthenticationError

logger = logging.getLogger(__name__)

SEARCH_PAGE_SIZE = 20


@dataclass(frozen=True)
class SearchPolicy:
    """Call-site policy for a search action.

    Attributes:
        min_query_length: Queries shorter than this return [] without a request.
        empty_on_error: Return [] instead of raising on request failures.
            AuthenticationError is always raised.
    """

    min_query_length: int = 0
    empty_on_error: bool = False


STRICT_POLICY = SearchPolicy()
LENIENT_POLICY = SearchPolicy(min_query_length=2, empty_on_error=True)


def map_entity_to_option(
    entity: EntityRecord, mapping: AutocompleteFieldMapping
) -> AutocompleteOption:
    """Project a raw entity into an autocomplete option.

    ``code`` and ``value`` are coerced to strings (missing -> ""). ``meta``
    holds the raw values of ``meta_fields``, or of every other field when
    ``meta_fields`` is None.
    """
    code = entity.get(mapping.code)
    value = entity.get(mapping.value)

    if mapping.meta_fields is not None:
        meta = {name: entity.get(name) for name in mapping.meta_fields}
    else:
        meta = {
            key: val
            for key, val in entity.items()
            if key not in (mapping.code, mapping.value)
        }

    return AutocompleteOption(
        code="" if code is None else str(code),
        value="" if value is None else str(value),
        meta=meta,
    )


class _PolicySearch(ABC):
    """Applies a SearchPolicy around a concrete lookup."""

    def __init__(self, policy: SearchPolicy | None):
        self._policy = policy or STRICT_POLICY

    @property
    def policy(self) -> SearchPolicy:
        return self._policy

    async def __call__(self, query: str) -> list[AutocompleteOption]:
        if len(query or "") < self._policy.min_query_length:
            return []
        try:
            return await self._lookup(query)
        except AuthenticationError:
            raise
        except Exception as exc:
            if not self._policy.empty_on_error:
                raise
            logger.warning("Search for %r failed, returning no options: %s", query, exc)
            return []

    @abstractmethod
    async def _lookup(self, query: str) -> list[AutocompleteOption]:
        """Query the backend and project the results."""
        ...


class SearchAction(_PolicySearch):
    """``await search(query)`` -> options, via ``POST {base}/pagination``.

    Filtering over ``mapping.search_fields`` happens server-side; results are
    projected with ``map_entity_to_option`` and never filtered locally.
    """

    def __init__(
        self,
        client: ApiClient,
        base_path: str,
        mapping: AutocompleteFieldMapping,
        *,
        limit: int = SEARCH_PAGE_SIZE,
        policy: SearchPolicy | None = None,
    ):
        super().__init__(policy)
        self._client = client
        self._base_path = base_path.rstrip("/")
        self._mapping = mapping
        self._limit = limit

    @property
    def mapping(self) -> AutocompleteFieldMapping:
        return self._mapping

    async def _lookup(self, query: str) -> list[AutocompleteOption]:
        body = SearchRequest(limit=self._limit, search=query).model_dump()
        payload = await self._client.request(
            f"{self._base_path}/pagination", method="POST", body=body
        )
        records = unwrap_records(payload)
        if records is None:
            raise ApiRequestError(
                f"Unexpected search response from {self._base_path}/pagination"
            )
        return [map_entity_to_option(item, self._mapping) for item in records]


class QuerySearchAction(_PolicySearch):
    """Search over a dedicated ``GET {path}?q=...`` endpoint with a custom projection.

    Used by documents whose suggestion label combines several fields
    (order numbers with customer names, asset code plus name).
    """

    def __init__(
        self,
        client: ApiClient,
        path: str,
        project: Callable[[EntityRecord], AutocompleteOption],
        *,
        limit: int | None = None,
        extra_params: dict[str, Any] | None = None,
        policy: SearchPolicy | None = None,
    ):
        super().__init__(policy or LENIENT_POLICY)
        self._client = client
        self._path = path
        self._project = project
        self._limit = limit
        self._extra_params = extra_params or {}

    async def _lookup(self, query: str) -> list[AutocompleteOption]:
        params: dict[str, Any] = {"q": query, **self._extra_params}
        if self._limit is not None:
            params["limit"] = self._limit
        payload = await self._client.request(self._path, method="GET", params=params)
        records = unwrap_records(payload)
        if records is None:
            raise ApiRequestError(f"Unexpected search response from {self._path}")
        return [self._project(item) for item in records]


def create_search_action(
    base_path: str,
    mapping: AutocompleteFieldMapping,
    client: ApiClient,
    *,
    limit: int = SEARCH_PAGE_SIZE,
    policy: SearchPolicy | None = None,
) -> SearchAction:
    """Build the autocomplete search for one entity base path."""
    return SearchAction(client, base_path, mapping, limit=limit, policy=policy)


def create_query_search_action(
    path: str,
    project: Callable[[EntityRecord], AutocompleteOption],
    client: ApiClient,
    *,
    limit: int | None = None,
    extra_params: dict[str, Any] | None = None,
    policy: SearchPolicy | None = None,
) -> QuerySearchAction:
    """Build a search over a dedicated ``?q=`` endpoint."""
    return QuerySearchAction(
        client,
        path,
        project,
        limit=limit,
        extra_params=extra_params,
        policy=policy,
    )
