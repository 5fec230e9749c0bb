from .entity_actions import EntityActions, EntityRecord
from .list_actions import ListActions, create_list_actions, unwrap_records
from .paginated_actions import PaginatedActions, create_paginated_actions
from .search_action import (
    LENIENT_POLICY,
    SEARCH_PAGE_SIZE,
    STRICT_POLICY,
    QuerySearchAction,
    SearchAction,
    SearchPolicy,
    create_query_search_action,
    create_search_action,
    map_entity_to_option,
)

__all__ = [
    "EntityActions",
    "EntityRecord",
    "ListActions",
    "create_list_actions",
    "unwrap_records",
    "PaginatedActions",
    "create_paginated_actions",
    "LENIENT_POLICY",
    "SEARCH_PAGE_SIZE",
    "STRICT_POLICY",
    "QuerySearchAction",
    "SearchAction",
    "SearchPolicy",
    "create_query_search_action",
    "create_search_action",
    "map_entity_to_option",
]
