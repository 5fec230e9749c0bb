from .autocomplete_search import AutocompleteSearch
from .base_module import BaseModule
from .list_module import ListModule
from .mutation import Mutation, MutationMessages
from .paginated_module import DEFAULT_PAGE_SIZE, PaginatedModule
from .query_cache import QueryCache, QueryKey

__all__ = [
    "AutocompleteSearch",
    "BaseModule",
    "ListModule",
    "Mutation",
    "MutationMessages",
    "DEFAULT_PAGE_SIZE",
    "PaginatedModule",
    "QueryCache",
    "QueryKey",
]
