from .autocomplete import AutocompleteFieldMapping, AutocompleteOption
from .entity_module import EntityModule, ModuleKind
from .notification import Notification, NotificationVariant
from .pagination import CursorPaginationState
from .query_state import MutationState, QueryState, RequestStatus
from .session import REFRESH_TOKEN_ERROR, Session

__all__ = [
    "AutocompleteFieldMapping",
    "AutocompleteOption",
    "EntityModule",
    "ModuleKind",
    "Notification",
    "NotificationVariant",
    "CursorPaginationState",
    "MutationState",
    "QueryState",
    "RequestStatus",
    "REFRESH_TOKEN_ERROR",
    "Session",
]
