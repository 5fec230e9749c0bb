from .api_client import ApiClient
from .notifier import Notifier
from .session_provider import SessionProvider

__all__ = [
    "ApiClient",
    "Notifier",
    "SessionProvider",
]
