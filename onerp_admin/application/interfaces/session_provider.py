"""Session provider port: supplies bearer tokens, never refreshes them itself."""

from abc import ABC, abstractmethod

from onerp_admin.domain.entities import Session


class SessionProvider(ABC):
    """Port: resolves the current session before every API call."""

    @abstractmethod
    async def get_session(self) -> Session | None:
        """Return the current session, or None when nobody is signed in."""
        ...
