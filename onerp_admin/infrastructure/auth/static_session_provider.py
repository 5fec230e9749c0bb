"""In-process session provider for scripts, workers and tests."""

from onerp_admin.application.interfaces import SessionProvider
from onerp_admin.domain.entities import Session


class StaticSessionProvider(SessionProvider):
    """Hands out a session that the owner replaces when the token changes.

    Token acquisition and refresh happen elsewhere; whoever refreshes calls
    ``set_session`` (or ``mark_refresh_failed`` when the refresh failed).
    """

    def __init__(self, access_token: str | None = None):
        self._session: Session | None = (
            Session(access_token=access_token) if access_token else None
        )

    async def get_session(self) -> Session | None:
        return self._session

    def set_session(self, session: Session | None) -> None:
        self._session = session

    def mark_refresh_failed(self) -> None:
        self._session = Session(error="RefreshTokenError")
