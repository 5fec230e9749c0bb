"""Domain entity for the authenticated session handed out by the session provider."""

from dataclasses import dataclass

REFRESH_TOKEN_ERROR = "RefreshTokenError"


@dataclass
class Session:
    """Bearer credentials for the ONERP gateway.

    ``error`` is set by the session provider when the token refresh failed;
    such a session must not be used for outbound requests.
    """

    access_token: str | None = None
    error: str | None = None

    @property
    def refresh_failed(self) -> bool:
        return self.error == REFRESH_TOKEN_ERROR
