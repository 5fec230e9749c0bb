"""Abstract API client interface: port for the ONERP gateway adapter."""

from abc import ABC, abstractmethod
from typing import Any


class ApiClient(ABC):
    """Port: what the action factories need from the HTTP layer."""

    @abstractmethod
    async def request(
        self,
        path: str,
        *,
        method: str = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send an authenticated request and return the decoded JSON body.

        Args:
            path: Path relative to the gateway root (e.g. '/onerp/banks').
            method: HTTP method.
            body: JSON-serializable request body, or None for no body.
            headers: Extra headers; they override the defaults.
            params: Query-string parameters.

        Returns:
            The decoded JSON response, or None for an empty body.

        Raises:
            AuthenticationError: If the session is invalid or the API answers 401.
            ApiRequestError: For any other non-2xx response.
        """
        ...
