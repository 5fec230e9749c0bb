"""ONERP gateway client: implements the ApiClient interface.

Attaches the bearer token from the session provider, sends JSON bodies with
httpx and turns error responses into domain exceptions with a readable message.
"""

import json
import logging
from typing import Any

import httpx

from onerp_admin.application.interfaces import ApiClient, SessionProvider
from onerp_admin.domain.exceptions import (
    ApiRequestError,
    AuthenticationError,
    ResourceNotFoundError,
)

logger = logging.getLogger(__name__)


def extract_error_message(status_code: int, content: bytes) -> str:
    """Build a human message from an error response body.

    Priority: a list ``message`` (joined with ", "), a scalar ``message``,
    then ``error``. Falls back to ``Error <status>`` when the body is not JSON
    or carries none of these. A ``statusCode`` that differs from the HTTP
    status is prefixed as ``[<code>]``.
    """
    message = f"Error {status_code}"
    try:
        payload = json.loads(content)
    except (ValueError, UnicodeDecodeError):
        return message
    if not isinstance(payload, dict):
        return message

    raw = payload.get("message")
    if isinstance(raw, list):
        message = ", ".join(str(item) for item in raw)
    elif raw is not None:
        message = str(raw)
    elif payload.get("error") is not None:
        message = str(payload["error"])

    body_code = payload.get("statusCode")
    if body_code and body_code != status_code:
        message = f"[{body_code}] {message}"
    return message


class OnerpApiClient(ApiClient):
    """Infrastructure adapter: connects to the ONERP API gateway.

    Uses an injected httpx.AsyncClient when given (connection pooling, tests
    with MockTransport); otherwise a short-lived client per request.
    """

    def __init__(
        self,
        base_url: str,
        session_provider: SessionProvider,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._session_provider = session_provider
        self._http_client = http_client
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        if self._timeout is None:
            return httpx.AsyncClient()
        return httpx.AsyncClient(timeout=self._timeout)

    async def _get_headers(self, extra: dict[str, str] | None) -> dict[str, str]:
        session = await self._session_provider.get_session()
        if session is not None and session.refresh_failed:
            raise AuthenticationError()

        headers = {"Content-Type": "application/json"}
        if extra:
            headers.update(extra)
        if session is not None and session.access_token:
            headers["Authorization"] = f"Bearer {session.access_token}"
        return headers

    async def request(
        self,
        path: str,
        *,
        method: str = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request to the gateway and return the decoded JSON body."""
        request_headers = await self._get_headers(headers)
        url = f"{self._base_url}{path}"
        content = json.dumps(body) if body is not None else None

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            logger.debug("%s %s", method, url)
            response = await client.request(
                method,
                url,
                headers=request_headers,
                content=content,
                params=params,
            )

            if response.status_code == 401:
                logger.warning("[API Error] 401 %s: session rejected", response.url)
                raise AuthenticationError()

            if not response.is_success:
                self._raise_request_error(response)

            if not response.content:
                return None
            return response.json()

        finally:
            if should_close:
                await client.aclose()

    def _raise_request_error(self, response: httpx.Response) -> None:
        """Raise ApiRequestError (or ResourceNotFoundError) from a non-2xx response."""
        message = extract_error_message(response.status_code, response.content)
        logger.error(
            "[API Error] %d %s: %s", response.status_code, response.url, message
        )
        if response.status_code == 404:
            raise ResourceNotFoundError(message, status_code=404)
        raise ApiRequestError(message, status_code=response.status_code)
