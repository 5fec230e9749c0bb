"""Domain-specific exceptions, framework-independent."""


class AuthenticationError(Exception):
    """Raised when the session is missing, could not be refreshed, or the API answered 401."""

    def __init__(self, message: str = "Session expired"):
        self.message = message
        super().__init__(message)


class ApiRequestError(Exception):
    """Raised when the ONERP API answers with a non-2xx status other than 401.

    ``str(error)`` is the human-readable message extracted from the error body.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ResourceNotFoundError(ApiRequestError):
    """Raised when the ONERP API answers 404 for a resource."""


class ConfigurationError(Exception):
    """Raised when a module key or entity wiring is invalid."""
