"""Custom exceptions for Habitica API operations.

This module defines the exception hierarchy for Habitica API errors. Every
exception carries the HTTP status code and the vendor error code returned by
Habitica as structured fields, and never exposes the API token.
"""


class HabiticaAPIError(Exception):
    """Base exception for all Habitica API errors.

    This exception ensures that API tokens are never exposed
    in error messages or logs.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
    ) -> None:
        """Initialize Habitica API error.

        Args:
            message: Error message (must not contain the API token)
            status_code: HTTP status code if applicable
            error_code: Vendor error code from the response body, e.g. "NotFound"
        """
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        super().__init__(message)

    @classmethod
    def create_unexpected_error(cls, method: str, endpoint: str) -> "HabiticaAPIError":
        """Create an error for unexpected API errors with safe context.

        Args:
            method: HTTP method used
            endpoint: API endpoint called

        Returns:
            HabiticaAPIError with contextual message
        """
        safe_context = f"method={method}, endpoint={endpoint}, status_unknown"
        return cls(f"Unexpected API error ({safe_context})")


class HabiticaBadRequestError(HabiticaAPIError):
    """Raised when Habitica rejects the request (400 Bad Request)."""

    def __init__(
        self, message: str = "Bad request - invalid parameters", error_code: str | None = None
    ) -> None:
        super().__init__(message, status_code=400, error_code=error_code)


class HabiticaAuthenticationError(HabiticaAPIError):
    """Raised when the user ID or API token is rejected (401 Unauthorized)."""

    def __init__(
        self, message: str = "Authentication failed", error_code: str | None = None
    ) -> None:
        super().__init__(message, status_code=401, error_code=error_code)


class HabiticaForbiddenError(HabiticaAPIError):
    """Raised when the action is not allowed for this account (403 Forbidden)."""

    def __init__(self, message: str = "Not authorized", error_code: str | None = None) -> None:
        super().__init__(message, status_code=403, error_code=error_code)


class HabiticaNotFoundError(HabiticaAPIError):
    """Raised when a resource is not found (404 Not Found)."""

    def __init__(self, message: str = "Resource not found", error_code: str | None = None) -> None:
        super().__init__(message, status_code=404, error_code=error_code)


class HabiticaRateLimitError(HabiticaAPIError):
    """Raised when rate limit is exceeded (429 Too Many Requests)."""

    def __init__(self, message: str = "Rate limit exceeded", error_code: str | None = None) -> None:
        super().__init__(message, status_code=429, error_code=error_code)


class HabiticaServerError(HabiticaAPIError):
    """Raised when server returns 5xx errors."""

    def __init__(
        self, message: str, status_code: int = 500, error_code: str | None = None
    ) -> None:
        super().__init__(message, status_code=status_code, error_code=error_code)


class HabiticaNetworkError(HabiticaAPIError):
    """Raised when the connection to Habitica cannot be established or is lost."""

    def __init__(self, message: str = "Network error occurred") -> None:
        super().__init__(message, status_code=None)


class HabiticaTimeoutError(HabiticaAPIError):
    """Raised when a request to Habitica times out."""

    def __init__(self, message: str = "Request timeout") -> None:
        super().__init__(message, status_code=None)


class HabiticaResponseError(HabiticaAPIError):
    """Raised when a Habitica response is not JSON or has an unexpected shape."""

    @classmethod
    def create_parse_error(
        cls, endpoint: str, **context: str | int
    ) -> "HabiticaResponseError":
        """Create an error for response parsing failures with safe context.

        Args:
            endpoint: API endpoint that failed
            **context: Additional safe context information

        Returns:
            HabiticaResponseError with contextual message
        """
        context_parts = [f"endpoint={endpoint}"]
        context_parts.extend(f"{key}={value}" for key, value in context.items())
        safe_context = ", ".join(context_parts)
        return cls(f"Failed to parse response ({safe_context})")


class HabiticaPathError(ValueError):
    """Raised before any request when an ID cannot be used as a URL path segment."""

    def __init__(self, value: str) -> None:
        self.value = value
        msg = f"Invalid identifier {value!r}: IDs may not be empty, '.', '..' or contain '/'"
        super().__init__(msg)
