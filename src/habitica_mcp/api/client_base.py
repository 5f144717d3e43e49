"""Base client for Habitica API with HTTP plumbing and authentication.

This module provides the BaseClient class containing the HTTP infrastructure,
header authentication and error translation shared by the feature-specific
mixins. Every call issues exactly one request; nothing is retried.
"""

import logging
import types
from typing import Any, NoReturn
from urllib.parse import quote

import httpx

from habitica_mcp.api.exceptions import (
    HabiticaAPIError,
    HabiticaAuthenticationError,
    HabiticaBadRequestError,
    HabiticaForbiddenError,
    HabiticaNetworkError,
    HabiticaNotFoundError,
    HabiticaPathError,
    HabiticaRateLimitError,
    HabiticaResponseError,
    HabiticaServerError,
    HabiticaTimeoutError,
)
from habitica_mcp.config import ServerConfig

# HTTP status code constants
_HTTP_NO_CONTENT = 204
_HTTP_BAD_REQUEST = 400
_HTTP_UNAUTHORIZED = 401
_HTTP_FORBIDDEN = 403
_HTTP_NOT_FOUND = 404
_HTTP_TOO_MANY_REQUESTS = 429
_HTTP_INTERNAL_SERVER_ERROR = 500
_HTTP_MAX_SERVER_ERROR = 600

_REDACTED = "***redacted***"

# Configure logger to write to stderr
logger = logging.getLogger(__name__)

_DOT_SEGMENTS = frozenset({"", ".", ".."})


def path_segment(value: str) -> str:
    """Percent-encode ``value`` for use as one segment of an endpoint path.

    Raises:
        HabiticaPathError: If ``value`` is empty, a dot segment, or contains "/"
    """
    if value in _DOT_SEGMENTS or "/" in value:
        raise HabiticaPathError(value)
    return quote(value, safe="")


class BaseClient:
    """Base client providing HTTP plumbing and authentication for Habitica API.

    Holds a single lazily-created ``httpx.AsyncClient`` and the static
    authentication headers, and converts transport and status failures into
    the typed exceptions of ``habitica_mcp.api.exceptions``.
    """

    def __init__(
        self,
        config: ServerConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the base Habitica API client.

        Args:
            config: Server configuration containing credentials and base URL
            transport: Optional httpx transport, used to route requests in tests
        """
        self._config = config
        self._base_url = str(config.habitica_base_url).rstrip("/")
        self._user_id = config.habitica_user_id
        self._api_token = config.habitica_api_token
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None

    def __str__(self) -> str:
        """Return string representation without exposing the API token."""
        return f"BaseClient(base_url={self._base_url}, token={_REDACTED})"

    def __repr__(self) -> str:
        """Return repr without exposing the API token."""
        return f"BaseClient(base_url='{self._base_url}', token='{_REDACTED}')"

    async def __aenter__(self) -> "BaseClient":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        """Async context manager exit with cleanup."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if it was created."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with proper configuration.

        Returns:
            httpx.AsyncClient: Configured async HTTP client
        """
        if self._http_client is None:
            timeout = httpx.Timeout(
                connect=self._config.timeout_connect,
                read=self._config.timeout_read,
                write=10.0,
                pool=10.0,
            )

            limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
            )

            headers = {"User-Agent": self._config.http_user_agent}

            self._http_client = httpx.AsyncClient(
                timeout=timeout,
                limits=limits,
                follow_redirects=True,
                headers=headers,
                transport=self._transport,
            )

        return self._http_client

    def _get_auth_headers(self) -> dict[str, str]:
        """Get the static Habitica authentication headers.

        Returns:
            Dict[str, str]: x-api-user, x-api-key, x-client and Content-Type headers
        """
        return {
            "x-api-user": self._user_id,
            "x-api-key": self._api_token,
            "x-client": f"{self._user_id}-{self._config.client_name}",
            "Content-Type": "application/json",
        }

    def _get_redacted_headers(self) -> dict[str, str]:
        """Get headers with redacted API token for logging.

        Returns:
            Dict[str, str]: Headers with redacted API token
        """
        headers = self._get_auth_headers()
        headers["x-api-key"] = _REDACTED
        return headers

    @staticmethod
    def _extract_error_details(response: httpx.Response) -> tuple[str | None, str]:
        """Read Habitica's ``error`` code and ``message`` from an error response.

        Returns:
            tuple[str | None, str]: Vendor error code (if any) and message text
        """
        try:
            body = response.json()
        except ValueError:
            return None, response.text.strip()
        if not isinstance(body, dict):
            return None, response.text.strip()

        error_code = body.get("error")
        message = body.get("message")
        return (
            error_code if isinstance(error_code, str) else None,
            message if isinstance(message, str) else "",
        )

    def _handle_http_error(self, error: httpx.HTTPStatusError) -> NoReturn:
        """Handle HTTP status errors and raise appropriate exceptions.

        Args:
            error: HTTP status error from httpx

        Raises:
            HabiticaBadRequestError: For 400 Bad Request
            HabiticaAuthenticationError: For 401 Unauthorized
            HabiticaForbiddenError: For 403 Forbidden
            HabiticaNotFoundError: For 404 Not Found
            HabiticaRateLimitError: For 429 Too Many Requests
            HabiticaServerError: For 5xx server errors
            HabiticaAPIError: For other HTTP errors
        """
        response = error.response
        status_code = response.status_code
        error_code, message = self._extract_error_details(response)

        logger.debug(
            "Habitica call failed: %s %s -> %s (error=%s) body=%s",
            error.request.method,
            error.request.url,
            status_code,
            error_code,
            response.text,
        )

        if status_code == _HTTP_BAD_REQUEST:
            raise HabiticaBadRequestError(message or "Bad request", error_code) from error
        if status_code == _HTTP_UNAUTHORIZED:
            raise HabiticaAuthenticationError(
                message or "Authentication failed", error_code
            ) from error
        if status_code == _HTTP_FORBIDDEN:
            raise HabiticaForbiddenError(message or "Not authorized", error_code) from error
        if status_code == _HTTP_NOT_FOUND:
            raise HabiticaNotFoundError(message or "Resource not found", error_code) from error
        if status_code == _HTTP_TOO_MANY_REQUESTS:
            raise HabiticaRateLimitError(message or "Rate limit exceeded", error_code) from error
        if _HTTP_INTERNAL_SERVER_ERROR <= status_code < _HTTP_MAX_SERVER_ERROR:
            raise HabiticaServerError(message, status_code, error_code) from error
        raise HabiticaAPIError(message, status_code, error_code) from error

    async def make_request(
        self,
        method: str,
        endpoint: str,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make an authenticated request to the Habitica API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint (without base URL)
            data: JSON data for request body
            params: Query parameters

        Returns:
            Dict[str, Any]: Parsed JSON response envelope

        Raises:
            HabiticaBadRequestError: Invalid request parameters
            HabiticaAuthenticationError: Authentication failed
            HabiticaForbiddenError: Action not allowed
            HabiticaNotFoundError: Resource not found
            HabiticaRateLimitError: Rate limit exceeded
            HabiticaServerError: Server error
            HabiticaNetworkError: Network connectivity error
            HabiticaTimeoutError: Request timeout
            HabiticaResponseError: Response body is not a JSON object
            HabiticaAPIError: Other API errors
        """
        method_upper = method.upper()
        url = f"{self._base_url}/{endpoint.lstrip('/')}"

        try:
            http_client = self._get_http_client()

            logger.debug(
                "Making %s request to %s with headers: %s",
                method_upper,
                url,
                self._get_redacted_headers(),
            )

            response = await http_client.request(
                method=method_upper,
                url=url,
                headers=self._get_auth_headers(),
                json=data,
                params=params,
            )

            response.raise_for_status()

        except httpx.HTTPStatusError as error:
            self._handle_http_error(error)
        except httpx.TimeoutException as error:
            logger.debug("Request timeout", exc_info=True)
            msg = f"Request to Habitica timed out ({method_upper} {endpoint})"
            raise HabiticaTimeoutError(msg) from error
        except httpx.TransportError as error:
            logger.debug("Network error", exc_info=True)
            msg = f"Could not reach Habitica ({method_upper} {endpoint}): {error}"
            raise HabiticaNetworkError(msg) from error
        except Exception as error:
            logger.debug("Unexpected error during API request", exc_info=True)
            raise HabiticaAPIError.create_unexpected_error(method_upper, endpoint) from error

        if response.status_code == _HTTP_NO_CONTENT or not response.content:
            logger.debug("Successful API response: %s (No Content)", response.status_code)
            return {}

        try:
            result = response.json()
        except ValueError as error:
            raise HabiticaResponseError.create_parse_error(
                endpoint, status=response.status_code, reason="invalid_json"
            ) from error

        if not isinstance(result, dict):
            raise HabiticaResponseError.create_parse_error(
                endpoint, status=response.status_code, reason="not_an_object"
            )

        logger.debug("Successful API response: %s", response.status_code)
        return result

    async def request_data(
        self,
        method: str,
        endpoint: str,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:  # noqa: ANN401
        """Make a request and return the ``data`` member of Habitica's envelope.

        Raises:
            HabiticaResponseError: If the envelope carries no ``data`` member
        """
        envelope = await self.make_request(method, endpoint, data=data, params=params)
        if "data" not in envelope:
            raise HabiticaResponseError.create_parse_error(endpoint, reason="missing_data")
        return envelope["data"]

    async def test_connectivity(self) -> bool:
        """Test connectivity to the Habitica API.

        Makes a minimal authenticated request to verify that the credentials
        are valid and the API is reachable.

        Returns:
            bool: True if connectivity test succeeds, False otherwise
        """
        try:
            await self.request_data("GET", "user", params={"userFields": "profile.name"})
        except HabiticaAPIError as e:
            logger.warning("Habitica API connectivity test failed: %s", e)
            return False
        except Exception:
            logger.exception("Habitica API connectivity test failed with unexpected error")
            return False
        else:
            logger.info("Habitica API connectivity test successful")
            return True
