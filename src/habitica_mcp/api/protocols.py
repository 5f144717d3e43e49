"""Protocol definitions for Habitica API client mixins.

This module provides typing protocols that enable mixins to reference
base client methods without circular imports.
"""

from typing import Any, Protocol


class BaseClientProtocol(Protocol):
    """Protocol defining the interface that mixins can depend on."""

    async def make_request(
        self,
        method: str,
        endpoint: str,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make an authenticated request and return the JSON envelope."""
        ...

    async def request_data(
        self,
        method: str,
        endpoint: str,
        data: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:  # noqa: ANN401
        """Make an authenticated request and return the envelope's ``data``."""
        ...
