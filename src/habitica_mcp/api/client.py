"""Composed Habitica API client with modular functionality.

This module provides the HabiticaClient class that combines the base HTTP
infrastructure with feature-specific mixins for a complete API client.
"""

from types import TracebackType

from habitica_mcp.api.client_base import BaseClient
from habitica_mcp.api.client_checklist import ChecklistClientMixin
from habitica_mcp.api.client_notifications import NotificationsClientMixin
from habitica_mcp.api.client_pets import PetsClientMixin
from habitica_mcp.api.client_tags import TagsClientMixin
from habitica_mcp.api.client_tasks import TasksClientMixin
from habitica_mcp.api.client_user import UserClientMixin


class HabiticaClient(
    BaseClient,
    TasksClientMixin,
    ChecklistClientMixin,
    TagsClientMixin,
    UserClientMixin,
    PetsClientMixin,
    NotificationsClientMixin,
):
    """Complete Habitica API client with all functionality."""

    def __str__(self) -> str:
        """Return string representation without exposing the API token."""
        return f"HabiticaClient(base_url={self._base_url}, token=***redacted***)"

    def __repr__(self) -> str:
        """Return repr without exposing the API token."""
        return f"HabiticaClient(base_url='{self._base_url}', token='***redacted***')"

    async def __aenter__(self) -> "HabiticaClient":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit."""
        await super().__aexit__(exc_type, exc_val, exc_tb)


__all__ = ["HabiticaClient"]
