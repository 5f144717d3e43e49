"""Notifications and shops mixin for Habitica API client."""

from typing import TYPE_CHECKING, Any

from habitica_mcp.api.client_base import path_segment

if TYPE_CHECKING:
    from habitica_mcp.api.protocols import BaseClientProtocol


class NotificationsClientMixin:
    """Mixin providing notification and shop browsing for the Habitica API client."""

    async def get_notifications(self: "BaseClientProtocol") -> dict[str, Any]:
        """Fetch pending notifications, returning the full response envelope."""
        return await self.make_request("GET", "notifications")

    async def read_notification(self: "BaseClientProtocol", notification_id: str) -> None:
        """Mark a notification as read."""
        endpoint = f"notifications/{path_segment(notification_id)}/read"
        await self.make_request("POST", endpoint)

    async def get_shop(self: "BaseClientProtocol", shop_type: str) -> dict[str, Any]:
        """Fetch the contents of a shop, returning the full response envelope."""
        return await self.make_request("GET", f"shops/{path_segment(shop_type)}")
