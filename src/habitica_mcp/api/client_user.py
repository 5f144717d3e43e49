"""User functionality mixin for Habitica API client.

Profile, stats, inventory, pets and mounts are all subtrees of the ``/user``
resource; this mixin fetches it once per call and lets callers pick a subtree.
"""

import logging
from typing import TYPE_CHECKING, Any

from habitica_mcp.api.client_base import path_segment
from habitica_mcp.api.exceptions import HabiticaResponseError
from habitica_mcp.api.models import PurchaseResult, parse_response

if TYPE_CHECKING:
    from habitica_mcp.api.protocols import BaseClientProtocol

logger = logging.getLogger(__name__)


class UserClientMixin:
    """Mixin providing ``/user`` operations for the Habitica API client."""

    async def get_user(self: "BaseClientProtocol") -> dict[str, Any]:
        """Fetch the complete user document.

        Raises:
            HabiticaResponseError: If the user document is not a JSON object
        """
        data = await self.request_data("GET", "user")
        if not isinstance(data, dict):
            raise HabiticaResponseError.create_parse_error("user", reason="not_an_object")
        return data

    async def get_user_subtree(self, *path: str) -> Any:  # noqa: ANN401
        """Fetch the user document and return the value found at ``path``.

        Args:
            *path: Keys to follow, e.g. ("items", "pets")

        Raises:
            HabiticaResponseError: If a key along the path is missing
        """
        node: Any = await self.get_user()
        for key in path:
            if not isinstance(node, dict) or key not in node:
                raise HabiticaResponseError.create_parse_error(
                    "user", missing=".".join(path)
                )
            node = node[key]
        return node

    async def buy(
        self: "BaseClientProtocol", key: str, quantity: int | None = None
    ) -> PurchaseResult:
        """Buy a reward or shop item by key.

        Args:
            key: Reward or item key
            quantity: Number of items, sent in the body when given

        Returns:
            PurchaseResult: Account state after the purchase
        """
        endpoint = f"user/buy/{path_segment(key)}"
        body = {"quantity": quantity} if quantity is not None else None
        data = await self.request_data("POST", endpoint, data=body)
        logger.debug("Bought %s (quantity=%s)", key, quantity or 1)
        return parse_response(PurchaseResult, data if isinstance(data, dict) else {}, endpoint)

    async def cast_spell(
        self: "BaseClientProtocol", spell_id: str, target_id: str | None = None
    ) -> dict[str, Any]:
        """Cast a class skill, optionally on a target."""
        params = {"targetId": target_id} if target_id else None
        endpoint = f"user/class/cast/{path_segment(spell_id)}"
        return await self.make_request("POST", endpoint, params=params)
