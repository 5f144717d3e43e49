"""Pets, mounts and equipment mixin for Habitica API client."""

import logging
from typing import TYPE_CHECKING, Any

from habitica_mcp.api.client_base import path_segment

if TYPE_CHECKING:
    from habitica_mcp.api.protocols import BaseClientProtocol

logger = logging.getLogger(__name__)


class PetsClientMixin:
    """Mixin providing stable and equipment operations for the Habitica API client."""

    async def feed_pet(self: "BaseClientProtocol", pet: str, food: str) -> dict[str, Any]:
        """Feed ``food`` to ``pet``, returning the full response envelope."""
        endpoint = f"user/feed/{path_segment(pet)}/{path_segment(food)}"
        envelope = await self.make_request("POST", endpoint)
        logger.debug("Fed %s to %s", food, pet)
        return envelope

    async def hatch_pet(
        self: "BaseClientProtocol", egg: str, hatching_potion: str
    ) -> dict[str, Any]:
        """Hatch ``egg`` with ``hatching_potion``."""
        endpoint = f"user/hatch/{path_segment(egg)}/{path_segment(hatching_potion)}"
        return await self.make_request("POST", endpoint)

    async def equip(self: "BaseClientProtocol", equip_type: str, key: str) -> dict[str, Any]:
        """Equip or unequip ``key`` in the ``equip_type`` slot."""
        endpoint = f"user/equip/{path_segment(equip_type)}/{path_segment(key)}"
        return await self.make_request("POST", endpoint)
