"""Tags functionality mixin for Habitica API client."""

import logging
from typing import TYPE_CHECKING, Any

from habitica_mcp.api.models import Tag, parse_response

if TYPE_CHECKING:
    from habitica_mcp.api.protocols import BaseClientProtocol

logger = logging.getLogger(__name__)


class TagsClientMixin:
    """Mixin providing tag operations for the Habitica API client."""

    async def get_tags(self: "BaseClientProtocol") -> dict[str, Any]:
        """Fetch all user tags, returning the full response envelope."""
        return await self.make_request("GET", "tags")

    async def create_tag(self: "BaseClientProtocol", name: str) -> Tag:
        """Create a tag with the given name."""
        data = await self.request_data("POST", "tags", data={"name": name})
        tag = parse_response(Tag, data, "tags")
        logger.debug("Created tag: %s", tag.id)
        return tag
