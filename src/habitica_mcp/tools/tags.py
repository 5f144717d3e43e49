"""Tag tools for Habitica MCP integration."""

import logging
from typing import Annotated

from fastmcp.server.context import Context as ServerContext
from pydantic import Field

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.catalog import ToolName
from habitica_mcp.registry import ToolRegistry
from habitica_mcp.tools.common import to_json_text

logger = logging.getLogger(__name__)


class TagTools:
    """Tools for listing and creating Habitica tags."""

    def __init__(self, registry: ToolRegistry, habitica_client: HabiticaClient) -> None:
        self.registry = registry
        self.habitica_client = habitica_client
        self.t = registry.translator.t
        self._register_tools()

    async def get_tags_tool(self, ctx: ServerContext) -> str:
        """Return all tags as pretty-printed JSON."""
        await ctx.info("Fetching tags")
        return to_json_text(await self.habitica_client.get_tags())

    async def create_tag_tool(self, ctx: ServerContext, name: str) -> str:
        """Create a tag and report its name and ID."""
        await ctx.info(f"Creating tag {name}")
        tag = await self.habitica_client.create_tag(name)
        logger.info("Successfully created tag %s", tag.id)
        return self.t(
            f"Successfully created tag: {tag.name} (ID: {tag.id})",
            f"成功创建标签：{tag.name}（ID：{tag.id}）",
        )

    def _register_tools(self) -> None:
        """Hand the tag tools to the registry."""
        t = self.t

        async def _get_tags(ctx: ServerContext) -> str:
            return await self.get_tags_tool(ctx)

        async def _create_tag(
            ctx: ServerContext,
            name: Annotated[
                str,
                Field(
                    description=t(
                        "Name of the new tag (e.g., 'Work', 'Health', 'Personal Project')",
                        "新标签的名称（例如 '工作'、'健康'、'个人项目'）",
                    )
                ),
            ],
        ) -> str:
            return await self.create_tag_tool(ctx, name)

        self.registry.add(ToolName.GET_TAGS, _get_tags)
        self.registry.add(ToolName.CREATE_TAG, _create_tag)
