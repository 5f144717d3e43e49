"""Account tools for Habitica MCP integration.

Profile, stats and inventory are read from the ``/user`` document; rewards
and class skills act on the account.
"""

import logging
from typing import Annotated

from fastmcp.server.context import Context as ServerContext
from pydantic import Field

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.catalog import ToolName
from habitica_mcp.registry import ToolRegistry
from habitica_mcp.tools.common import format_number, to_json_text

logger = logging.getLogger(__name__)


class UserTools:
    """Tools reading the user document and spending gold or mana."""

    def __init__(self, registry: ToolRegistry, habitica_client: HabiticaClient) -> None:
        self.registry = registry
        self.habitica_client = habitica_client
        self.t = registry.translator.t
        self._register_tools()

    async def get_user_profile_tool(self, ctx: ServerContext) -> str:
        """Return the complete user document."""
        await ctx.info("Fetching user profile")
        return to_json_text(await self.habitica_client.get_user())

    async def get_stats_tool(self, ctx: ServerContext) -> str:
        """Return the character stats subtree."""
        await ctx.info("Fetching user stats")
        return to_json_text(await self.habitica_client.get_user_subtree("stats"))

    async def get_inventory_tool(self, ctx: ServerContext) -> str:
        """Return the inventory subtree."""
        await ctx.info("Fetching inventory")
        return to_json_text(await self.habitica_client.get_user_subtree("items"))

    async def buy_reward_tool(self, ctx: ServerContext, key: str) -> str:
        """Buy a reward and report the remaining gold."""
        await ctx.info(f"Buying reward {key}")
        result = await self.habitica_client.buy(key)
        gold = result.remaining_gold
        remaining = format_number(gold) if gold is not None else "?"
        logger.info("Bought reward %s", key)
        return self.t(
            f"Successfully bought reward! Remaining gold: {remaining}",
            f"成功购买奖励！剩余金币：{remaining}",
        )

    async def cast_spell_tool(
        self, ctx: ServerContext, spell_id: str, target_id: str | None = None
    ) -> str:
        """Cast a class skill, optionally on a target."""
        await ctx.info(f"Casting {spell_id}")
        await self.habitica_client.cast_spell(spell_id, target_id)
        return self.t(
            f"Successfully cast spell: {spell_id}",
            f"成功施放技能：{spell_id}",
        )

    def _register_tools(self) -> None:
        """Hand the account tools to the registry."""
        t = self.t

        async def _get_user_profile(ctx: ServerContext) -> str:
            return await self.get_user_profile_tool(ctx)

        async def _get_stats(ctx: ServerContext) -> str:
            return await self.get_stats_tool(ctx)

        async def _get_inventory(ctx: ServerContext) -> str:
            return await self.get_inventory_tool(ctx)

        async def _buy_reward(
            ctx: ServerContext,
            key: Annotated[
                str,
                Field(
                    description=t(
                        "The unique identifier or key of the reward to purchase (obtained "
                        "from get_tasks with type 'rewards')",
                        "要购买的奖励 ID 或键（可通过 get_tasks 的 'rewards' 类型获取）",
                    )
                ),
            ],
        ) -> str:
            return await self.buy_reward_tool(ctx, key)

        async def _cast_spell(
            ctx: ServerContext,
            spellId: Annotated[  # noqa: N803
                str,
                Field(
                    description=t(
                        "The unique identifier of the spell to cast (varies by class: "
                        "mage, warrior, healer, rogue)",
                        "要施放的技能 ID（因职业而异：法师、战士、医者、盗贼）",
                    )
                ),
            ],
            targetId: Annotated[  # noqa: N803
                str | None,
                Field(
                    description=t(
                        "Optional target user ID for spells that affect other players "
                        "(party members, etc.)",
                        "可选的目标用户 ID，用于作用于其他玩家（如队友）的技能",
                    )
                ),
            ] = None,
        ) -> str:
            return await self.cast_spell_tool(ctx, spellId, targetId)

        self.registry.add(ToolName.GET_USER_PROFILE, _get_user_profile)
        self.registry.add(ToolName.GET_STATS, _get_stats)
        self.registry.add(ToolName.GET_INVENTORY, _get_inventory)
        self.registry.add(ToolName.BUY_REWARD, _buy_reward)
        self.registry.add(ToolName.CAST_SPELL, _cast_spell)
