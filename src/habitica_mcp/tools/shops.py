"""Notification and shop tools for Habitica MCP integration."""

import logging
from typing import Annotated, Literal

from fastmcp.server.context import Context as ServerContext
from pydantic import Field

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.catalog import ToolName
from habitica_mcp.registry import ToolRegistry
from habitica_mcp.tools.common import format_number, to_json_text

logger = logging.getLogger(__name__)


class ShopTools:
    """Tools for notifications, shop browsing and item purchases."""

    def __init__(self, registry: ToolRegistry, habitica_client: HabiticaClient) -> None:
        self.registry = registry
        self.habitica_client = habitica_client
        self.t = registry.translator.t
        self._register_tools()

    async def get_notifications_tool(self, ctx: ServerContext) -> str:
        await ctx.info("Fetching notifications")
        return to_json_text(await self.habitica_client.get_notifications())

    async def read_notification_tool(self, ctx: ServerContext, notification_id: str) -> str:
        await ctx.info(f"Marking notification {notification_id} as read")
        await self.habitica_client.read_notification(notification_id)
        return self.t(
            f"Successfully marked notification as read (ID: {notification_id})",
            f"已将通知标记为已读（ID：{notification_id}）",
        )

    async def get_shop_tool(self, ctx: ServerContext, shop_type: str = "market") -> str:
        """Return the contents of a shop, the market unless told otherwise."""
        await ctx.info(f"Fetching shop {shop_type}")
        return to_json_text(await self.habitica_client.get_shop(shop_type))

    async def buy_item_tool(self, ctx: ServerContext, item_key: str, quantity: int = 1) -> str:
        """Buy ``quantity`` of an item and report the remaining gold."""
        await ctx.info(f"Buying {quantity} x {item_key}")
        result = await self.habitica_client.buy(item_key, quantity)
        gold = result.remaining_gold
        remaining = format_number(gold) if gold is not None else "?"
        logger.info("Bought %s x%d", item_key, quantity)
        return self.t(
            f"Successfully bought {item_key} x{quantity}! Remaining gold: {remaining}",
            f"成功购买 {item_key} x{quantity}！剩余金币：{remaining}",
        )

    def _register_tools(self) -> None:
        """Hand the notification and shop tools to the registry."""
        t = self.t

        async def _get_notifications(ctx: ServerContext) -> str:
            return await self.get_notifications_tool(ctx)

        async def _read_notification(
            ctx: ServerContext,
            notificationId: Annotated[  # noqa: N803
                str,
                Field(
                    description=t(
                        "Unique identifier of the notification to mark as read (obtained "
                        "from get_notifications)",
                        "要标记为已读的通知 ID（可通过 get_notifications 获取）",
                    )
                ),
            ],
        ) -> str:
            return await self.read_notification_tool(ctx, notificationId)

        async def _get_shop(
            ctx: ServerContext,
            shopType: Annotated[  # noqa: N803
                Literal["market", "questShop", "timeTravelersShop", "seasonalShop"],
                Field(
                    description=t(
                        "Shop category: 'market' for basic items, 'questShop' for quest "
                        "scrolls, 'timeTravelersShop' for past event items, 'seasonalShop' "
                        "for current event items",
                        "商店类别：'market' 基础物品，'questShop' 副本卷轴，"
                        "'timeTravelersShop' 往期活动物品，'seasonalShop' 当季活动物品",
                    )
                ),
            ] = "market",
        ) -> str:
            return await self.get_shop_tool(ctx, shopType)

        async def _buy_item(
            ctx: ServerContext,
            itemKey: Annotated[  # noqa: N803
                str,
                Field(
                    description=t(
                        "Unique identifier of the item to purchase (obtained from get_shop)",
                        "要购买的物品 ID（可通过 get_shop 获取）",
                    )
                ),
            ],
            quantity: Annotated[
                int,
                Field(
                    ge=1,
                    description=t(
                        "Number of items to purchase (default: 1). Some items have "
                        "purchase limits",
                        "购买数量（默认 1），部分物品有购买上限",
                    ),
                ),
            ] = 1,
        ) -> str:
            return await self.buy_item_tool(ctx, itemKey, quantity)

        self.registry.add(ToolName.GET_NOTIFICATIONS, _get_notifications)
        self.registry.add(ToolName.READ_NOTIFICATION, _read_notification)
        self.registry.add(ToolName.GET_SHOP, _get_shop)
        self.registry.add(ToolName.BUY_ITEM, _buy_item)
