"""Stable and equipment tools for Habitica MCP integration."""

from typing import Annotated, Literal

from fastmcp.server.context import Context as ServerContext
from pydantic import Field

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.catalog import ToolName
from habitica_mcp.registry import ToolRegistry
from habitica_mcp.tools.common import to_json_text


class PetTools:
    """Tools for pets, mounts and equipment."""

    def __init__(self, registry: ToolRegistry, habitica_client: HabiticaClient) -> None:
        self.registry = registry
        self.habitica_client = habitica_client
        self.t = registry.translator.t
        self._register_tools()

    async def get_pets_tool(self, ctx: ServerContext) -> str:
        await ctx.info("Fetching pets")
        return to_json_text(await self.habitica_client.get_user_subtree("items", "pets"))

    async def get_mounts_tool(self, ctx: ServerContext) -> str:
        await ctx.info("Fetching mounts")
        return to_json_text(await self.habitica_client.get_user_subtree("items", "mounts"))

    async def feed_pet_tool(self, ctx: ServerContext, pet: str, food: str) -> str:
        """Feed a pet and append whatever Habitica said about it."""
        await ctx.info(f"Feeding {food} to {pet}")
        envelope = await self.habitica_client.feed_pet(pet, food)

        message = self.t(f"Successfully fed pet {pet}! ", f"成功喂养宠物 {pet}！")
        server_message = envelope.get("message")
        data = envelope.get("data")
        if not server_message and isinstance(data, dict):
            server_message = data.get("message")
        if server_message:
            message += str(server_message)
        return message.strip()

    async def hatch_pet_tool(self, ctx: ServerContext, egg: str, hatching_potion: str) -> str:
        await ctx.info(f"Hatching {egg} with {hatching_potion}")
        await self.habitica_client.hatch_pet(egg, hatching_potion)
        return self.t(
            f"Successfully hatched pet! Got {egg}-{hatching_potion}",
            f"成功孵化宠物！获得 {egg}-{hatching_potion}",
        )

    async def equip_item_tool(self, ctx: ServerContext, equip_type: str, key: str) -> str:
        await ctx.info(f"Equipping {equip_type} {key}")
        await self.habitica_client.equip(equip_type, key)
        return self.t(
            f"Successfully equipped {equip_type}: {key}",
            f"成功装备 {equip_type}：{key}",
        )

    def _register_tools(self) -> None:
        """Hand the stable tools to the registry."""
        t = self.t

        async def _get_pets(ctx: ServerContext) -> str:
            return await self.get_pets_tool(ctx)

        async def _get_mounts(ctx: ServerContext) -> str:
            return await self.get_mounts_tool(ctx)

        async def _feed_pet(
            ctx: ServerContext,
            pet: Annotated[
                str,
                Field(
                    description=t(
                        "The key identifier of the pet to feed (e.g., 'Wolf-Base', 'Dragon-Red')",
                        "要喂养的宠物键（例如 'Wolf-Base'、'Dragon-Red'）",
                    )
                ),
            ],
            food: Annotated[
                str,
                Field(
                    description=t(
                        "The key identifier of the food item to use (e.g., 'Meat', 'Milk', "
                        "'Potatoe')",
                        "要使用的食物键（例如 'Meat'、'Milk'、'Potatoe'）",
                    )
                ),
            ],
        ) -> str:
            return await self.feed_pet_tool(ctx, pet, food)

        async def _hatch_pet(
            ctx: ServerContext,
            egg: Annotated[
                str,
                Field(
                    description=t(
                        "The key identifier of the egg to hatch (e.g., 'Wolf', 'Dragon', 'Cactus')",
                        "要孵化的宠物蛋键（例如 'Wolf'、'Dragon'、'Cactus'）",
                    )
                ),
            ],
            hatchingPotion: Annotated[  # noqa: N803
                str,
                Field(
                    description=t(
                        "The key identifier of the hatching potion to use (e.g., 'Base', "
                        "'Red', 'Blue')",
                        "要使用的孵化药水键（例如 'Base'、'Red'、'Blue'）",
                    )
                ),
            ],
        ) -> str:
            return await self.hatch_pet_tool(ctx, egg, hatchingPotion)

        async def _equip_item(
            ctx: ServerContext,
            type: Annotated[  # noqa: A002  # Required by MCP tool API
                Literal["mount", "pet", "costume", "equipped"],
                Field(
                    description=t(
                        "Category of equipment: 'mount' for riding, 'pet' for companion, "
                        "'costume' for cosmetic items, 'equipped' for stat-affecting gear",
                        "装备类别：'mount' 坐骑，'pet' 宠物，'costume' 服装外观，"
                        "'equipped' 影响属性的战斗装备",
                    )
                ),
            ],
            key: Annotated[
                str,
                Field(
                    description=t(
                        "The unique identifier of the item to equip or 'null' to unequip "
                        "the current item in that slot",
                        "要装备的物品 ID，传 'null' 可卸下该栏位当前物品",
                    )
                ),
            ],
        ) -> str:
            return await self.equip_item_tool(ctx, type, key)

        self.registry.add(ToolName.GET_PETS, _get_pets)
        self.registry.add(ToolName.FEED_PET, _feed_pet)
        self.registry.add(ToolName.HATCH_PET, _hatch_pet)
        self.registry.add(ToolName.GET_MOUNTS, _get_mounts)
        self.registry.add(ToolName.EQUIP_ITEM, _equip_item)
