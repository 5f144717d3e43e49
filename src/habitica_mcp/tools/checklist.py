"""Checklist tools for Habitica MCP integration."""

import logging
from typing import Annotated

from fastmcp.server.context import Context as ServerContext
from mcp.types import TextContent
from pydantic import Field

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.api.exceptions import HabiticaResponseError
from habitica_mcp.api.models import ChecklistItem, ChecklistItemUpdate, HabiticaTask
from habitica_mcp.catalog import ToolName
from habitica_mcp.registry import ToolRegistry
from habitica_mcp.tools.common import checklist_line

logger = logging.getLogger(__name__)


class ChecklistTools:
    """Checklist (sub-task) tools for Habitica tasks.

    Habitica answers checklist mutations with the whole parent task, so the
    handlers pick the affected item out of it before formatting.
    """

    def __init__(self, registry: ToolRegistry, habitica_client: HabiticaClient) -> None:
        self.registry = registry
        self.habitica_client = habitica_client
        self.t = registry.translator.t
        self._register_tools()

    @staticmethod
    def _affected_item(
        task: HabiticaTask, task_id: str, item_id: str | None = None, text: str | None = None
    ) -> ChecklistItem:
        """Pick the checklist item a mutation touched out of Habitica's response.

        Raises:
            HabiticaResponseError: If the response holds neither the item nor its parent
        """
        item = task.find_checklist_item(item_id=item_id, text=text)
        if item is not None:
            return item
        if item_id is not None and task.id == item_id:
            # Habitica returned the item itself rather than its parent task
            return ChecklistItem(id=task.id, text=task.text, completed=bool(task.completed))
        raise HabiticaResponseError.create_parse_error(
            f"tasks/{task_id}/checklist", reason="checklist_item_missing"
        )

    async def get_task_checklist_tool(self, ctx: ServerContext, task_id: str) -> list[TextContent]:
        """List the checklist of a task as a header block and an items block."""
        await ctx.info(f"Fetching checklist of task {task_id}")
        task = await self.habitica_client.get_task(task_id)
        checklist = task.checklist

        header = self.t(
            f"Task: {task.text}\nChecklist items ({len(checklist)}):",
            f"任务：{task.text}\n清单项（{len(checklist)}）：",
        )
        if checklist:
            body = "\n".join(checklist_line(item) for item in checklist)
        else:
            body = self.t("No checklist items found", "未找到清单项")

        return [
            TextContent(type="text", text=header),
            TextContent(type="text", text=body),
        ]

    async def add_checklist_item_tool(self, ctx: ServerContext, task_id: str, text: str) -> str:
        """Append a checklist item and report its text and assigned ID."""
        await ctx.info(f"Adding checklist item to task {task_id}")
        task = await self.habitica_client.add_checklist_item(task_id, text)
        item = self._affected_item(task, task_id, text=text)
        logger.info("Added checklist item %s to task %s", item.id, task_id)
        return self.t(
            f"Successfully added checklist item: {item.text} (ID: {item.id})",
            f"成功添加清单项：{item.text}（ID：{item.id}）",
        )

    async def update_checklist_item_tool(
        self,
        ctx: ServerContext,
        task_id: str,
        item_id: str,
        text: str | None = None,
        completed: bool | None = None,  # noqa: FBT001
    ) -> str:
        """Change a checklist item's text or completion status."""
        payload = ChecklistItemUpdate(text=text, completed=completed)
        await ctx.info(f"Updating checklist item {item_id} of task {task_id}")
        task = await self.habitica_client.update_checklist_item(task_id, item_id, payload)
        item = self._affected_item(task, task_id, item_id=item_id)
        return self.t(
            f"Successfully updated checklist item: {item.text}",
            f"成功更新清单项：{item.text}",
        )

    async def delete_checklist_item_tool(
        self, ctx: ServerContext, task_id: str, item_id: str
    ) -> str:
        """Remove a checklist item from a task."""
        await ctx.info(f"Deleting checklist item {item_id} of task {task_id}")
        await self.habitica_client.delete_checklist_item(task_id, item_id)
        return self.t(
            f"Successfully deleted checklist item (ID: {item_id})",
            f"成功删除清单项（ID：{item_id}）",
        )

    async def score_checklist_item_tool(
        self, ctx: ServerContext, task_id: str, item_id: str
    ) -> str:
        """Toggle a checklist item and report its new completion status."""
        await ctx.info(f"Scoring checklist item {item_id} of task {task_id}")
        task = await self.habitica_client.score_checklist_item(task_id, item_id)
        item = self._affected_item(task, task_id, item_id=item_id)
        completed = "true" if item.completed else "false"
        return self.t(
            f"Successfully scored checklist item: {item.text} (completed: {completed})",
            f"成功切换清单项：{item.text}（已完成：{completed}）",
        )

    def _register_tools(self) -> None:
        """Hand every checklist tool to the registry."""
        t = self.t
        parent_help = t(
            "Unique identifier of the parent task containing the checklist item",
            "包含该清单项的父任务 ID",
        )
        item_help = t(
            "Unique identifier of the checklist item (obtained from get_task_checklist)",
            "清单项的唯一 ID（可通过 get_task_checklist 获取）",
        )

        async def _get_task_checklist(
            ctx: ServerContext,
            taskId: Annotated[  # noqa: N803
                str,
                Field(
                    description=t(
                        "Unique identifier of the task whose checklist items to retrieve",
                        "要查看清单项的任务 ID",
                    )
                ),
            ],
        ) -> list[TextContent]:
            return await self.get_task_checklist_tool(ctx, taskId)

        async def _add_checklist_item(
            ctx: ServerContext,
            taskId: Annotated[  # noqa: N803
                str,
                Field(
                    description=t(
                        "Unique identifier of the parent task to add the checklist item to "
                        "(obtained from get_tasks)",
                        "要添加清单项的父任务 ID（可通过 get_tasks 获取）",
                    )
                ),
            ],
            text: Annotated[
                str,
                Field(
                    description=t(
                        "Description of the checklist item/sub-task to add",
                        "要添加的清单项/子任务内容",
                    )
                ),
            ],
        ) -> str:
            return await self.add_checklist_item_tool(ctx, taskId, text)

        async def _update_checklist_item(
            ctx: ServerContext,
            taskId: Annotated[str, Field(description=parent_help)],  # noqa: N803
            itemId: Annotated[str, Field(description=item_help)],  # noqa: N803
            text: Annotated[
                str | None,
                Field(
                    description=t(
                        "New text/description for the checklist item", "清单项的新内容"
                    )
                ),
            ] = None,
            completed: Annotated[  # noqa: FBT001
                bool | None,
                Field(
                    description=t(
                        "Set completion status: true to mark as completed, false to mark "
                        "as incomplete",
                        "设置完成状态：true 为已完成，false 为未完成",
                    )
                ),
            ] = None,
        ) -> str:
            return await self.update_checklist_item_tool(ctx, taskId, itemId, text, completed)

        async def _delete_checklist_item(
            ctx: ServerContext,
            taskId: Annotated[str, Field(description=parent_help)],  # noqa: N803
            itemId: Annotated[str, Field(description=item_help)],  # noqa: N803
        ) -> str:
            return await self.delete_checklist_item_tool(ctx, taskId, itemId)

        async def _score_checklist_item(
            ctx: ServerContext,
            taskId: Annotated[str, Field(description=parent_help)],  # noqa: N803
            itemId: Annotated[str, Field(description=item_help)],  # noqa: N803
        ) -> str:
            return await self.score_checklist_item_tool(ctx, taskId, itemId)

        self.registry.add(ToolName.ADD_CHECKLIST_ITEM, _add_checklist_item)
        self.registry.add(ToolName.UPDATE_CHECKLIST_ITEM, _update_checklist_item)
        self.registry.add(ToolName.DELETE_CHECKLIST_ITEM, _delete_checklist_item)
        self.registry.add(ToolName.GET_TASK_CHECKLIST, _get_task_checklist)
        self.registry.add(ToolName.SCORE_CHECKLIST_ITEM, _score_checklist_item)
