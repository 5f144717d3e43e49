"""Task management tools for Habitica MCP integration.

This module provides the TaskTools class which implements the MCP tools for
listing, creating, scoring, updating and deleting Habitica tasks.
"""

import logging
from typing import Annotated, Literal

from fastmcp.server.context import Context as ServerContext
from pydantic import Field

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.api.models import ChecklistItemInput, TaskCreate, TaskUpdate
from habitica_mcp.catalog import ToolName
from habitica_mcp.registry import ToolRegistry
from habitica_mcp.tools.common import format_number, to_json_text

# Configure logger to write to stderr
logger = logging.getLogger(__name__)


class TaskTools:
    """Task management tools providing MCP tools for Habitica integration.

    Each tool issues exactly one Habitica request and returns a text summary;
    listing returns the full JSON payload.
    """

    def __init__(self, registry: ToolRegistry, habitica_client: HabiticaClient) -> None:
        """Initialize TaskTools with the tool registry and Habitica client.

        Args:
            registry: Tool registry collecting handlers for installation
            habitica_client: Habitica API client for data operations
        """
        self.registry = registry
        self.habitica_client = habitica_client
        self.t = registry.translator.t
        self._register_tools()

    async def get_tasks_tool(self, ctx: ServerContext, task_type: str | None = None) -> str:
        """Return the user's tasks as pretty-printed JSON.

        Args:
            ctx: Server context for logging
            task_type: Optional collection filter (habits, dailys, todos, rewards)

        Returns:
            str: The full response payload
        """
        await ctx.info(f"Fetching tasks (type={task_type or 'all'})")
        envelope = await self.habitica_client.get_tasks(task_type)
        return to_json_text(envelope)

    async def create_task_tool(  # noqa: PLR0913
        self,
        ctx: ServerContext,
        task_type: str,
        text: str,
        notes: str | None = None,
        difficulty: float | None = None,
        priority: float | None = None,
        checklist: list[ChecklistItemInput] | None = None,
    ) -> str:
        """Create a task and report its text and ID.

        Raises:
            pydantic.ValidationError: If the payload violates Habitica's constraints
        """
        payload = TaskCreate(
            type=task_type,
            text=text,
            notes=notes,
            difficulty=difficulty,
            priority=priority,
            checklist=checklist,
        )
        await ctx.info(f"Creating {task_type} task")
        task = await self.habitica_client.create_task(payload)
        logger.info("Successfully created task %s", task.id)
        return self.t(
            f"Successfully created task: {task.text} (ID: {task.id})",
            f"成功创建任务：{task.text}（ID：{task.id}）",
        )

    async def score_task_tool(self, ctx: ServerContext, task_id: str, direction: str = "up") -> str:
        """Score a task and summarize the experience, gold and level changes."""
        await ctx.info(f"Scoring task {task_id} ({direction})")
        result = await self.habitica_client.score_task(task_id, direction)

        t = self.t
        message = t("Task completed! ", "任务完成！")
        if result.exp:
            message += t(
                f"Gained {format_number(result.exp)} experience ",
                f"获得 {format_number(result.exp)} 经验 ",
            )
        if result.gp:
            message += t(
                f"Gained {format_number(result.gp)} gold ",
                f"获得 {format_number(result.gp)} 金币 ",
            )
        if result.lvl:
            message += t(f"Level up to {result.lvl}! ", f"升级到 {result.lvl} 级！")
        return message.strip()

    async def update_task_tool(
        self,
        ctx: ServerContext,
        task_id: str,
        text: str | None = None,
        notes: str | None = None,
        completed: bool | None = None,  # noqa: FBT001
    ) -> str:
        """Update the given fields of a task and report its title."""
        payload = TaskUpdate(text=text, notes=notes, completed=completed)
        await ctx.info(f"Updating task {task_id}")
        task = await self.habitica_client.update_task(task_id, payload)
        return self.t(
            f"Successfully updated task: {task.text}",
            f"成功更新任务：{task.text}",
        )

    async def delete_task_tool(self, ctx: ServerContext, task_id: str) -> str:
        """Delete a task permanently."""
        await ctx.info(f"Deleting task {task_id}")
        await self.habitica_client.delete_task(task_id)
        logger.info("Successfully deleted task %s", task_id)
        return self.t(
            f"Successfully deleted task (ID: {task_id})",
            f"成功删除任务（ID：{task_id}）",
        )

    def _register_tools(self) -> None:
        """Hand every task tool to the registry."""
        t = self.t
        task_id_help = t(
            "Unique identifier of the task (obtained from get_tasks)",
            "任务的唯一 ID（可通过 get_tasks 获取）",
        )

        async def _get_tasks(
            ctx: ServerContext,
            type: Annotated[  # noqa: A002  # Required by MCP tool API
                Literal["habits", "dailys", "todos", "rewards"] | None,
                Field(
                    description=t(
                        "Filter tasks by type: 'habits' for repeated behaviors, 'dailys' for "
                        "daily recurring tasks, 'todos' for one-time tasks, 'rewards' for "
                        "custom rewards",
                        "按类型筛选任务：'habits' 为重复行为，'dailys' 为每日任务，"
                        "'todos' 为一次性待办，'rewards' 为自定义奖励",
                    )
                ),
            ] = None,
        ) -> str:
            return await self.get_tasks_tool(ctx, type)

        async def _create_task(  # noqa: PLR0913
            ctx: ServerContext,
            type: Annotated[  # noqa: A002  # Required by MCP tool API
                Literal["habit", "daily", "todo", "reward"],
                Field(
                    description=t(
                        "Task type: 'habit' for behaviors to track, 'daily' for recurring "
                        "tasks, 'todo' for one-time tasks, 'reward' for custom rewards to "
                        "purchase",
                        "任务类型：'habit' 习惯，'daily' 每日任务，'todo' 一次性待办，"
                        "'reward' 可购买的自定义奖励",
                    )
                ),
            ],
            text: Annotated[
                str,
                Field(
                    description=t(
                        "The main title/name of the task that will be displayed",
                        "任务显示的标题/名称",
                    )
                ),
            ],
            notes: Annotated[
                str | None,
                Field(
                    description=t(
                        "Optional detailed description or notes about the task",
                        "可选的任务详细描述或备注",
                    )
                ),
            ] = None,
            difficulty: Annotated[
                float | None,
                Field(
                    description=t(
                        "Task difficulty affecting rewards: 0.1=trivial, 1=easy (default), "
                        "1.5=medium, 2=hard (more rewards)",
                        "任务难度，影响奖励：0.1=极简，1=简单（默认），1.5=中等，2=困难（奖励更多）",
                    )
                ),
            ] = None,
            priority: Annotated[
                float | None,
                Field(
                    description=t(
                        "Task priority affecting damage when missed: 0.1=low, 1=medium "
                        "(default), 1.5=high, 2=critical (more damage if not completed)",
                        "任务优先级，影响未完成时的伤害：0.1=低，1=中（默认），1.5=高，"
                        "2=紧急（未完成伤害更大）",
                    )
                ),
            ] = None,
            checklist: Annotated[
                list[ChecklistItemInput] | None,
                Field(
                    description=t(
                        "Optional array of sub-tasks/checklist items to add to this task",
                        "可选的子任务/清单项数组",
                    )
                ),
            ] = None,
        ) -> str:
            return await self.create_task_tool(
                ctx, type, text, notes, difficulty, priority, checklist
            )

        async def _score_task(
            ctx: ServerContext,
            taskId: Annotated[str, Field(description=task_id_help)],  # noqa: N803
            direction: Annotated[
                Literal["up", "down"],
                Field(
                    description=t(
                        "Scoring direction for habits: 'up' for positive behavior (rewards), "
                        "'down' for negative behavior (penalties). Not needed for "
                        "todos/dailies",
                        "习惯的计分方向：'up' 为正向行为（奖励），'down' 为负向行为（惩罚）。"
                        "待办和每日任务无需指定",
                    )
                ),
            ] = "up",
        ) -> str:
            return await self.score_task_tool(ctx, taskId, direction)

        async def _update_task(
            ctx: ServerContext,
            taskId: Annotated[str, Field(description=task_id_help)],  # noqa: N803
            text: Annotated[
                str | None,
                Field(description=t("New title/name for the task", "任务的新标题/名称")),
            ] = None,
            notes: Annotated[
                str | None,
                Field(description=t("New description or notes for the task", "任务的新描述或备注")),
            ] = None,
            completed: Annotated[  # noqa: FBT001
                bool | None,
                Field(
                    description=t(
                        "Set completion status for todos (true=completed, false=incomplete)",
                        "设置待办的完成状态（true=已完成，false=未完成）",
                    )
                ),
            ] = None,
        ) -> str:
            return await self.update_task_tool(ctx, taskId, text, notes, completed)

        async def _delete_task(
            ctx: ServerContext,
            taskId: Annotated[str, Field(description=task_id_help)],  # noqa: N803
        ) -> str:
            return await self.delete_task_tool(ctx, taskId)

        self.registry.add(ToolName.GET_TASKS, _get_tasks)
        self.registry.add(ToolName.CREATE_TASK, _create_task)
        self.registry.add(ToolName.SCORE_TASK, _score_task)
        self.registry.add(ToolName.UPDATE_TASK, _update_task)
        self.registry.add(ToolName.DELETE_TASK, _delete_task)
