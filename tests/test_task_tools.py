"""Tests for the TaskTools handlers."""

import json

import pytest
from fastmcp import FastMCP
from pydantic import ValidationError
from pytest_mock import AsyncMockType

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.api.exceptions import HabiticaNotFoundError
from habitica_mcp.api.models import ChecklistItemInput
from habitica_mcp.catalog import ToolName
from habitica_mcp.config import ServerConfig
from habitica_mcp.i18n import Translator
from habitica_mcp.registry import ToolRegistry
from habitica_mcp.tools.tasks import TaskTools
from tests.factories import task_payload
from tests.test_api_client_common import FakeHabitica, envelope, error_body


@pytest.fixture
def task_tools(registry: ToolRegistry, client: HabiticaClient) -> TaskTools:
    return TaskTools(registry, client)


def test_task_tools_register_handlers(registry: ToolRegistry, client: HabiticaClient) -> None:
    TaskTools(registry, client)

    assert set(registry._handlers) == {  # pyright: ignore[reportPrivateUsage]
        ToolName.GET_TASKS,
        ToolName.CREATE_TASK,
        ToolName.SCORE_TASK,
        ToolName.UPDATE_TASK,
        ToolName.DELETE_TASK,
    }


class TestGetTasksTool:
    """get_tasks returns the full JSON payload."""

    @pytest.mark.asyncio
    async def test_returns_pretty_json(
        self, task_tools: TaskTools, fake_habitica: FakeHabitica, async_ctx: AsyncMockType
    ) -> None:
        body = envelope([task_payload(text="Écrire")])
        fake_habitica.add("GET", "tasks/user", body)

        result = await task_tools.get_tasks_tool(async_ctx)

        assert json.loads(result) == body
        assert "Écrire" in result
        assert result.startswith("{\n  ")

    @pytest.mark.asyncio
    async def test_type_filter_changes_query(
        self, task_tools: TaskTools, fake_habitica: FakeHabitica, async_ctx: AsyncMockType
    ) -> None:
        fake_habitica.add("GET", "tasks/user", envelope([]))

        await task_tools.get_tasks_tool(async_ctx)
        await task_tools.get_tasks_tool(async_ctx, "dailys")

        first, second = fake_habitica.requests
        assert str(first.url) != str(second.url)
        assert second.url.params["type"] == "dailys"


class TestCreateTaskTool:
    """create_task validates and reports the new task."""

    @pytest.mark.asyncio
    async def test_success(
        self, task_tools: TaskTools, fake_habitica: FakeHabitica, async_ctx: AsyncMockType
    ) -> None:
        fake_habitica.add("POST", "tasks/user", envelope(task_payload("new-7", "Plan trip")), 201)

        result = await task_tools.create_task_tool(
            async_ctx,
            "todo",
            "Plan trip",
            notes="Summer",
            checklist=[ChecklistItemInput(text="Book flights")],
        )

        assert result == "Successfully created task: Plan trip (ID: new-7)"
        assert fake_habitica.last_json() == {
            "type": "todo",
            "text": "Plan trip",
            "notes": "Summer",
            "checklist": [{"text": "Book flights", "completed": False}],
        }

    @pytest.mark.asyncio
    async def test_invalid_difficulty_never_reaches_habitica(
        self, task_tools: TaskTools, fake_habitica: FakeHabitica, async_ctx: AsyncMockType
    ) -> None:
        with pytest.raises(ValidationError):
            await task_tools.create_task_tool(async_ctx, "todo", "Plan trip", difficulty=5)

        assert fake_habitica.requests == []


class TestScoreTaskTool:
    """score_task summarizes the stat changes."""

    @pytest.mark.asyncio
    async def test_full_summary(
        self, task_tools: TaskTools, fake_habitica: FakeHabitica, async_ctx: AsyncMockType
    ) -> None:
        fake_habitica.add(
            "POST", "tasks/t1/score/up", envelope({"delta": 1, "exp": 10, "gp": 2.456, "lvl": 4})
        )

        result = await task_tools.score_task_tool(async_ctx, "t1")

        assert result == "Task completed! Gained 10 experience Gained 2.46 gold Level up to 4!"

    @pytest.mark.asyncio
    async def test_nothing_gained(
        self, task_tools: TaskTools, fake_habitica: FakeHabitica, async_ctx: AsyncMockType
    ) -> None:
        fake_habitica.add("POST", "tasks/t1/score/down", envelope({"delta": -1}))

        result = await task_tools.score_task_tool(async_ctx, "t1", "down")

        assert result == "Task completed!"

    @pytest.mark.asyncio
    async def test_chinese_summary(
        self,
        config: ServerConfig,
        client: HabiticaClient,
        fake_habitica: FakeHabitica,
        async_ctx: AsyncMockType,
        mcp: FastMCP,
    ) -> None:
        registry = ToolRegistry(mcp, config, Translator("zh-CN"))
        tools = TaskTools(registry, client)
        fake_habitica.add("POST", "tasks/t1/score/up", envelope({"exp": 5, "gp": 1}))

        result = await tools.score_task_tool(async_ctx, "t1")

        assert result == "任务完成！获得 5 经验 获得 1 金币"

    @pytest.mark.asyncio
    async def test_not_found_propagates(
        self, task_tools: TaskTools, fake_habitica: FakeHabitica, async_ctx: AsyncMockType
    ) -> None:
        fake_habitica.add("POST", "tasks/nope/score/up", error_body("TaskNotFound"), 404)

        with pytest.raises(HabiticaNotFoundError):
            await task_tools.score_task_tool(async_ctx, "nope")


class TestUpdateAndDeleteTaskTools:
    """update_task and delete_task."""

    @pytest.mark.asyncio
    async def test_update(
        self, task_tools: TaskTools, fake_habitica: FakeHabitica, async_ctx: AsyncMockType
    ) -> None:
        fake_habitica.add("PUT", "tasks/t1", envelope(task_payload("t1", "New title")))

        result = await task_tools.update_task_tool(async_ctx, "t1", text="New title")

        assert result == "Successfully updated task: New title"
        assert fake_habitica.last_json() == {"text": "New title"}

    @pytest.mark.asyncio
    async def test_delete(
        self, task_tools: TaskTools, fake_habitica: FakeHabitica, async_ctx: AsyncMockType
    ) -> None:
        fake_habitica.add("DELETE", "tasks/t1", envelope({}))

        result = await task_tools.delete_task_tool(async_ctx, "t1")

        assert result == "Successfully deleted task (ID: t1)"
        async_ctx.info.assert_awaited()
