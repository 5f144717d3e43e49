"""End-to-end tests: MCP client -> CoreServer -> fake Habitica over httpx."""

import logging

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError
from pytest_mock import MockerFixture

from habitica_mcp.catalog import ToolName
from habitica_mcp.main import CoreServer
from tests.conftest import extract_tool_response_texts
from tests.factories import checklist_item, task_payload
from tests.test_api_client_common import FakeHabitica, envelope, error_body, make_config


@pytest.fixture(autouse=True)
def _no_signal_handlers(mocker: MockerFixture) -> None:
    mocker.patch("habitica_mcp.main.signal.signal")


def _server(fake: FakeHabitica, **overrides: object) -> CoreServer:
    return CoreServer(make_config(**overrides), transport=fake.transport)


@pytest.mark.asyncio
async def test_listed_tools_follow_enablement(fake_habitica: FakeHabitica) -> None:
    server = _server(fake_habitica)

    async with Client(server.app) as client:
        tools = await client.list_tools()

    assert [tool.name for tool in tools] == [name.value for name in server.config.enabled_tools]
    assert "get_user_profile" not in {tool.name for tool in tools}


@pytest.mark.asyncio
async def test_disabled_tool_is_rejected_without_remote_call(
    fake_habitica: FakeHabitica,
) -> None:
    server = _server(fake_habitica)

    async with Client(server.app) as client:
        with pytest.raises(ToolError, match="Unknown tool"):
            await client.call_tool("buy_reward", {"key": "potion"})

    assert fake_habitica.requests == []


@pytest.mark.asyncio
async def test_score_unknown_task_reports_actionable_error(fake_habitica: FakeHabitica) -> None:
    fake_habitica.add(
        "POST", "tasks/missing-1/score/up", error_body("TaskNotFound", "Task not found."), 404
    )
    server = _server(fake_habitica)

    async with Client(server.app) as client:
        with pytest.raises(ToolError) as exc_info:
            await client.call_tool("score_task", {"taskId": "missing-1"})

    message = str(exc_info.value)
    assert "Task not found: missing-1" in message
    assert "get_tasks" in message


@pytest.mark.asyncio
async def test_buy_reward_without_gold(fake_habitica: FakeHabitica) -> None:
    fake_habitica.add(
        "POST", "user/buy/potion", error_body("messageNotEnoughGold", "Not enough Gold."), 400
    )
    server = _server(fake_habitica, tools={ToolName.BUY_REWARD.value: True})

    async with Client(server.app) as client:
        with pytest.raises(ToolError, match="Not enough gold"):
            await client.call_tool("buy_reward", {"key": "potion"})


@pytest.mark.asyncio
async def test_simple_error_detail(fake_habitica: FakeHabitica) -> None:
    fake_habitica.add(
        "POST", "tasks/missing-1/score/up", error_body("TaskNotFound", "Task not found."), 404
    )
    server = _server(fake_habitica, error_detail="simple")

    async with Client(server.app) as client:
        with pytest.raises(ToolError, match="Habitica API error: Task not found."):
            await client.call_tool("score_task", {"taskId": "missing-1"})


@pytest.mark.asyncio
async def test_invalid_arguments_never_reach_habitica(fake_habitica: FakeHabitica) -> None:
    server = _server(fake_habitica)

    async with Client(server.app) as client:
        with pytest.raises(ToolError):
            await client.call_tool(
                "create_task", {"type": "todo", "text": "Plan", "priority": 7}
            )

    assert fake_habitica.requests == []


@pytest.mark.asyncio
async def test_checklist_returns_two_blocks(fake_habitica: FakeHabitica) -> None:
    task = task_payload("t1", "Trip", checklist=[checklist_item("i1", "Passport")])
    fake_habitica.add("GET", "tasks/t1", envelope(task))
    server = _server(fake_habitica)

    async with Client(server.app) as client:
        result = await client.call_tool("get_task_checklist", {"taskId": "t1"})

    assert extract_tool_response_texts(result) == [
        "Task: Trip\nChecklist items (1):",
        "○ Passport (ID: i1)",
    ]


@pytest.mark.asyncio
async def test_chinese_session(fake_habitica: FakeHabitica) -> None:
    fake_habitica.add("POST", "tags", envelope({"id": "tag-1", "name": "健康"}), 201)
    server = _server(fake_habitica, language="zh-CN")

    async with Client(server.app) as client:
        tools = {tool.name: tool for tool in await client.list_tools()}
        result = await client.call_tool("create_tag", {"name": "健康"})

    assert tools["create_tag"].description.startswith("创建")  # type: ignore[union-attr]
    assert extract_tool_response_texts(result) == ["成功创建标签：健康（ID：tag-1）"]


@pytest.mark.asyncio
async def test_dot_segment_id_never_reaches_habitica(fake_habitica: FakeHabitica) -> None:
    server = _server(fake_habitica)

    async with Client(server.app) as client:
        with pytest.raises(ToolError, match="Invalid ID for delete_task"):
            await client.call_tool("delete_task", {"taskId": "../user"})

    assert fake_habitica.requests == []


@pytest.mark.asyncio
async def test_checklist_item_absent_from_response(fake_habitica: FakeHabitica) -> None:
    fake_habitica.add("PUT", "tasks/t1/checklist/i9", envelope(task_payload("t1", "T")))
    server = _server(fake_habitica)

    async with Client(server.app) as client:
        with pytest.raises(ToolError, match="Failed to parse Habitica response"):
            await client.call_tool(
                "update_checklist_item", {"taskId": "t1", "itemId": "i9", "text": "x"}
            )


@pytest.mark.asyncio
async def test_failed_call_is_logged_once(
    fake_habitica: FakeHabitica, caplog: pytest.LogCaptureFixture
) -> None:
    fake_habitica.add(
        "POST", "tasks/missing-1/score/up", error_body("TaskNotFound", "Task not found."), 404
    )
    server = _server(fake_habitica)

    with caplog.at_level(logging.INFO, logger="habitica_mcp"):
        async with Client(server.app) as client:
            with pytest.raises(ToolError):
                await client.call_tool("score_task", {"taskId": "missing-1"})

    ours = [
        record
        for record in caplog.records
        if record.name.startswith("habitica_mcp") and record.levelno >= logging.WARNING
    ]
    assert len(ours) == 1
    assert ours[0].getMessage().startswith(
        "Tool score_task failed (code -32602): Task not found: missing-1"
    )
