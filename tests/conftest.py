"""Pytest fixtures and configuration for the test suite."""

from collections.abc import Sequence
from typing import cast

import pytest
from fastmcp import FastMCP
from pytest_mock import AsyncMockType, MockerFixture

from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.config import ServerConfig
from habitica_mcp.i18n import Translator
from habitica_mcp.registry import ToolRegistry
from tests.test_api_client_common import FakeHabitica, make_config


@pytest.fixture
def config() -> ServerConfig:
    """Provide a ServerConfig instance with test credentials and default enablement."""
    return make_config()


@pytest.fixture
def translator() -> Translator:
    """Provide an English translator."""
    return Translator("en")


@pytest.fixture
def mcp() -> FastMCP:
    """Provide a FastMCP instance with a test server name."""
    return FastMCP("test-server")


@pytest.fixture
def fake_habitica() -> FakeHabitica:
    """Provide an empty fake Habitica route table."""
    return FakeHabitica()


@pytest.fixture
def client(config: ServerConfig, fake_habitica: FakeHabitica) -> HabiticaClient:
    """Provide a HabiticaClient whose requests are answered by ``fake_habitica``."""
    return HabiticaClient(config, transport=fake_habitica.transport)


@pytest.fixture
def registry(mcp: FastMCP, config: ServerConfig, translator: Translator) -> ToolRegistry:
    """Provide a ToolRegistry bound to the test FastMCP instance."""
    return ToolRegistry(mcp, config, translator)


@pytest.fixture
def async_ctx(mocker: MockerFixture) -> AsyncMockType:
    """Provide an async context mock for testing."""
    mock_ctx = mocker.AsyncMock()
    mock_ctx.session_id = "test-session-123"
    return mock_ctx


def extract_tool_response_texts(result: object) -> list[str]:
    """Extract every text block from a FastMCP tool call result."""
    contents = getattr(result, "content", None) or []
    texts = []
    for content_item in cast(Sequence[object], contents):
        text = getattr(content_item, "text", None)
        if text is not None:
            texts.append(str(text))
    return texts
