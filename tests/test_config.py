"""Tests for the ServerConfig model."""

import pytest
from pydantic import HttpUrl, ValidationError

from habitica_mcp.catalog import DEFAULT_TOOL_ENABLEMENT, ToolName
from habitica_mcp.config import ErrorDetail, ServerConfig
from tests.test_api_client_common import SECRET_TOKEN, TEST_USER_ID, make_config


class TestServerConfigDefaults:
    """Default values of the configuration model."""

    def test_defaults(self) -> None:
        config = make_config()

        assert str(config.habitica_base_url) == "https://habitica.com/api/v3/"
        assert config.client_name == "habitica-mcp-server"
        assert config.language == "en"
        assert config.debug is False
        assert config.log_level == "INFO"
        assert config.error_detail is ErrorDetail.DETAILED
        assert config.test_connectivity_on_startup is False
        assert config.tools == DEFAULT_TOOL_ENABLEMENT

    def test_default_user_agent_names_the_project(self) -> None:
        config = make_config()
        assert config.http_user_agent.startswith("habitica-mcp/")

    def test_enabled_tools_follow_catalog_order(self) -> None:
        config = make_config()

        assert config.enabled_tools == [
            ToolName.GET_TASKS,
            ToolName.CREATE_TASK,
            ToolName.SCORE_TASK,
            ToolName.UPDATE_TASK,
            ToolName.DELETE_TASK,
            ToolName.GET_TAGS,
            ToolName.CREATE_TAG,
            ToolName.ADD_CHECKLIST_ITEM,
            ToolName.UPDATE_CHECKLIST_ITEM,
            ToolName.DELETE_CHECKLIST_ITEM,
            ToolName.GET_TASK_CHECKLIST,
            ToolName.SCORE_CHECKLIST_ITEM,
        ]


class TestServerConfigValidation:
    """Validation rules of the configuration model."""

    def test_missing_credentials_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServerConfig()  # type: ignore[call-arg]

    def test_empty_user_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServerConfig(habitica_user_id="", habitica_api_token=SECRET_TOKEN)

    def test_http_base_url_rejected(self) -> None:
        with pytest.raises(ValidationError, match="URL must use HTTPS"):
            make_config(habitica_base_url=HttpUrl("http://habitica.com/api/v3/"))

    def test_invalid_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_config(log_level="VERBOSE")

    def test_language_is_normalized(self) -> None:
        assert make_config(language=" zh-CN ").language == "zh-cn"
        assert make_config(language="").language == "en"

    def test_error_detail_accepts_strings(self) -> None:
        assert make_config(error_detail="simple").error_detail is ErrorDetail.SIMPLE

    def test_tool_overrides_merge_over_defaults(self) -> None:
        config = make_config(tools={"get_user_profile": True, "delete_task": False})

        assert config.tools[ToolName.GET_USER_PROFILE] is True
        assert config.tools[ToolName.DELETE_TASK] is False
        assert config.tools[ToolName.GET_TASKS] is True
        assert config.enabled_tools[0] is ToolName.GET_USER_PROFILE
        assert ToolName.DELETE_TASK not in config.enabled_tools

    def test_unknown_tool_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_config(tools={"launch_rocket": True})

    def test_timeouts_bounded(self) -> None:
        with pytest.raises(ValidationError):
            make_config(timeout_connect=0.1)
        with pytest.raises(ValidationError):
            make_config(timeout_read=500)


class TestServerConfigDerived:
    """Derived values and redaction."""

    def test_debug_raises_effective_log_level(self) -> None:
        assert make_config(log_level="WARNING").effective_log_level == "WARNING"
        assert make_config(log_level="WARNING", debug=True).effective_log_level == "DEBUG"

    def test_translator_uses_language(self) -> None:
        assert make_config(language="zh_TW.UTF-8").translator().is_chinese is True
        assert make_config().translator().is_chinese is False

    def test_redacted_dict_hides_token(self) -> None:
        config = make_config(habitica_api_token=SECRET_TOKEN)
        redacted = config.to_redacted_dict()

        assert redacted["habitica_api_token"] == "***redacted***"
        assert redacted["habitica_user_id"] == TEST_USER_ID
        assert SECRET_TOKEN not in str(redacted)
