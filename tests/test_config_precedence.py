"""Tests for configuration loading and precedence (environment > file > defaults)."""

from pathlib import Path

import pytest

from habitica_mcp.catalog import ToolName
from habitica_mcp.config import ErrorDetail
from habitica_mcp.main import load_configuration
from tests.test_api_client_common import TEST_TOKEN, TEST_USER_ID

CREDENTIALS = {"HABITICA_USER_ID": TEST_USER_ID, "HABITICA_API_TOKEN": TEST_TOKEN}


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's ./config.toml out of the tests."""
    monkeypatch.chdir(tmp_path)


def _write_config(tmp_path: Path, content: str) -> str:
    path = tmp_path / "habitica.toml"
    path.write_text(content)
    return str(path)


class TestLoadConfiguration:
    """Precedence and validation of load_configuration."""

    def test_environment_only(self) -> None:
        config = load_configuration(dict(CREDENTIALS))

        assert config.habitica_user_id == TEST_USER_ID
        assert config.habitica_api_token == TEST_TOKEN
        assert config.language == "en"
        assert config.debug is False
        assert config.config_file == "./config.toml"

    def test_file_values_applied(self, tmp_path: Path) -> None:
        config_file = _write_config(
            tmp_path,
            'error_detail = "simple"\nlog_level = "WARNING"\n\n[tools]\nget_stats = true\n',
        )

        config = load_configuration({**CREDENTIALS, "HABITICA_MCP_CONFIG": config_file})

        assert config.error_detail is ErrorDetail.SIMPLE
        assert config.log_level == "WARNING"
        assert config.tools[ToolName.GET_STATS] is True
        assert config.tools[ToolName.GET_TASKS] is True
        assert config.config_file == config_file

    def test_default_file_in_working_directory(self, tmp_path: Path) -> None:
        (tmp_path / "config.toml").write_text('language = "zh-CN"\n')

        config = load_configuration(dict(CREDENTIALS))

        assert config.language == "zh-cn"

    def test_environment_overrides_file(self, tmp_path: Path) -> None:
        config_file = _write_config(
            tmp_path,
            'habitica_user_id = "file-user"\nhabitica_api_token = "file-token"\n'
            'language = "zh"\ndebug = true\n',
        )

        config = load_configuration(
            {
                **CREDENTIALS,
                "HABITICA_MCP_CONFIG": config_file,
                "MCP_LANG": "en-US",
                "DEBUG": "0",
            }
        )

        assert config.habitica_user_id == TEST_USER_ID
        assert config.habitica_api_token == TEST_TOKEN
        assert config.language == "en-us"
        assert config.debug is False

    def test_credentials_may_come_from_file(self, tmp_path: Path) -> None:
        config_file = _write_config(
            tmp_path, 'habitica_user_id = "file-user"\nhabitica_api_token = "file-token"\n'
        )

        config = load_configuration({"HABITICA_MCP_CONFIG": config_file})

        assert config.habitica_user_id == "file-user"

    def test_mcp_lang_wins_over_lang(self) -> None:
        config = load_configuration({**CREDENTIALS, "MCP_LANG": "zh-CN", "LANG": "en_US.UTF-8"})
        assert config.language == "zh-cn"

    def test_lang_used_when_mcp_lang_absent(self) -> None:
        config = load_configuration({**CREDENTIALS, "LANG": "zh_CN.UTF-8"})
        assert config.translator().is_chinese is True

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("1", True), ("true", True), ("yes", True), ("0", False), ("false", False), ("off", False)],
    )
    def test_debug_flag(self, value: str, *, expected: bool) -> None:
        config = load_configuration({**CREDENTIALS, "DEBUG": value})
        assert config.debug is expected


class TestLoadConfigurationFailures:
    """Every configuration failure exits with status 1."""

    def test_missing_user_id_exits(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            load_configuration({"HABITICA_API_TOKEN": TEST_TOKEN})
        assert exc_info.value.code == 1

    def test_missing_token_exits(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            load_configuration({"HABITICA_USER_ID": TEST_USER_ID})
        assert exc_info.value.code == 1

    def test_missing_credentials_message_is_translated(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with pytest.raises(SystemExit):
            load_configuration({"MCP_LANG": "zh-CN"})
        assert "请设置 HABITICA_USER_ID" in caplog.text

    def test_missing_credentials_message_in_english(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with pytest.raises(SystemExit):
            load_configuration({})
        assert "Please set HABITICA_USER_ID and HABITICA_API_TOKEN" in caplog.text

    def test_explicit_missing_file_exits(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            load_configuration({**CREDENTIALS, "HABITICA_MCP_CONFIG": str(tmp_path / "nope.toml")})
        assert exc_info.value.code == 1

    def test_unknown_key_exits(self, tmp_path: Path) -> None:
        config_file = _write_config(tmp_path, "port = 8080\n")

        with pytest.raises(SystemExit) as exc_info:
            load_configuration({**CREDENTIALS, "HABITICA_MCP_CONFIG": config_file})
        assert exc_info.value.code == 1

    def test_invalid_toml_exits(self, tmp_path: Path) -> None:
        config_file = _write_config(tmp_path, "this is = = not toml")

        with pytest.raises(SystemExit) as exc_info:
            load_configuration({**CREDENTIALS, "HABITICA_MCP_CONFIG": config_file})
        assert exc_info.value.code == 1

    def test_validation_failure_exits(self, tmp_path: Path) -> None:
        config_file = _write_config(tmp_path, 'habitica_base_url = "http://example.com/"\n')

        with pytest.raises(SystemExit) as exc_info:
            load_configuration({**CREDENTIALS, "HABITICA_MCP_CONFIG": config_file})
        assert exc_info.value.code == 1

    def test_unknown_tool_in_file_exits(self, tmp_path: Path) -> None:
        config_file = _write_config(tmp_path, "[tools]\nlaunch_rocket = true\n")

        with pytest.raises(SystemExit) as exc_info:
            load_configuration({**CREDENTIALS, "HABITICA_MCP_CONFIG": config_file})
        assert exc_info.value.code == 1
