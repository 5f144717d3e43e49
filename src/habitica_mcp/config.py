"""Configuration module for Habitica MCP server.

This module provides the ServerConfig Pydantic model for managing server
configuration from environment variables, an optional TOML file, and defaults.
"""

from enum import StrEnum
from importlib.metadata import version
from typing import Any, Literal

from pydantic import BaseModel, Field, HttpUrl, field_validator

from habitica_mcp.catalog import DEFAULT_TOOL_ENABLEMENT, ToolName
from habitica_mcp.i18n import DEFAULT_LANGUAGE, Translator


class ErrorDetail(StrEnum):
    """How much of a remote failure is explained to the caller."""

    DETAILED = "detailed"
    SIMPLE = "simple"


class ServerConfig(BaseModel):
    """Server configuration model with validation and default values.

    Holds the Habitica credentials, the enablement map and the error detail
    level. Instances are built once at startup and never mutated.
    """

    habitica_user_id: str = Field(
        ...,
        min_length=1,
        description="Habitica user ID sent in the x-api-user header",
    )

    habitica_api_token: str = Field(
        ...,
        min_length=1,
        description="Habitica API token sent in the x-api-key header",
    )

    habitica_base_url: HttpUrl = Field(
        default=HttpUrl("https://habitica.com/api/v3/"),
        description="Base URL for Habitica API endpoints",
    )

    client_name: str = Field(
        default="habitica-mcp-server",
        min_length=1,
        description="Application name appended to the user ID in the x-client header",
    )

    language: str = Field(
        default=DEFAULT_LANGUAGE,
        description="Message language tag; tags starting with 'zh' select Chinese",
    )

    debug: bool = Field(
        default=False,
        description="Verbose diagnostic logging of failed remote calls",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level for the application",
    )

    error_detail: ErrorDetail = Field(
        default=ErrorDetail.DETAILED,
        description="'detailed' maps Habitica errors to actionable messages, "
        "'simple' reports a single generic Habitica API error",
    )

    tools: dict[ToolName, bool] = Field(
        default_factory=lambda: dict(DEFAULT_TOOL_ENABLEMENT),
        description="Enablement map of tool name to advertised/callable flag",
    )

    config_file: str | None = Field(
        default=None,
        description="Path to configuration file",
    )

    test_connectivity_on_startup: bool = Field(
        default=False,
        description="Probe the Habitica API with the configured credentials during startup",
    )

    http_user_agent: str = Field(
        default_factory=lambda: f"habitica-mcp/{version('habitica-mcp')}",
        description="HTTP client User-Agent header",
    )

    timeout_connect: float = Field(
        default=5.0,
        ge=1.0,
        le=30.0,
        description="HTTP connection timeout in seconds",
    )

    timeout_read: float = Field(
        default=30.0,
        ge=5.0,
        le=120.0,
        description="HTTP read timeout in seconds",
    )

    @field_validator("habitica_base_url")
    @classmethod
    def validate_https_url(cls, v: HttpUrl) -> HttpUrl:
        """Validate that the base URL uses HTTPS protocol.

        Raises:
            ValueError: If the URL does not use HTTPS protocol.
        """
        if v.scheme != "https":
            msg = "URL must use HTTPS"
            raise ValueError(msg)
        return v

    @field_validator("language")
    @classmethod
    def normalize_language(cls, v: str) -> str:
        """Lower-case the language tag, falling back to the default when blank."""
        return v.strip().lower() or DEFAULT_LANGUAGE

    @field_validator("tools")
    @classmethod
    def merge_tool_defaults(cls, v: dict[ToolName, bool]) -> dict[ToolName, bool]:
        """Overlay configured flags on the shipped enablement map."""
        merged = dict(DEFAULT_TOOL_ENABLEMENT)
        merged.update(v)
        return merged

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug switch."""
        return "DEBUG" if self.debug else self.log_level

    @property
    def enabled_tools(self) -> list[ToolName]:
        """Tool names mapped to ``True``, in catalog order."""
        return [name for name in ToolName if self.tools.get(name, False)]

    def translator(self) -> Translator:
        """Build the message translator for the configured language."""
        return Translator(self.language)

    def to_redacted_dict(self) -> dict[str, Any]:
        """Return a dictionary representation with sensitive data redacted.

        Returns:
            dict[str, Any]: Configuration dictionary with the API token redacted.
        """
        config_dict = self.model_dump(mode="json")
        config_dict["habitica_api_token"] = "***redacted***"  # noqa: S105 - redaction placeholder, not actual secret
        return config_dict
