"""Tool registry: the dispatch boundary between FastMCP and the handlers.

Tool groups hand one handler per catalog entry to the registry. ``install``
checks that the catalog is fully covered and registers the enabled subset
with FastMCP, each handler wrapped in the error boundary.
"""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import INTERNAL_ERROR

from habitica_mcp.catalog import TOOL_CATALOG, ToolName, enabled_specs
from habitica_mcp.config import ServerConfig
from habitica_mcp.errors import classify_error
from habitica_mcp.i18n import Translator

logger = logging.getLogger(__name__)

ToolHandler = Callable[..., Awaitable[Any]]


class MissingToolHandlerError(RuntimeError):
    """Raised at startup when catalog entries have no registered handler."""

    def __init__(self, missing: list[ToolName]) -> None:
        self.missing = missing
        super().__init__(f"No handler registered for: {', '.join(missing)}")


class DuplicateToolHandlerError(RuntimeError):
    """Raised when two handlers are registered for the same tool."""

    def __init__(self, name: ToolName) -> None:
        self.name = name
        super().__init__(f"Handler already registered for {name}")


class ToolRegistry:
    """Collects tool handlers and installs the enabled ones on a FastMCP app."""

    def __init__(self, mcp_instance: FastMCP, config: ServerConfig, translator: Translator) -> None:
        """Initialize the registry.

        Args:
            mcp_instance: FastMCP server instance for registering tools
            config: Server configuration holding the enablement map
            translator: Message language selector
        """
        self.mcp = mcp_instance
        self.config = config
        self.translator = translator
        self._handlers: dict[ToolName, ToolHandler] = {}
        self._installed: list[ToolName] = []

    @property
    def installed(self) -> list[ToolName]:
        """Names of the tools registered with FastMCP, in registration order."""
        return list(self._installed)

    def add(self, name: ToolName, handler: ToolHandler) -> None:
        """Bind ``handler`` to ``name``.

        Raises:
            DuplicateToolHandlerError: If ``name`` already has a handler
        """
        if name in self._handlers:
            raise DuplicateToolHandlerError(name)
        self._handlers[name] = handler

    def verify(self) -> None:
        """Check that every catalog entry has a handler.

        Raises:
            MissingToolHandlerError: If any catalog entry is unhandled
        """
        missing = [spec.name for spec in TOOL_CATALOG if spec.name not in self._handlers]
        if missing:
            raise MissingToolHandlerError(missing)

    def install(self) -> list[ToolName]:
        """Register the enabled tools with FastMCP in catalog order.

        Returns:
            list[ToolName]: Names of the installed tools
        """
        self.verify()
        for spec in enabled_specs(self.config.tools):
            guarded = self._guard(spec.name, self._handlers[spec.name])
            self.mcp.tool(name=spec.name.value, description=spec.description(self.translator))(
                guarded
            )
            self._installed.append(spec.name)

        logger.info(
            "Registered %d of %d Habitica tools: %s",
            len(self._installed),
            len(TOOL_CATALOG),
            ", ".join(self._installed),
        )
        return self.installed

    def _guard(self, name: ToolName, handler: ToolHandler) -> ToolHandler:
        """Wrap ``handler`` so that every failure leaves as a classified ToolError."""

        @functools.wraps(handler)
        async def guarded(*args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
            try:
                return await handler(*args, **kwargs)
            except ToolError:
                raise
            except Exception as error:
                tool_error = classify_error(
                    error, name.value, kwargs, self.translator, self.config.error_detail
                )
                code = getattr(tool_error, "code", INTERNAL_ERROR)
                if self.config.debug:
                    logger.exception("Tool %s failed (code %d)", name, code)
                else:
                    logger.warning("Tool %s failed (code %d): %s", name, code, tool_error)
                raise tool_error from error

        return guarded
