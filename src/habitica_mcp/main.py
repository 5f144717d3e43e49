"""Main application entry point for Habitica MCP server.

Holds CoreServer, which wires the Habitica client and tool groups into a FastMCP
app served over stdio, and the configuration loader feeding it.

Exit Codes:
    0: Normal successful termination
    1: Configuration-related failures (missing Habitica credentials, TOML parse
       errors, validation failures, missing required files, unknown configuration
       keys, or unhandled exceptions)

Configuration sources, lowest precedence first:
    - ServerConfig defaults
    - TOML file named by HABITICA_MCP_CONFIG (default ./config.toml)
    - Environment: HABITICA_USER_ID, HABITICA_API_TOKEN, MCP_LANG or LANG, DEBUG
"""

import asyncio
import logging
import os
import signal
import sys
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import httpx
from fastmcp import FastMCP

from habitica_mcp import __version__
from habitica_mcp.api.client import HabiticaClient
from habitica_mcp.config import ServerConfig
from habitica_mcp.i18n import DEFAULT_LANGUAGE, Translator
from habitica_mcp.registry import ToolRegistry
from habitica_mcp.tools.checklist import ChecklistTools
from habitica_mcp.tools.pets import PetTools
from habitica_mcp.tools.shops import ShopTools
from habitica_mcp.tools.tags import TagTools
from habitica_mcp.tools.tasks import TaskTools
from habitica_mcp.tools.user import UserTools

SERVER_NAME = "habitica-mcp-server"
DEFAULT_CONFIG_FILE = "./config.toml"

_FALSE_FLAGS = frozenset({"", "0", "false", "no", "off"})


class CoreServer:
    """Runs the Habitica MCP server.

    Owns the FastMCP app, the lazily created Habitica client and the tool
    registry. Logging goes to stderr; stdout carries the MCP protocol only.
    """

    def __init__(
        self,
        config: ServerConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the CoreServer instance.

        Args:
            config: Server configuration instance containing all settings.
            transport: Optional httpx transport handed to the Habitica client.
        """
        self.config = config
        self.translator = config.translator()
        self._transport = transport
        self._setup_logging()
        self.app = self._create_fastmcp_instance()
        self._habitica_client: HabiticaClient | None = None
        self.registry = self._register_tools()
        self._shutdown_requested = False
        self._sigint_count = 0
        self._setup_signal_handlers()

    def _setup_logging(self) -> None:
        """Send every log record to stderr at the effective log level."""
        log_level = getattr(logging, self.config.effective_log_level)
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
            stream=sys.stderr,
        )
        logging.getLogger("habitica_mcp").setLevel(log_level)

    def _create_fastmcp_instance(self) -> FastMCP:
        """Create the FastMCP application instance.

        Returns:
            FastMCP: Configured FastMCP instance ready for stdio transport.
        """
        return FastMCP(
            name=SERVER_NAME,
            version=__version__,
        )

    def _register_tools(self) -> ToolRegistry:
        """Build every tool group and install the enabled tools."""
        registry = ToolRegistry(self.app, self.config, self.translator)
        habitica_client = self.get_habitica_client()

        TaskTools(registry, habitica_client)
        ChecklistTools(registry, habitica_client)
        TagTools(registry, habitica_client)
        UserTools(registry, habitica_client)
        PetTools(registry, habitica_client)
        ShopTools(registry, habitica_client)

        registry.install()
        return registry

    def _setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown.

        Handles SIGINT and SIGTERM to ensure clean shutdown without stdout corruption.
        """

        def signal_handler(signum: int, _: object | None) -> None:
            """Handle shutdown signals by forcing immediate exit."""
            logger = logging.getLogger(__name__)
            signal_name = "SIGINT" if signum == signal.SIGINT else f"Signal {signum}"

            if signum == signal.SIGINT:
                self._sigint_count += 1
                if self._sigint_count == 1:
                    logger.info("Received %s, initiating graceful shutdown", signal_name)
                    self._shutdown_requested = True
                    # FastMCP offers no clean stop for the stdio loop
                    os._exit(0)
                else:
                    logger.warning("Second SIGINT received; forcing immediate exit")
                    os._exit(1)
            else:
                logger.info("Received %s, initiating graceful shutdown", signal_name)
                self._shutdown_requested = True
                os._exit(0)

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def get_habitica_client(self) -> HabiticaClient:
        """Get or create the Habitica API client instance.

        Returns:
            HabiticaClient: The Habitica API client instance.
        """
        if self._habitica_client is None:
            self._habitica_client = HabiticaClient(self.config, transport=self._transport)
        return self._habitica_client

    async def _test_connectivity_if_enabled(self) -> None:
        """Test Habitica API connectivity if enabled in configuration."""
        if not self.config.test_connectivity_on_startup:
            return

        logger = logging.getLogger(__name__)
        logger.info("Testing Habitica API connectivity...")

        try:
            habitica_client = self.get_habitica_client()
            async with habitica_client:
                success = await habitica_client.test_connectivity()
                if success:
                    logger.info("Habitica API connectivity test successful")
                else:
                    logger.warning("Habitica API connectivity test failed")
        except Exception:
            logger.exception("Habitica API connectivity test failed with exception")

    def run(self) -> None:
        """Run the MCP server with stdio transport."""
        logger = logging.getLogger(__name__)
        logger.info("Starting Habitica MCP server with stdio transport")

        if self.config.test_connectivity_on_startup:
            try:
                asyncio.run(self._test_connectivity_if_enabled())
            except Exception:
                # The server still starts; tools report their own failures
                logger.exception("Connectivity test failed during startup")

        try:
            self.app.run(transport="stdio")
        except KeyboardInterrupt:
            logger.info("Server shutdown requested via KeyboardInterrupt")
            raise
        except Exception:
            logger.exception("Unhandled exception in server run method")
            raise


def _get_known_config_fields() -> set[str]:
    """Get the set of configuration keys accepted in the TOML file."""
    return set(ServerConfig.model_fields) - {"config_file"}


def _load_config_from_file(config_file: str) -> dict[str, Any]:
    """Read the optional TOML file, rejecting keys ServerConfig does not know.

    Args:
        config_file: Path to the configuration file.

    Returns:
        dict[str, Any]: Configuration data loaded from file, empty when absent.

    Raises:
        SystemExit: On file parsing errors or unknown configuration keys.
    """
    config_data: dict[str, Any] = {}
    logger = logging.getLogger(__name__)
    config_path = Path(config_file)

    if config_path.exists():
        try:
            with config_path.open("rb") as f:
                file_config = tomllib.load(f)

            unknown_keys = set(file_config.keys()) - _get_known_config_fields()
            if unknown_keys:
                logger.error(
                    "Unknown configuration keys in %s: %s",
                    config_path,
                    ", ".join(sorted(unknown_keys)),
                )
                sys.exit(1)

            config_data.update(file_config)
            logger.info("Loaded configuration from %s", config_path)
        except tomllib.TOMLDecodeError:
            logger.exception("Failed to parse TOML configuration file %s", config_path)
            sys.exit(1)
        except OSError:
            logger.exception("Failed to read configuration file %s", config_path)
            sys.exit(1)

    return config_data


def _is_truthy_flag(value: str) -> bool:
    return value.strip().lower() not in _FALSE_FLAGS


def _apply_env_overrides(config_data: dict[str, Any], environ: Mapping[str, str]) -> None:
    """Apply environment overrides to configuration data (environment wins)."""
    if environ.get("HABITICA_USER_ID"):
        config_data["habitica_user_id"] = environ["HABITICA_USER_ID"]
    if environ.get("HABITICA_API_TOKEN"):
        config_data["habitica_api_token"] = environ["HABITICA_API_TOKEN"]

    language = environ.get("MCP_LANG") or environ.get("LANG")
    if language:
        config_data["language"] = language

    if "DEBUG" in environ:
        config_data["debug"] = _is_truthy_flag(environ["DEBUG"])


def _require_credentials(config_data: Mapping[str, Any]) -> None:
    """Exit with status 1 when the Habitica credentials are missing.

    Raises:
        SystemExit: If the user ID or API token is absent or empty.
    """
    if config_data.get("habitica_user_id") and config_data.get("habitica_api_token"):
        return

    translator = Translator(str(config_data.get("language") or DEFAULT_LANGUAGE))
    logging.getLogger(__name__).error(
        translator.t(
            "Error: Please set HABITICA_USER_ID and HABITICA_API_TOKEN environment variables",
            "错误：请设置 HABITICA_USER_ID 和 HABITICA_API_TOKEN 环境变量",
        )
    )
    sys.exit(1)


def _create_validated_config(config_data: dict[str, Any]) -> ServerConfig:
    """Create and validate ServerConfig from configuration data.

    Args:
        config_data: Configuration data dictionary.

    Returns:
        ServerConfig: Validated configuration instance.

    Raises:
        SystemExit: On configuration validation errors.
    """
    logger = logging.getLogger(__name__)

    try:
        config = ServerConfig(**config_data)
    except Exception:
        logger.exception("Configuration validation failed")
        sys.exit(1)
    else:
        # Log effective configuration with secrets redacted
        logger.info("Effective configuration: %s", config.to_redacted_dict())
        return config


def load_configuration(environ: Mapping[str, str] | None = None) -> ServerConfig:
    """Load configuration from defaults, file, and environment with proper precedence.

    Precedence order (environment > file > defaults).

    Args:
        environ: Environment mapping, ``os.environ`` when omitted.

    Returns:
        ServerConfig: Loaded and validated configuration.

    Raises:
        SystemExit: On missing credentials, validation errors or file parsing errors.
    """
    logger = logging.getLogger(__name__)
    environ = os.environ if environ is None else environ

    explicit_file = environ.get("HABITICA_MCP_CONFIG")
    config_file = explicit_file or DEFAULT_CONFIG_FILE

    if explicit_file and not Path(config_file).exists():
        logger.error("Configuration file not found: %s", config_file)
        sys.exit(1)

    config_data = _load_config_from_file(config_file)
    _apply_env_overrides(config_data, environ)
    _require_credentials(config_data)

    config_data["config_file"] = config_file
    return _create_validated_config(config_data)


def main() -> None:
    """Main entry point for the Habitica MCP server.

    Loads configuration, creates a CoreServer instance and runs the server with
    all logging directed to stderr to keep stdout clean for the MCP protocol.
    """
    logger = logging.getLogger(__name__)

    try:
        config = load_configuration()
        server = CoreServer(config)
        server.run()
    except KeyboardInterrupt:
        logger.info("Server shutdown requested via KeyboardInterrupt")
    except Exception:
        logger.exception("Unhandled exception in server")
        sys.exit(1)
    finally:
        logger.info("Server shutdown complete")


if __name__ == "__main__":
    main()
