"""Last Rock MCP relay - exposes infrastructure tools and forwards them to the orchestrator script."""

from .config import RelaySettings
from .dispatch import Dispatcher, Route, ROUTES
from .exceptions import (
    RelayError,
    ConfigurationError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolValidationError,
)
from .logger import get_logger, setup_logging
from .orchestrator import OrchestratorRunner
from .server import RelayServer, build_relay
from .tools import ToolDefinition, ToolRegistry, ToolCallRequest, ToolCallResult

__all__ = [
    "RelaySettings",
    "Dispatcher",
    "Route",
    "ROUTES",
    "RelayError",
    "ConfigurationError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolValidationError",
    "get_logger",
    "setup_logging",
    "OrchestratorRunner",
    "RelayServer",
    "build_relay",
    "ToolDefinition",
    "ToolRegistry",
    "ToolCallRequest",
    "ToolCallResult",
]
