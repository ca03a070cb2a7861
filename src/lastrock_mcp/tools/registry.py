"""Tool registry holding the definitions advertised to clients."""

from typing import Dict, Iterable, List, Optional

from .catalog import TOOL_DEFINITIONS
from .models import ToolDefinition
from ..exceptions import ToolNotFoundError, ToolRegistrationError
from ..logger import get_logger

logger = get_logger(__name__)


class ToolRegistry:
    """
    A central registry of the tools the relay exposes.

    The registry only describes tools. What a tool actually does is decided by
    the Dispatcher, which checks its routes against this registry on startup.
    """

    def __init__(self, tools: Optional[Iterable[ToolDefinition]] = None) -> None:
        """Initialize the ToolRegistry.

        Args:
            tools: Definitions to register immediately, in listing order.
        """
        self.tools: Dict[str, ToolDefinition] = {}
        for tool in tools or ():
            self.register(tool)

    @classmethod
    def default(cls) -> "ToolRegistry":
        """Returns a registry containing the built-in orchestrator tools."""
        return cls(TOOL_DEFINITIONS)

    def register(self, tool: ToolDefinition) -> None:
        """
        Register a new tool.

        Args:
            tool: The definition to add.

        Raises:
            ToolRegistrationError: If a tool with the same name already exists.
        """
        if tool.name in self.tools:
            msg = f"Tool '{tool.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[tool.name] = tool
        logger.debug("Registered tool: '%s'", tool.name)

    def get(self, tool_name: str) -> ToolDefinition:
        """Look up a tool by name.

        Args:
            tool_name: The name the client asked for.

        Returns:
            The matching definition.

        Raises:
            ToolNotFoundError: If the tool does not exist in the registry.
        """
        tool = self.tools.get(tool_name)
        if tool is None:
            raise ToolNotFoundError(f"Unknown tool: {tool_name}")
        return tool

    def list_tools(self) -> List[ToolDefinition]:
        """Returns all definitions in registration order."""
        return list(self.tools.values())

    @property
    def names(self) -> set[str]:
        return set(self.tools)

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self.tools

    def __len__(self) -> int:
        return len(self.tools)
