"""MCP request/response adapter exposing the relay tools over stdio."""

import asyncio
import json
from typing import Any, Mapping, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from .config import RelaySettings
from .dispatch import Dispatcher
from .logger import get_logger
from .orchestrator import OrchestratorRunner
from .tools import ToolCallRequest, ToolCallResult, ToolRegistry

logger = get_logger(__name__)

__all__ = ["RelayServer", "build_relay", "SERVER_NAME", "SERVER_VERSION"]

SERVER_NAME = "lastrock-mcp"
SERVER_VERSION = "1.0.0"


class RelayServer:
    """Serves the tool registry and forwards tool calls to the dispatcher."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        registry: Optional[ToolRegistry] = None,
        name: str = SERVER_NAME,
        version: str = SERVER_VERSION,
    ):
        """Creates the MCP server and registers the tool handlers.

        Args:
            dispatcher: Executes tool calls.
            registry: Tools to advertise. Defaults to the dispatcher's registry.
            name: Server name reported during initialization.
            version: Server version reported during initialization.
        """
        self.dispatcher = dispatcher
        self.registry = registry if registry is not None else dispatcher.registry
        self.server: Server = Server(name, version=version)
        self.server.request_handlers[types.ListToolsRequest] = self._handle_list_tools
        self.server.request_handlers[types.CallToolRequest] = self._handle_call_tool

    def list_tools(self) -> list[types.Tool]:
        """Returns the registry as MCP tool descriptions."""
        return [
            types.Tool(name=tool.name, description=tool.description, inputSchema=tool.parameters)
            for tool in self.registry.list_tools()
        ]

    def execute(self, request: ToolCallRequest) -> ToolCallResult:
        """Runs one tool call synchronously.

        Execution failures of the orchestrator come back as an ordinary payload.
        Anything the dispatcher raises is turned into an error result here.

        Args:
            request: The tool name and its raw arguments.

        Returns:
            The payload, flagged when the call could not be dispatched.
        """
        try:
            payload = self.dispatcher.dispatch(request.name, request.arguments)
        except Exception as e:
            logger.error("Tool '%s' failed: %s", request.name, e, exc_info=True)
            return ToolCallResult(name=request.name, payload=f"Error: {e}", is_error=True)
        return ToolCallResult(name=request.name, payload=payload)

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> types.CallToolResult:
        """Runs a tool call off the event loop and wraps the result for the protocol.

        Args:
            name: Tool name.
            arguments: Raw arguments from the client.

        Returns:
            A single text block holding the pretty-printed payload, or the error message.
        """
        request = ToolCallRequest(name=name, arguments=dict(arguments or {}))
        result = await asyncio.to_thread(self.execute, request)
        return self.to_protocol(result)

    @staticmethod
    def to_protocol(result: ToolCallResult) -> types.CallToolResult:
        if result.is_error:
            text = str(result.payload)
        else:
            text = json.dumps(result.payload, indent=2, ensure_ascii=False)
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=text)],
            isError=result.is_error,
        )

    async def _handle_list_tools(self, req: types.ListToolsRequest) -> types.ServerResult:
        return types.ServerResult(types.ListToolsResult(tools=self.list_tools()))

    async def _handle_call_tool(self, req: types.CallToolRequest) -> types.ServerResult:
        return types.ServerResult(await self.call_tool(req.params.name, req.params.arguments))

    async def run_stdio(self) -> None:
        """Serves requests over stdin/stdout until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Last Rock MCP Server running on stdio")
            await self.server.run(read_stream, write_stream, self.server.create_initialization_options())


def build_relay(settings: RelaySettings) -> RelayServer:
    """Wires the default registry, dispatcher and orchestrator runner together."""
    registry = ToolRegistry.default()
    dispatcher = Dispatcher(registry, OrchestratorRunner(settings), settings)
    return RelayServer(dispatcher, registry)
