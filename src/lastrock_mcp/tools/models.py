"""Data models for tool definitions and tool calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Type

from pydantic import BaseModel, ConfigDict


class ToolDefinition(BaseModel):
    """
    Represents one tool the relay exposes to MCP clients.

    Attributes:
        name: The unique name of the tool.
        description: What the tool does, including any usage warnings for the caller.
        args_model: Pydantic model used for validating and coercing arguments.
        parameters: JSON schema of the input parameters, derived from ``args_model``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    args_model: Type[BaseModel]
    parameters: Dict[str, Any]

    @property
    def required(self) -> list[str]:
        """Names of the parameters a caller must supply."""
        return list(self.parameters.get("required", []))


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents a single tool invocation received from a client."""

    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolCallResult:
    """Represents the outcome of a tool invocation before it is wrapped for the protocol."""

    name: str
    payload: Any
    is_error: bool = False
