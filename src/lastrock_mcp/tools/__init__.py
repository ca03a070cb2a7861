from .models import ToolDefinition, ToolCallRequest, ToolCallResult
from .registry import ToolRegistry
from .schema import SchemaValidator
from .catalog import TOOL_DEFINITIONS

__all__ = [
    "ToolDefinition",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolRegistry",
    "SchemaValidator",
    "TOOL_DEFINITIONS",
]
