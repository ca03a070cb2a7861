"""Export the relay exception hierarchy."""

from .exceptions import RelayError, ConfigurationError, ToolRegistrationError, ToolNotFoundError, ToolValidationError

__all__ = ["RelayError", "ConfigurationError", "ToolRegistrationError", "ToolNotFoundError", "ToolValidationError"]
