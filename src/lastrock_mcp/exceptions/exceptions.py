"""
Custom exception classes for the relay.

Only dispatch and startup problems are raised. Failures of the orchestrator
process itself are returned as payloads by the runner and never show up here.
"""


class RelayError(Exception):
    """Base exception for all relay errors."""

    pass


class ConfigurationError(RelayError):
    """Raised when the relay settings are missing or invalid."""

    pass


class ToolRegistrationError(RelayError):
    """Raised when a tool cannot be registered or has no matching route."""

    pass


class ToolNotFoundError(RelayError):
    """Raised when a requested tool is not known to the relay."""

    pass


class ToolValidationError(RelayError):
    """Raised when tool arguments do not match the tool's parameter schema."""

    pass
