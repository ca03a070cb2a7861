"""Startup configuration for the relay, read from the environment (and an optional .env file)."""

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_ORCHESTRATOR_PATH = "/Users/customer/garza-os-github/orchestrator"
DEFAULT_SOURCE_ROOT = "/Users/customer"
DEFAULT_MAX_OUTPUT_BYTES = 10 * 1024 * 1024

# Environment variable -> RelaySettings field
ENV_VARS = {
    "LASTROCK_ORCHESTRATOR_PATH": "orchestrator_path",
    "LASTROCK_ORCHESTRATOR_INTERPRETER": "interpreter",
    "LASTROCK_ORCHESTRATOR_SCRIPT": "script",
    "LASTROCK_SOURCE_ROOT": "source_root",
    "LASTROCK_MAX_OUTPUT_BYTES": "max_output_bytes",
    "LASTROCK_LOG_LEVEL": "log_level",
}


class RelaySettings(BaseModel):
    """Where the orchestrator lives and how it is invoked.

    Attributes:
        orchestrator_path: Working directory the orchestrator script is run from.
        interpreter: Executable used to run the script.
        script: Script path, relative to ``orchestrator_path`` unless absolute.
        source_root: Parent directory used for default ``source_dir`` values.
        max_output_bytes: Upper bound for captured stdout and stderr, each.
        log_level: Level name passed to ``setup_logging``.
    """

    model_config = ConfigDict(frozen=True)

    orchestrator_path: Path = Path(DEFAULT_ORCHESTRATOR_PATH)
    interpreter: str = "python"
    script: str = "orchestrator.py"
    source_root: str = DEFAULT_SOURCE_ROOT
    max_output_bytes: int = Field(default=DEFAULT_MAX_OUTPUT_BYTES, gt=0)
    log_level: str = "INFO"

    @field_validator("interpreter", "script")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("source_root")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/") or "/"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unknown log level '{value}'")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: object) -> "RelaySettings":
        """Build settings from ``LASTROCK_*`` environment variables.

        When ``environ`` is None, a ``.env`` file is loaded first (without
        overriding variables that are already set) and ``os.environ`` is read.

        Args:
            environ: Mapping to read instead of the process environment.
            **overrides: Field values that take precedence over the environment,
                e.g. from command-line flags. None values are ignored.

        Returns:
            The validated settings.

        Raises:
            ConfigurationError: If any value fails validation.
        """
        if environ is None:
            load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ

        values: dict[str, object] = {}
        for env_name, field_name in ENV_VARS.items():
            raw = environ.get(env_name)
            if raw is not None and raw != "":
                values[field_name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            settings = cls(**values)  # type: ignore[arg-type]
        except ValidationError as e:
            msg = f"Invalid relay configuration: {e}"
            logger.error(msg)
            raise ConfigurationError(msg) from e

        logger.debug("Loaded relay settings: %s", settings)
        return settings

    @property
    def script_path(self) -> Path:
        """The orchestrator script, resolved against the working directory."""
        return self.orchestrator_path / self.script
