"""Command-line entry point: ``lastrock-mcp`` or ``python -m lastrock_mcp``."""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from .config import RelaySettings
from .exceptions import RelayError
from .logger import get_logger, setup_logging
from .server import SERVER_VERSION, build_relay

logger = get_logger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="lastrock-mcp",
        description="MCP server relaying infrastructure tools to the orchestrator script.",
    )
    parser.add_argument(
        "--orchestrator-path",
        help="Directory the orchestrator script runs in (overrides LASTROCK_ORCHESTRATOR_PATH).",
    )
    parser.add_argument("--log-level", help="Log level (overrides LASTROCK_LOG_LEVEL).")
    parser.add_argument("--version", action="version", version=f"%(prog)s {SERVER_VERSION}")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Loads settings, builds the relay and serves stdio until EOF.

    Returns:
        The process exit status.
    """
    args = parse_args(argv)

    try:
        settings = RelaySettings.from_env(orchestrator_path=args.orchestrator_path, log_level=args.log_level)
        setup_logging(settings.log_level)
        relay = build_relay(settings)
    except RelayError as e:
        setup_logging()
        logger.error("Fatal error in main(): %s", e)
        return 1

    if not settings.script_path.exists():
        logger.warning("Orchestrator script not found at %s; tool calls will fail", settings.script_path)

    try:
        asyncio.run(relay.run_stdio())
    except KeyboardInterrupt:
        pass
    except Exception:
        logger.exception("Fatal error in main()")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
