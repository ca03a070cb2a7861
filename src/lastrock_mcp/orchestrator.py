"""Runs the external orchestrator script and turns its output into a payload."""

import json
import queue
import shlex
import subprocess
import threading
from typing import IO, Any, Dict, List, Mapping

from .config import RelaySettings
from .logger import get_logger

logger = get_logger(__name__)

__all__ = ["OrchestratorRunner", "failure_payload"]

_CHUNK_SIZE = 64 * 1024
# Seconds to wait for the pipe readers once the process is gone or killed
_DRAIN_TIMEOUT = 5.0


def failure_payload(error: str, stderr: str = "", stdout: str = "") -> Dict[str, Any]:
    """The payload returned when the orchestrator could not complete.

    Args:
        error: Human-readable reason.
        stderr: Whatever the process wrote to stderr.
        stdout: Whatever the process wrote to stdout.
    """
    return {"success": False, "error": error, "stderr": stderr, "stdout": stdout}


class OrchestratorRunner:
    """
    Executes orchestrator operations as ``<interpreter> <script> <operation> key=value ...``.

    The command is passed to the OS as an argument vector, never through a
    shell, so parameter values reach the script exactly as given.
    Execution problems are reported as failure payloads, not exceptions.
    """

    def __init__(self, settings: RelaySettings):
        self.settings = settings

    def build_command(self, operation: str, params: Mapping[str, str]) -> List[str]:
        """Builds the argument vector for one operation.

        Args:
            operation: Hierarchical operation path, e.g. ``deploy/mcp-server``.
            params: Flat parameter mapping, forwarded in order as ``key=value``.

        Returns:
            The command as a list of arguments.
        """
        return [
            self.settings.interpreter,
            self.settings.script,
            operation,
            *(f"{key}={value}" for key, value in params.items()),
        ]

    def run(self, operation: str, params: Mapping[str, str]) -> Any:
        """Runs an operation and blocks until the process exits or its output gets too large.

        Both pipes are drained while the process runs. As soon as either one
        passes ``max_output_bytes`` the process is killed.

        Args:
            operation: Hierarchical operation path.
            params: Flat string parameters.

        Returns:
            The decoded JSON document printed by the script, ``{"output": <text>}``
            when stdout is not JSON, or a failure payload (see ``failure_payload``).
        """
        command = self.build_command(operation, params)
        printable = shlex.join(command)
        logger.info("Running orchestrator operation '%s'", operation)
        logger.debug("Command: %s (cwd=%s)", printable, self.settings.orchestrator_path)

        try:
            process = subprocess.Popen(
                command,
                cwd=self.settings.orchestrator_path,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except (OSError, ValueError) as e:
            # ValueError: arguments the OS cannot take, e.g. an embedded null byte
            msg = f"Command failed: {printable}: {e}"
            logger.error(msg)
            return failure_payload(msg)

        limit = self.settings.max_output_bytes
        captured = {"stdout": bytearray(), "stderr": bytearray()}
        finished: "queue.Queue[tuple[str, bool]]" = queue.Queue()
        readers = [
            threading.Thread(
                target=_drain,
                args=(name, pipe, captured[name], limit, finished),
                name=f"orchestrator-{name}",
                daemon=True,
            )
            for name, pipe in (("stdout", process.stdout), ("stderr", process.stderr))
        ]
        for reader in readers:
            reader.start()

        exceeded = None
        for _ in readers:
            stream, over_limit = finished.get()
            if over_limit:
                exceeded = stream
                process.kill()
                break

        for reader in readers:
            # Children of the script may keep a pipe open after the kill
            reader.join(timeout=_DRAIN_TIMEOUT)
        returncode = process.wait()

        stdout = self._decode(bytes(captured["stdout"][:limit]))
        stderr = self._decode(bytes(captured["stderr"][:limit]))

        if exceeded is not None:
            msg = f"{exceeded} maxBuffer length exceeded (limit {limit} bytes): {printable}"
            logger.error(msg)
            return failure_payload(msg, stderr=stderr, stdout=stdout)

        if returncode != 0:
            msg = f"Command failed (exit code {returncode}): {printable}"
            logger.error("%s\n%s", msg, stderr.rstrip())
            return failure_payload(msg, stderr=stderr, stdout=stdout)

        return self.parse_output(stdout)

    @staticmethod
    def parse_output(stdout: str) -> Any:
        """Decodes stdout as strict JSON, falling back to the trimmed text.

        ``NaN`` and ``Infinity`` are not JSON and take the text fallback.

        Args:
            stdout: Captured standard output.

        Returns:
            The decoded JSON value or ``{"output": stdout.strip()}``.
        """
        try:
            return json.loads(stdout, parse_constant=_reject_constant)
        except ValueError:
            return {"output": stdout.strip()}

    @staticmethod
    def _decode(raw: bytes) -> str:
        return raw.decode("utf-8", errors="replace")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _drain(
    name: str, pipe: IO[bytes], buffer: bytearray, limit: int, finished: "queue.Queue[tuple[str, bool]]"
) -> None:
    """Reads a pipe into ``buffer`` until EOF or until more than ``limit`` bytes arrived."""
    over_limit = False
    try:
        while True:
            chunk = pipe.read1(_CHUNK_SIZE)  # type: ignore[attr-defined]
            if not chunk:
                break
            buffer.extend(chunk)
            if len(buffer) > limit:
                over_limit = True
                break
    except (OSError, ValueError) as e:
        logger.warning("Stopped reading orchestrator %s: %s", name, e)
    finally:
        pipe.close()
        finished.put((name, over_limit))
