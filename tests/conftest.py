import sys
import textwrap
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from lastrock_mcp import Dispatcher, OrchestratorRunner, RelaySettings, ToolRegistry

# Stand-in for orchestrator.py. Echoes what it received as JSON unless the
# operation asks for something else.
FAKE_ORCHESTRATOR = textwrap.dedent(
    """
    import json
    import os
    import sys
    import time

    operation = sys.argv[1]
    params = dict(arg.split("=", 1) for arg in sys.argv[2:])

    if operation == "echo/text":
        print("   plain text result   ")
    elif operation == "echo/empty":
        pass
    elif operation == "echo/scalar":
        print("42")
    elif operation == "fail":
        print("partial output")
        print("something broke", file=sys.stderr)
        sys.exit(3)
    elif operation == "big":
        sys.stdout.write("x" * int(params["size"]))
    elif operation == "flood":
        stream = sys.stderr if params.get("stream") == "stderr" else sys.stdout
        stream.write("x" * int(params["size"]))
        stream.flush()
        time.sleep(3600)
    else:
        print(json.dumps({"operation": operation, "params": params, "argv": sys.argv[1:], "cwd": os.getcwd()}))
    """
)


@pytest.fixture
def orchestrator_dir(tmp_path: Path) -> Path:
    (tmp_path / "orchestrator.py").write_text(FAKE_ORCHESTRATOR, encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(orchestrator_dir: Path) -> RelaySettings:
    return RelaySettings(
        orchestrator_path=orchestrator_dir,
        interpreter=sys.executable,
        script="orchestrator.py",
        source_root="/srv/src",
    )


@pytest.fixture
def runner(settings: RelaySettings) -> OrchestratorRunner:
    return OrchestratorRunner(settings)


@pytest.fixture
def mock_runner() -> Any:
    runner = MagicMock(spec=OrchestratorRunner)
    runner.run.return_value = {"success": True}
    return runner


@pytest.fixture
def dispatcher(mock_runner: Any, settings: RelaySettings) -> Dispatcher:
    return Dispatcher(ToolRegistry.default(), mock_runner, settings)
