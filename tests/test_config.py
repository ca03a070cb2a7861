from pathlib import Path

import pytest

from lastrock_mcp import RelaySettings
from lastrock_mcp.config import DEFAULT_MAX_OUTPUT_BYTES, DEFAULT_ORCHESTRATOR_PATH
from lastrock_mcp.exceptions import ConfigurationError


def test_defaults_when_environment_is_empty() -> None:
    settings = RelaySettings.from_env({})

    assert settings.orchestrator_path == Path(DEFAULT_ORCHESTRATOR_PATH)
    assert settings.interpreter == "python"
    assert settings.script == "orchestrator.py"
    assert settings.source_root == "/Users/customer"
    assert settings.max_output_bytes == DEFAULT_MAX_OUTPUT_BYTES == 10 * 1024 * 1024
    assert settings.log_level == "INFO"


def test_values_from_environment() -> None:
    settings = RelaySettings.from_env(
        {
            "LASTROCK_ORCHESTRATOR_PATH": "/opt/orchestrator",
            "LASTROCK_ORCHESTRATOR_INTERPRETER": "python3.12",
            "LASTROCK_ORCHESTRATOR_SCRIPT": "main.py",
            "LASTROCK_SOURCE_ROOT": "/home/ops/src/",
            "LASTROCK_MAX_OUTPUT_BYTES": "2048",
            "LASTROCK_LOG_LEVEL": "debug",
        }
    )

    assert settings.orchestrator_path == Path("/opt/orchestrator")
    assert settings.interpreter == "python3.12"
    assert settings.script_path == Path("/opt/orchestrator/main.py")
    assert settings.source_root == "/home/ops/src"
    assert settings.max_output_bytes == 2048
    assert settings.log_level == "DEBUG"


def test_empty_variables_are_ignored() -> None:
    settings = RelaySettings.from_env({"LASTROCK_ORCHESTRATOR_SCRIPT": ""})
    assert settings.script == "orchestrator.py"


def test_overrides_beat_environment() -> None:
    settings = RelaySettings.from_env(
        {"LASTROCK_ORCHESTRATOR_PATH": "/opt/orchestrator"}, orchestrator_path="/srv/orch", log_level=None
    )
    assert settings.orchestrator_path == Path("/srv/orch")
    assert settings.log_level == "INFO"


@pytest.mark.parametrize(
    "env",
    [
        {"LASTROCK_MAX_OUTPUT_BYTES": "0"},
        {"LASTROCK_MAX_OUTPUT_BYTES": "lots"},
        {"LASTROCK_LOG_LEVEL": "LOUD"},
        {"LASTROCK_ORCHESTRATOR_INTERPRETER": "   "},
    ],
)
def test_invalid_values_raise(env: dict[str, str]) -> None:
    with pytest.raises(ConfigurationError, match="Invalid relay configuration"):
        RelaySettings.from_env(env)


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LASTROCK_ORCHESTRATOR_PATH", str(tmp_path))
    assert RelaySettings.from_env().orchestrator_path == tmp_path


def test_settings_are_frozen() -> None:
    settings = RelaySettings()
    with pytest.raises(Exception):
        settings.interpreter = "bash"  # type: ignore[misc]
