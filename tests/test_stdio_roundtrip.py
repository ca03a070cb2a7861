import json
import os
import sys
from pathlib import Path

import pytest
from mcp import ClientSession
from mcp.client.stdio import StdioServerParameters, stdio_client

import lastrock_mcp

SRC_DIR = str(Path(lastrock_mcp.__file__).resolve().parent.parent)


@pytest.mark.asyncio
async def test_relay_over_stdio(orchestrator_dir: Path) -> None:
    """Starts the relay as a subprocess and talks to it with the MCP client."""
    pythonpath = os.pathsep.join(p for p in (SRC_DIR, os.environ.get("PYTHONPATH")) if p)
    params = StdioServerParameters(
        command=sys.executable,
        args=["-m", "lastrock_mcp"],
        env={
            "PYTHONPATH": pythonpath,
            "LASTROCK_ORCHESTRATOR_PATH": str(orchestrator_dir),
            "LASTROCK_ORCHESTRATOR_INTERPRETER": sys.executable,
            "LASTROCK_LOG_LEVEL": "WARNING",
        },
        cwd=str(orchestrator_dir),
    )

    async with stdio_client(params) as (read, write):
        async with ClientSession(read, write) as session:
            await session.initialize()

            listed = await session.list_tools()
            assert len(listed.tools) == 6

            result = await session.call_tool("get_infrastructure_status", arguments={})
            assert result.isError is False
            payload = json.loads(result.content[0].text)
            assert payload["params"] == {"include_history": "true", "include_locks": "true"}

            unknown = await session.call_tool("ssh_exec", arguments={"command": "docker restart nginx"})
            assert unknown.isError is True
            assert "ssh_exec" in unknown.content[0].text
