"""Run the MCP server as a stdio subprocess for integration tests."""

from __future__ import annotations

import asyncio
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Iterable, Mapping

from mcp import ClientSession
from mcp.client.stdio import StdioServerParameters, stdio_client
from mcp.types import TextContent

SRC_DIR = Path(__file__).resolve().parents[2] / "src"
STARTUP_TIMEOUT_S = 30
CALL_TIMEOUT_S = 30


def server_env(tmp_path: Path, *, drop: Iterable[str] = (), **overrides: str) -> dict[str, str]:
    """Current environment minus ``drop``, isolated from the developer's .env and telemetry."""
    dropped = set(drop)
    env = {k: v for k, v in os.environ.items() if k not in dropped}
    env.update(
        MCP_TRANSPORT="stdio",
        PYTHONPATH=os.pathsep.join(filter(None, [str(SRC_DIR), os.environ.get("PYTHONPATH")])),
        SALES_INTEL_ENV_FILE=str(tmp_path / "absent.env"),
        SALES_INTEL_REPO_ROOT=str(tmp_path),
        SALES_INTEL_TELEMETRY_DIR=str(tmp_path / "telemetry"),
    )
    env.update({k: str(v) for k, v in overrides.items()})
    return env


@asynccontextmanager
async def stdio_server(module: str, env: Mapping[str, str]) -> AsyncIterator[ClientSession]:
    """``python -m <module>`` behind an initialized client session."""
    params = StdioServerParameters(command=sys.executable, args=["-m", module], env=dict(env))
    async with stdio_client(params) as (read_stream, write_stream):
        async with ClientSession(read_stream, write_stream) as session:
            await asyncio.wait_for(session.initialize(), timeout=STARTUP_TIMEOUT_S)
            yield session


async def tool_names(session: ClientSession) -> set[str]:
    listing = await session.list_tools()
    return {tool.name for tool in listing.tools}


async def call_text(session: ClientSession, name: str, arguments: Mapping[str, Any] | None = None) -> tuple[str, bool]:
    """(concatenated text content, isError) of one tool call."""
    result = await asyncio.wait_for(session.call_tool(name, dict(arguments or {})), timeout=CALL_TIMEOUT_S)
    text = "".join(block.text for block in result.content if isinstance(block, TextContent))
    return text, bool(result.isError)
