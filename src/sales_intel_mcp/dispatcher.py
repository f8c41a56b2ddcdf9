"""
Tool dispatch: strict input validation, one adapter call per invocation,
and a uniform ``ToolResult`` envelope for every outcome.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from sales_intel_common.tooling import InstrumentConfig, instrument_async_tool
from sales_intel_mcp.adapters import Backends
from sales_intel_mcp.constants import ResponseFormat
from sales_intel_mcp.core.errors import ConfigurationError, ValidationError, normalize_error
from sales_intel_mcp.core.result import Err, ToolResult
from sales_intel_mcp.governor import truncate_response

logger = logging.getLogger(__name__)

MCP_CLIENT_ID = os.getenv("MCP_CLIENT_ID", "sales-intel-assistant")


class ToolParams(BaseModel):
    """Base for tool inputs: undeclared fields are rejected, nothing is coerced."""

    model_config = ConfigDict(extra="forbid", strict=True)

    response_format: Literal["markdown", "json"] = "markdown"

    @property
    def wants_json(self) -> bool:
        return self.response_format == ResponseFormat.JSON.value


@dataclass(frozen=True)
class Rendered:
    text: str


@dataclass(frozen=True)
class NotFound:
    message: str


Outcome = Union[Rendered, NotFound, Err]
Handler = Callable[[Backends, Any], Awaitable[Outcome]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    title: str
    description: str
    service: str
    params: type[ToolParams]
    handler: Handler
    read_only: bool = True
    open_world: bool = True


def format_validation_error(exc: PydanticValidationError) -> str:
    problems = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err.get("loc", ())) or "input"
        if err.get("type") == "extra_forbidden":
            problems.append(f"unexpected field '{field}'")
        elif err.get("type") == "missing":
            problems.append(f"missing required field '{field}'")
        else:
            problems.append(f"'{field}': {err.get('msg')}")
    return "Error: Invalid input: " + "; ".join(problems) + "."


class Dispatcher:
    """Routes a tool name plus raw arguments to its handler and backend."""

    def __init__(self, backends: Backends, specs: Iterable[ToolSpec]) -> None:
        self.backends = backends
        self._specs: dict[str, ToolSpec] = {}
        self._runners: dict[str, Callable[[Mapping[str, Any]], Awaitable[ToolResult]]] = {}
        for spec in specs:
            self.register(spec)

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._specs:
            raise ValueError(f"duplicate tool name: {spec.name}")

        async def run(arguments: Mapping[str, Any], _spec: ToolSpec = spec) -> ToolResult:
            return await self._run(_spec, arguments)

        cfg = InstrumentConfig(kind="tool", name=spec.name, client_id=MCP_CLIENT_ID)
        self._specs[spec.name] = spec
        self._runners[spec.name] = instrument_async_tool(
            cfg,
            on_exception=lambda e, _service=spec.service: ToolResult.failure(normalize_error(e, _service)),
        )(run)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    @property
    def specs(self) -> list[ToolSpec]:
        return list(self._specs.values())

    def get(self, name: str) -> Optional[ToolSpec]:
        return self._specs.get(name)

    async def invoke(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        runner = self._runners.get(name)
        if runner is None:
            return ToolResult.failure(f"Error: Unknown tool '{name}'.")
        return await runner(dict(arguments or {}))

    async def _run(self, spec: ToolSpec, arguments: Mapping[str, Any]) -> ToolResult:
        try:
            params = spec.params.model_validate(arguments)
        except PydanticValidationError as e:
            return ToolResult.failure(format_validation_error(e))

        outcome = await spec.handler(self.backends, params)
        return self._finish(spec, outcome)

    @staticmethod
    def _finish(spec: ToolSpec, outcome: Outcome) -> ToolResult:
        if isinstance(outcome, Rendered):
            return ToolResult.success(truncate_response(outcome.text))
        if isinstance(outcome, NotFound):
            return ToolResult.success(outcome.message)
        if isinstance(outcome, Err):
            error = outcome.error
            if isinstance(error, ValidationError):
                return ToolResult.failure(f"Error: {error}")
            if isinstance(error, ConfigurationError):
                return ToolResult.failure(f"{spec.service} Error: {error}")
            return ToolResult.failure(normalize_error(error, spec.service))
        raise TypeError(f"unexpected handler outcome: {outcome!r}")
