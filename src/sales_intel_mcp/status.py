"""
Readiness report: which backends have credentials in the environment and
which tools each one serves. Recomputed on every call; never cached.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Iterable, Mapping, Sequence

from sales_intel_mcp.adapters import Backends
from sales_intel_mcp.dispatcher import Outcome, Rendered, ToolParams, ToolSpec
from sales_intel_mcp.tools.formatting import json_text


@dataclass(frozen=True)
class ServiceStatus:
    name: str
    configured: bool
    tools: list[str] = field(default_factory=list)
    env_vars: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ReadinessReport:
    services: list[ServiceStatus]

    @property
    def configured_count(self) -> int:
        return sum(1 for s in self.services if s.configured)

    @property
    def total(self) -> int:
        return len(self.services)

    @property
    def tool_count(self) -> int:
        return sum(len(s.tools) for s in self.services)

    def to_dict(self) -> dict:
        return {
            "configured": self.configured_count,
            "total": self.total,
            "tools_registered": self.tool_count,
            "services": [asdict(s) for s in self.services],
        }


def build_report(backends: Backends, tools_by_service: Mapping[str, Sequence[str]]) -> ReadinessReport:
    """Evaluate each adapter's environment-only ``is_configured`` check."""
    return ReadinessReport(
        services=[
            ServiceStatus(
                name=adapter.name,
                configured=adapter.is_configured(),
                tools=list(tools_by_service.get(adapter.name, ())),
                env_vars=list(adapter.env_vars),
            )
            for adapter in backends.all()
        ]
    )


def format_report_markdown(report: ReadinessReport) -> str:
    lines = ["# Sales Intelligence — Service Status\n"]
    for svc in report.services:
        state = "✅ Connected" if svc.configured else "❌ Not Configured"
        lines.append(f"## {svc.name} — {state}")
        lines.append(f"**Tools**: {', '.join(svc.tools)}")
        if not svc.configured:
            lines.append("**Setup**: Set these environment variables: " + ", ".join(f"`{v}`" for v in svc.env_vars))
        lines.append("")

    lines.append(
        f"---\n**{report.configured_count}/{report.total}** services connected. "
        f"**{report.tool_count}** tools registered."
    )
    return "\n".join(lines)


class StatusParams(ToolParams):
    pass


def group_by_service(specs: Iterable[ToolSpec]) -> dict[str, list[str]]:
    """Tool names keyed by service, in registration order."""
    out: dict[str, list[str]] = {}
    for spec in specs:
        out.setdefault(spec.service, []).append(spec.name)
    return out


def status_tool(catalogue: Sequence[ToolSpec]) -> ToolSpec:
    """Build the ``sales_intel_status`` tool over the given vendor tools."""
    tools_by_service = group_by_service(catalogue)

    async def handler(backends: Backends, params: StatusParams) -> Outcome:
        report = build_report(backends, tools_by_service)
        if params.wants_json:
            return Rendered(json_text(report.to_dict()))
        return Rendered(format_report_markdown(report))

    return ToolSpec(
        name="sales_intel_status",
        title="Sales Intelligence Status",
        description=(
            "Check which sales intelligence services (Gong, ZoomInfo, Clay, LinkedIn) are configured. "
            "Lists each service's tools and, for unconfigured services, the environment variables to set. "
            "Use this before running queries to see which tools are ready."
        ),
        service="Sales Intelligence",
        params=StatusParams,
        handler=handler,
        open_world=False,
    )
