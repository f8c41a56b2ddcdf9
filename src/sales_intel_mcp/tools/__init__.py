from __future__ import annotations

from sales_intel_mcp.dispatcher import ToolSpec
from sales_intel_mcp.tools import clay, gong, linkedin, zoominfo

VENDOR_TOOLS: list[ToolSpec] = [*gong.TOOLS, *zoominfo.TOOLS, *clay.TOOLS, *linkedin.TOOLS]


def all_tools() -> list[ToolSpec]:
    """Every vendor tool followed by the status tool that reports on them."""
    from sales_intel_mcp.status import status_tool

    return [*VENDOR_TOOLS, status_tool(VENDOR_TOOLS)]


__all__ = ["VENDOR_TOOLS", "all_tools"]
