from __future__ import annotations

from dataclasses import dataclass

import httpx

from sales_intel_mcp.adapters.base import BackendAdapter
from sales_intel_mcp.adapters.clay import ClayAdapter
from sales_intel_mcp.adapters.gong import GongAdapter
from sales_intel_mcp.adapters.linkedin import LinkedInAdapter
from sales_intel_mcp.adapters.zoominfo import ZoomInfoAdapter


@dataclass(frozen=True)
class Backends:
    gong: GongAdapter
    zoominfo: ZoomInfoAdapter
    clay: ClayAdapter
    linkedin: LinkedInAdapter

    def all(self) -> tuple[BackendAdapter, ...]:
        return (self.gong, self.zoominfo, self.clay, self.linkedin)

    async def aclose(self) -> None:
        for adapter in self.all():
            await adapter.aclose()


def build_backends(*, transport: httpx.AsyncBaseTransport | None = None) -> Backends:
    """Construct one adapter per vendor; clients are built lazily on first call."""
    return Backends(
        gong=GongAdapter(transport=transport),
        zoominfo=ZoomInfoAdapter(transport=transport),
        clay=ClayAdapter(transport=transport),
        linkedin=LinkedInAdapter(transport=transport),
    )


__all__ = [
    "BackendAdapter",
    "Backends",
    "ClayAdapter",
    "GongAdapter",
    "LinkedInAdapter",
    "ZoomInfoAdapter",
    "build_backends",
]
