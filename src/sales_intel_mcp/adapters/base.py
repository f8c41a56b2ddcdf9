from __future__ import annotations

import os
from typing import Any, Mapping

import httpx

from sales_intel_mcp.core.errors import ConfigurationError
from sales_intel_mcp.core.result import AdapterResult
from sales_intel_mcp.http.client import HttpClient


class BackendAdapter:
    """
    Owns one vendor's credentials, headers and raw request execution.

    Subclasses implement ``_send``; ``get``/``post`` never raise for
    transport, HTTP or missing-credential failures.
    """

    name: str = ""
    env_vars: tuple[str, ...] = ()
    setup_hint: str = ""

    def __init__(self, *, base_url: str, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.base_url = base_url
        self._transport = transport
        self._client: HttpClient | None = None

    def is_configured(self) -> bool:
        """Environment-only check; performs no I/O."""
        return all(os.getenv(v) for v in self.env_vars)

    def configuration_error(self) -> ConfigurationError:
        names = " and ".join(self.env_vars)
        noun = "variables" if len(self.env_vars) > 1 else "variable"
        msg = f"{self.name} credentials not configured. Set {names} environment {noun}."
        if self.setup_hint:
            msg = f"{msg} {self.setup_hint}"
        return ConfigurationError(msg)

    def _new_client(self, headers: Mapping[str, str] | None = None) -> HttpClient:
        return HttpClient(base_url=self.base_url, headers=headers, transport=self._transport)

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> AdapterResult:
        return await self._send("GET", path, params=params)

    async def post(self, path: str, body: Mapping[str, Any] | None = None) -> AdapterResult:
        return await self._send("POST", path, json=dict(body) if body is not None else None)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any | None = None,
    ) -> AdapterResult:
        raise NotImplementedError

    async def aclose(self) -> None:
        """Close the HTTP client; the next call builds a fresh one."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
