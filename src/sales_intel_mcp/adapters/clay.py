"""
Clay enrichment API: bearer API key for enterprise endpoints, plus per-table
webhooks for table-based enrichment.
"""

from __future__ import annotations

import os
from typing import Any, Mapping

import httpx

from sales_intel_mcp.adapters.base import BackendAdapter
from sales_intel_mcp.constants import CLAY_API_BASE_URL
from sales_intel_mcp.core.result import AdapterResult, Err
from sales_intel_mcp.http.client import HttpClient


class ClayAdapter(BackendAdapter):
    name = "Clay"
    env_vars = ("CLAY_API_KEY",)

    def __init__(self, *, base_url: str = CLAY_API_BASE_URL, transport: httpx.AsyncBaseTransport | None = None) -> None:
        super().__init__(base_url=base_url, transport=transport)
        self._webhook_client: HttpClient | None = None

    def _ensure_client(self) -> HttpClient | None:
        if self._client is not None:
            return self._client

        api_key = os.getenv("CLAY_API_KEY")
        if not api_key:
            return None

        self._client = self._new_client({"Authorization": f"Bearer {api_key}"})
        return self._client

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any | None = None,
    ) -> AdapterResult:
        client = self._ensure_client()
        if client is None:
            return Err(self.configuration_error())
        return await client.request(method, path, params=params, json=json)

    async def webhook_post(self, webhook_url: str, data: Mapping[str, Any]) -> AdapterResult:
        """
        POST to an absolute Clay table webhook URL.

        Webhooks do not require the API key; when it is set it is sent as
        ``x-clay-webhook-auth``.
        """
        if self._webhook_client is None:
            self._webhook_client = HttpClient(transport=self._transport)

        api_key = os.getenv("CLAY_API_KEY")
        headers = {"x-clay-webhook-auth": api_key} if api_key else None
        return await self._webhook_client.request("POST", webhook_url, headers=headers, json=dict(data))

    async def aclose(self) -> None:
        await super().aclose()
        if self._webhook_client is not None:
            await self._webhook_client.aclose()
            self._webhook_client = None
