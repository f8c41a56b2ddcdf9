"""Gong REST API v2: HTTP Basic auth with an access key and secret."""

from __future__ import annotations

import base64
import os
from typing import Any, Mapping

import httpx

from sales_intel_mcp.adapters.base import BackendAdapter
from sales_intel_mcp.constants import GONG_API_BASE_URL
from sales_intel_mcp.core.result import AdapterResult, Err
from sales_intel_mcp.http.client import HttpClient


def basic_auth_header(access_key: str, access_secret: str) -> str:
    encoded = base64.b64encode(f"{access_key}:{access_secret}".encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"


class GongAdapter(BackendAdapter):
    name = "Gong"
    env_vars = ("GONG_ACCESS_KEY", "GONG_ACCESS_KEY_SECRET")

    def __init__(self, *, base_url: str = GONG_API_BASE_URL, transport: httpx.AsyncBaseTransport | None = None) -> None:
        super().__init__(base_url=base_url, transport=transport)

    def _ensure_client(self) -> HttpClient | None:
        # Built once, on first use, then reused for the adapter lifetime.
        if self._client is not None:
            return self._client

        access_key = os.getenv("GONG_ACCESS_KEY")
        access_secret = os.getenv("GONG_ACCESS_KEY_SECRET")
        if not access_key or not access_secret:
            return None

        self._client = self._new_client({"Authorization": basic_auth_header(access_key, access_secret)})
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
