"""LinkedIn REST API with a standard OAuth 2.0 bearer token."""

from __future__ import annotations

import os
from typing import Any, Mapping

import httpx

from sales_intel_mcp.adapters.base import BackendAdapter
from sales_intel_mcp.constants import LINKEDIN_API_BASE_URL, LINKEDIN_API_VERSION
from sales_intel_mcp.core.result import AdapterResult, Err


class LinkedInAdapter(BackendAdapter):
    name = "LinkedIn"
    env_vars = ("LINKEDIN_ACCESS_TOKEN",)
    setup_hint = "Get a token from the LinkedIn Developer Portal (https://developer.linkedin.com/)."

    def __init__(self, *, base_url: str = LINKEDIN_API_BASE_URL, transport: httpx.AsyncBaseTransport | None = None) -> None:
        super().__init__(base_url=base_url, transport=transport)

    def _auth_headers(self) -> dict[str, str] | None:
        # Built per request so a rotated token is picked up without a restart.
        token = os.getenv("LINKEDIN_ACCESS_TOKEN")
        if not token:
            return None
        return {
            "Authorization": f"Bearer {token}",
            "LinkedIn-Version": LINKEDIN_API_VERSION,
            "X-Restli-Protocol-Version": "2.0.0",
        }

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any | None = None,
    ) -> AdapterResult:
        headers = self._auth_headers()
        if headers is None:
            return Err(self.configuration_error())
        if self._client is None:
            self._client = self._new_client()
        return await self._client.request(method, path, headers=headers, params=params, json=json)
