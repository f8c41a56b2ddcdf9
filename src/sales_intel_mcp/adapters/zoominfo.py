"""
ZoomInfo API: client id + private key exchanged for a short-lived JWT.

The token is cached on the adapter and refreshed when absent or within the
safety margin of its expiry. Concurrent calls may both refresh; the last
token written wins, and either one is valid.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping

import httpx

from sales_intel_mcp.adapters.base import BackendAdapter
from sales_intel_mcp.constants import (
    ZOOMINFO_API_BASE_URL,
    ZOOMINFO_TOKEN_MARGIN_S,
    ZOOMINFO_TOKEN_TTL_S,
)
from sales_intel_mcp.core.errors import UnknownError
from sales_intel_mcp.core.result import AdapterResult, Err, Ok

logger = logging.getLogger(__name__)

AUTHENTICATE_PATH = "/authenticate"


@dataclass(frozen=True)
class SessionToken:
    value: str
    expires_at: float

    def is_usable(self, now: float, margin: float = ZOOMINFO_TOKEN_MARGIN_S) -> bool:
        return now < self.expires_at - margin


class ZoomInfoAdapter(BackendAdapter):
    name = "ZoomInfo"
    env_vars = ("ZOOMINFO_CLIENT_ID", "ZOOMINFO_PRIVATE_KEY")

    def __init__(
        self,
        *,
        base_url: str = ZOOMINFO_API_BASE_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
        token_ttl: float = ZOOMINFO_TOKEN_TTL_S,
        token_margin: float = ZOOMINFO_TOKEN_MARGIN_S,
    ) -> None:
        super().__init__(base_url=base_url, transport=transport)
        self._clock = clock
        self._token_ttl = token_ttl
        self._token_margin = token_margin
        self._token: SessionToken | None = None

    @property
    def token(self) -> SessionToken | None:
        return self._token

    async def _current_token(self) -> AdapterResult:
        client_id = os.getenv("ZOOMINFO_CLIENT_ID")
        private_key = os.getenv("ZOOMINFO_PRIVATE_KEY")
        if not client_id or not private_key:
            return Err(self.configuration_error())

        token = self._token
        if token is not None and token.is_usable(self._clock(), self._token_margin):
            return Ok(token.value)

        if self._client is None:
            self._client = self._new_client()

        res = await self._client.request(
            "POST",
            AUTHENTICATE_PATH,
            json={"clientId": client_id, "privateKey": private_key},
        )
        if isinstance(res, Err):
            return res

        body = res.value if isinstance(res.value, dict) else {}
        jwt = body.get("jwt")
        if not isinstance(jwt, str) or not jwt:
            return Err(UnknownError("Authentication response did not contain a token."))

        self._token = SessionToken(value=jwt, expires_at=self._clock() + self._token_ttl)
        logger.info("ZoomInfo session token refreshed")
        return Ok(jwt)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any | None = None,
    ) -> AdapterResult:
        token = await self._current_token()
        if isinstance(token, Err):
            return token

        if self._client is None:
            self._client = self._new_client()
        return await self._client.request(
            method,
            path,
            headers={"Authorization": f"Bearer {token.value}"},
            params=params,
            json=json,
        )
