"""
Shared async HTTP client for the vendor adapters.

- Centralizes timeouts, the user agent and failure logging.
- Never raises for transport or HTTP failures: every call returns
  ``Ok(json)`` (``Ok(text)`` for a non-JSON 2xx body) or ``Err(<taxonomy error>)``.
- No retries; each call is at-most-once.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from sales_intel_mcp.constants import API_TIMEOUT
from sales_intel_mcp.core.errors import (
    HttpStatusError,
    TransportError,
    vendor_message_from_body,
)
from sales_intel_mcp.core.result import AdapterResult, Err, Ok

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpClientConfig:
    timeout: float = API_TIMEOUT
    user_agent: str = field(default_factory=lambda: os.getenv("SALES_INTEL_HTTP_USER_AGENT", "sales-intel-mcp/1.0"))


def _json_or_none(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None


class HttpClient:
    """A small wrapper around ``httpx.AsyncClient`` with sane defaults."""

    def __init__(
        self,
        *,
        base_url: str = "",
        headers: Mapping[str, str] | None = None,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or HttpClientConfig()
        base_headers = {
            "User-Agent": self.config.user_agent,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        base_headers.update(headers or {})
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=base_headers,
            timeout=self.config.timeout,
            transport=transport,
        )

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        params: Mapping[str, Any] | None = None,
        json: Any | None = None,
    ) -> AdapterResult:
        """Perform one HTTP request and classify its outcome."""
        t0 = time.perf_counter()
        try:
            resp = await self._client.request(
                method,
                url,
                headers=dict(headers) if headers else None,
                params=dict(params) if params else None,
                json=json,
            )
        except httpx.TimeoutException as e:
            self._log_failure(method, url, None, t0, e)
            return Err(TransportError(str(e) or "request timed out", kind=TransportError.TIMEOUT))
        except httpx.ConnectError as e:
            self._log_failure(method, url, None, t0, e)
            return Err(TransportError(str(e) or "connection failed", kind=TransportError.CONNECT))
        except httpx.HTTPError as e:
            self._log_failure(method, url, None, t0, e)
            return Err(TransportError(str(e) or type(e).__name__))

        if resp.is_error:
            self._log_failure(method, url, resp.status_code, t0, None)
            return Err(HttpStatusError(resp.status_code, vendor_message_from_body(_json_or_none(resp))))

        if not resp.content:
            return Ok(None)
        try:
            return Ok(resp.json())
        except ValueError:
            # plain-text acknowledgements (webhooks) pass through as text
            return Ok(resp.text)

    @staticmethod
    def _log_failure(method: str, url: str, status: int | None, t0: float, exc: Exception | None) -> None:
        ms = int((time.perf_counter() - t0) * 1000)
        logger.warning(
            "HTTP %s %s failed (status=%s, ms=%s): %s",
            method.upper(),
            url,
            status,
            ms,
            type(exc).__name__ if exc else "error response",
        )

    async def aclose(self) -> None:
        await self._client.aclose()
