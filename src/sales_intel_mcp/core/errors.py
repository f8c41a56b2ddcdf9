"""
Error taxonomy shared by every backend, and the normalizer that turns any
failure into one stable, user-facing message.
"""

from __future__ import annotations

from typing import Any


class SalesIntelError(Exception):
    """Base class for failures surfaced to tool callers."""


class ValidationError(SalesIntelError):
    """Tool input is missing fields, has undeclared fields or is inconsistent."""


class ConfigurationError(SalesIntelError):
    """Required credentials for a backend are absent from the environment."""


class TransportError(SalesIntelError):
    """The request never produced an HTTP response."""

    TIMEOUT = "timeout"
    CONNECT = "connect"
    OTHER = "other"

    def __init__(self, message: str, *, kind: str = OTHER) -> None:
        super().__init__(message)
        self.kind = kind


class HttpStatusError(SalesIntelError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status: int, vendor_message: str = "") -> None:
        super().__init__(f"HTTP {status}")
        self.status = status
        self.vendor_message = vendor_message


class UnknownError(SalesIntelError):
    """Anything the adapters could not classify."""


def vendor_message_from_body(body: Any) -> str:
    """Pick the human message out of a vendor JSON error body, if any."""
    if not isinstance(body, dict):
        return ""
    for key in ("message", "error"):
        v = body.get(key)
        if isinstance(v, str) and v:
            return v
    return ""


def _http_message(err: HttpStatusError, service: str) -> str:
    status = err.status
    message = err.vendor_message

    if status == 400:
        return f"{service} Error: Bad request. {message or 'Check your parameters and try again.'}"
    if status == 401:
        return f"{service} Error: Authentication failed. Check your {service} API credentials in environment variables."
    if status == 403:
        return f"{service} Error: Permission denied. Your API key may lack the required scope for this operation."
    if status == 404:
        return f"{service} Error: Resource not found. {message or 'Verify the ID or query and try again.'}"
    if status == 429:
        return f"{service} Error: Rate limit exceeded. Please wait before making more requests."
    if 500 <= status < 600:
        return (
            f"{service} Error: Service temporarily unavailable (HTTP {status}). "
            "Please try again in a few minutes."
        )
    return f"{service} Error: API request failed with HTTP {status}. {message}".rstrip()


def normalize_error(failure: object, service: str) -> str:
    """
    Map any failure to a message prefixed with the backend name.

    Priority: timeout, connection refused, HTTP status, any other exception
    (its own description), then a generic fallback for non-exception values.
    """
    if isinstance(failure, TransportError):
        if failure.kind == TransportError.TIMEOUT:
            return (
                f"{service} Error: Request timed out. "
                "The service may be slow, try again or reduce your query scope."
            )
        if failure.kind == TransportError.CONNECT:
            return f"{service} Error: Connection refused. The service may be down."

    if isinstance(failure, HttpStatusError):
        return _http_message(failure, service)

    if isinstance(failure, Exception):
        description = str(failure).strip()
        if description:
            return f"{service} Error: {description}"

    return f"{service} Error: An unexpected error occurred."
