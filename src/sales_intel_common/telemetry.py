"""
JSONL audit trail of tool invocations.

Records never carry credentials or contact details: values under secret
keys are masked (an auth scheme keeps its prefix) and values under personal
keys are replaced before a record is written.
"""

from __future__ import annotations

import datetime as _dt
import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from sales_intel_common.correlation import current_corr_id
from sales_intel_config.settings import telemetry_dir, telemetry_disabled

logger = logging.getLogger(__name__)

REDACT_TOKEN = "***redacted***"
TELEMETRY_FILE = "mcp-telemetry.jsonl"

SECRET_KEYS = frozenset(
    {
        "authorization",
        "api_key",
        "apikey",
        "access_token",
        "token",
        "jwt",
        "private_key",
        "privatekey",
        "access_key_secret",
        "x-clay-webhook-auth",
    }
)

PERSONAL_KEYS = frozenset({"email", "first_name", "last_name", "member_id", "linkedin_url"})

_AUTH_SCHEMES = {"bearer", "basic"}


def _mask(key: str, value: Any) -> Any:
    k = key.strip().lower()
    if k in SECRET_KEYS:
        if isinstance(value, str):
            scheme, _, credential = value.strip().partition(" ")
            if credential and scheme.lower() in _AUTH_SCHEMES:
                return f"{scheme} {REDACT_TOKEN}"
        return REDACT_TOKEN
    if k in PERSONAL_KEYS:
        return REDACT_TOKEN
    return redact(value)


def redact(obj: Any) -> Any:
    """Copy of ``obj`` with secret and personal values replaced, at any depth."""
    if isinstance(obj, Mapping):
        return {k: _mask(k, v) if isinstance(k, str) else redact(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [redact(x) for x in obj]
    return obj


def _telemetry_path(telemetry_file: str) -> Path:
    return telemetry_dir() / telemetry_file


def log_event(
    kind: str,
    name: str,
    args: Optional[Mapping[str, Any]] = None,
    ok: bool = True,
    ms: int = 0,
    *,
    client_id: Optional[str] = None,
    corr_id: Optional[str] = None,
    telemetry_file: str = TELEMETRY_FILE,
) -> None:
    """
    Append one redacted record; a no-op when telemetry is disabled.

    A write failure is logged and dropped so an unwritable telemetry
    directory never changes a tool result.
    """
    if telemetry_disabled():
        return

    record = {
        "ts": _dt.datetime.now(_dt.timezone.utc).isoformat().replace("+00:00", "Z"),
        "kind": kind,
        "name": name,
        "client_id": client_id,
        "corr_id": corr_id or current_corr_id(),
        "args": dict(args or {}),
        "ok": bool(ok),
        "ms": int(ms),
    }

    line = json.dumps(redact(record), ensure_ascii=False, default=str)
    path = _telemetry_path(telemetry_file)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")
    except OSError as e:
        logger.warning("telemetry write to %s failed: %s", path, e)

