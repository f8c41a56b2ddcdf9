from __future__ import annotations

import functools
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping

from sales_intel_common.correlation import bound_corr_id
from sales_intel_common.telemetry import REDACT_TOKEN, SECRET_KEYS, TELEMETRY_FILE, log_event

logger = logging.getLogger(__name__)

ToolRunner = Callable[[Mapping[str, Any]], Awaitable[Any]]


def sanitize_args_for_log(args: Mapping[str, Any] | None) -> dict:
    """Shallow copy of tool arguments with secret-keyed values masked."""
    return {str(k): REDACT_TOKEN if str(k).strip().lower() in SECRET_KEYS else v for k, v in (args or {}).items()}


@dataclass(frozen=True)
class InstrumentConfig:
    kind: str
    name: str
    client_id: str
    telemetry_file: str = TELEMETRY_FILE


def instrument_async_tool(
    cfg: InstrumentConfig,
    *,
    on_exception: Callable[[Exception], Any],
) -> Callable[[ToolRunner], ToolRunner]:
    """
    Decorator for async tool runners taking a single ``arguments`` mapping.

    Each call runs under a correlation id and is recorded with its
    sanitized arguments, outcome and latency. An exception escaping the
    runner is logged and turned into a payload by ``on_exception``; a
    payload with a truthy ``is_error`` is recorded as failed.
    """

    def decorator(fn: ToolRunner) -> ToolRunner:
        @functools.wraps(fn)
        async def wrapper(arguments: Mapping[str, Any]) -> Any:
            with bound_corr_id() as corr_id:
                t0 = time.perf_counter()
                try:
                    payload = await fn(arguments)
                except Exception as e:
                    logger.exception("tool %s failed unexpectedly (corr_id=%s)", cfg.name, corr_id)
                    payload = on_exception(e)
                ms = int((time.perf_counter() - t0) * 1000)

                record: dict[str, Any] = {"args": sanitize_args_for_log(arguments)}
                ok = not getattr(payload, "is_error", False)
                if not ok:
                    record["error"] = getattr(payload, "text", None)

                log_event(
                    cfg.kind,
                    cfg.name,
                    record,
                    ok=ok,
                    ms=ms,
                    client_id=cfg.client_id,
                    corr_id=corr_id,
                    telemetry_file=cfg.telemetry_file,
                )
            return payload

        return wrapper

    return decorator
