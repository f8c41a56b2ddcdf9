"""Correlation id of the tool invocation running in the current task."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

_corr_id: ContextVar[Optional[str]] = ContextVar("sales_intel_corr_id", default=None)


def new_corr_id() -> str:
    return uuid.uuid4().hex


def current_corr_id() -> Optional[str]:
    return _corr_id.get()


@contextmanager
def bound_corr_id() -> Iterator[str]:
    """Bind a fresh correlation id for the duration of the block."""
    value = new_corr_id()
    token = _corr_id.set(value)
    try:
        yield value
    finally:
        _corr_id.reset(token)
