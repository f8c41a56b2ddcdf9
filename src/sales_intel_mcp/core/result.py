from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from sales_intel_mcp.core.errors import SalesIntelError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: SalesIntelError


AdapterResult = Union[Ok[Any], Err]


@dataclass(frozen=True)
class ToolResult:
    """Envelope returned by every tool invocation."""

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=False)

    @classmethod
    def failure(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=True)
