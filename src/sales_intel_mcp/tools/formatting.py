from __future__ import annotations

import json
from typing import Any, Iterable, Optional

NA = "N/A"


def format_duration(seconds: int | float | None) -> str:
    total = int(seconds or 0)
    return f"{total // 60}m {total % 60}s"


def json_text(obj: Any) -> str:
    return json.dumps(obj, indent=2, ensure_ascii=False, default=str)


def join_present(parts: Iterable[Optional[str]], sep: str = ", ") -> str:
    return sep.join(p for p in parts if p)


def clip(text: str, limit: int, *, ellipsis: str = "") -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + ellipsis


def thousands(n: int | float | None) -> Optional[str]:
    return f"{n:,}" if n else None


def block(lines: Iterable[Optional[str]]) -> str:
    """Join non-empty lines and end the block with a blank line."""
    return "\n".join([ln for ln in lines if ln] + [""])
