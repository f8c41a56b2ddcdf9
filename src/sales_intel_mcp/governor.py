"""Response size governance for rendered tool output."""

from __future__ import annotations

from sales_intel_mcp.constants import CHARACTER_LIMIT, TRUNCATION_RESERVE


def truncation_notice(original_length: int) -> str:
    return (
        f"\n\n---\n⚠️ Response truncated ({original_length} chars). "
        "Use filters or pagination to narrow results."
    )


def truncate_response(text: str, limit: int = CHARACTER_LIMIT, *, reserve: int = TRUNCATION_RESERVE) -> str:
    """
    Return ``text`` unchanged when it fits in ``limit`` characters, otherwise
    cut it to ``limit - reserve`` characters and append a truncation notice.

    ``reserve`` must exceed the notice length so the result stays within
    ``limit``; the notice grows only with the digit count of the original
    length.
    """
    if len(text) <= limit:
        return text
    keep = max(limit - reserve, 0)
    return text[:keep] + truncation_notice(len(text))
