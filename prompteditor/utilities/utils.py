"""
PromptEditor Shared Utilities — timestamps and text helpers used across the core.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

ELLIPSIS = "…"

_WHITESPACE_RE = re.compile(r"\s+")


def now_utc() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def summarize(text: Optional[str], n: int = 80) -> str:
    """
    Collapse whitespace runs to single spaces, trim, and cap at *n* characters.

    Truncated output keeps the first ``n - 1`` characters and appends an
    ellipsis, so the result never exceeds *n* characters.

    Examples:
        summarize("  # Hello\\n\\n World ")  → "# Hello World"
        summarize("x" * 100, 10)            → "xxxxxxxxx…"
    """
    s = _WHITESPACE_RE.sub(" ", text or "").strip()
    if len(s) > n:
        return s[: n - 1] + ELLIPSIS
    return s


def format_timestamp(iso: str) -> str:
    """
    Render an ISO-8601 timestamp as a medium date plus short time,
    e.g. ``"Aug 25, 2025, 2:30 PM"``.

    Aware timestamps are shown in local time. Returns *iso* unchanged when
    it cannot be parsed.
    """
    try:
        dt = datetime.fromisoformat(iso)
    except (TypeError, ValueError):
        return iso
    if dt.tzinfo is not None:
        dt = dt.astimezone()
    hour = dt.hour % 12 or 12
    return f"{dt:%b} {dt.day}, {dt.year}, {hour}:{dt:%M} {dt:%p}"
