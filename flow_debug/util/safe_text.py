"""Helpers for turning arbitrary objects into bounded text without raising."""

from __future__ import annotations

from typing import Any, Optional

ELLIPSIS = "..."
NOT_PRINTABLE = "[Type not printable]"


def safe_str(value: Any, fallback: Optional[str] = NOT_PRINTABLE) -> Optional[str]:
    """Return ``str(value)``, or ``fallback`` when ``__str__`` raises."""
    try:
        return str(value)
    except Exception:
        return fallback


def truncate_text(text: str, max_length: int, marker: str = ELLIPSIS) -> str:
    """Cut ``text`` to ``max_length`` characters, appending ``marker`` when cut."""
    if len(text) > max_length:
        return text[:max_length] + marker
    return text
