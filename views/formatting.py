"""Date labels used by the schedule page."""
from __future__ import annotations

from datetime import date


def _parse(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def day_heading(value: str) -> str:
    """``2025-01-15`` -> ``Wednesday, January 15, 2025``."""
    d = _parse(value)
    if d is None:
        return value
    return f"{d:%A}, {d:%B} {d.day}, {d.year}"


def option_label(value: str) -> str:
    """``2025-01-15`` -> ``January 15, 2025``."""
    d = _parse(value)
    if d is None:
        return value
    return f"{d:%B} {d.day}, {d.year}"


def popup_heading(value: str) -> str:
    """``2025-01-15`` -> ``Wed, Jan 15``."""
    d = _parse(value)
    if d is None:
        return value
    return f"{d:%a}, {d:%b} {d.day}"
