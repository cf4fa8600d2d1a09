"""Display formatting shared by tool summaries and widgets."""

from __future__ import annotations

import re
from typing import Any

DASH = "—"


def format_currency(value: float | int | None) -> str:
    """Format money as "$1,234.50"; absent values render as a dash."""
    if value is None:
        return DASH
    return f"${float(value):,.2f}"


def format_number(value: float | int | None, default: int = 0) -> str:
    """Format a number the way it reads in a sentence ("12", "12.5")."""
    if value is None:
        value = default
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def or_dash(value: Any) -> str:
    """Render a value, or a dash when it is missing or empty."""
    if value is None or value == "":
        return DASH
    return str(value)


def humanize_key(key: str) -> str:
    """Turn a payload key like "basic_services" into "Basic Services"."""
    return re.sub(r"\b\w", lambda m: m.group().upper(), key.replace("_", " "))
