"""Month labels and timestamp conversion."""

from __future__ import annotations

import calendar
from datetime import datetime, timezone


def format_month_label(year: int, month: int) -> str:
    """Format a (year, month) pair as e.g. "Jan 2024"."""
    name = calendar.month_name[month] if 1 <= month <= 12 else "Unknown"
    return f"{name[:3]} {year}"


def timestamp_to_year_month(ts: int) -> tuple[int, int]:
    """Convert a Unix timestamp to (year, month) in UTC; out-of-range gives the epoch."""
    try:
        dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        dt = datetime(1970, 1, 1, tzinfo=timezone.utc)
    return dt.year, dt.month