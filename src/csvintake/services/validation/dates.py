from __future__ import annotations

from typing import Optional

import pandas as pd


# Tried in order after ISO-8601. All explicit so the result never depends on today's date.
_FALLBACK_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%d %B %Y",
    "%B %d %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%b %d %Y",
    "%b %d, %Y",
    "%a %b %d %Y",
)


def _parse(value: str) -> Optional[pd.Timestamp]:
    for fmt in ("ISO8601", *_FALLBACK_FORMATS):
        try:
            ts = pd.to_datetime(value, format=fmt, utc=True)
        except (ValueError, TypeError, OverflowError):
            continue
        if pd.isna(ts):
            continue
        return ts
    return None


def format_utc_iso(ts: pd.Timestamp) -> str:
    """Render as YYYY-MM-DDTHH:MM:SS.mmmZ (millisecond precision, UTC)."""
    return (
        f"{ts.year:04d}-{ts.month:02d}-{ts.day:02d}"
        f"T{ts.hour:02d}:{ts.minute:02d}:{ts.second:02d}.{ts.microsecond // 1000:03d}Z"
    )


def parse_date_to_utc_iso(value: str) -> Optional[str]:
    """
    Parse a date/time string to a UTC ISO-8601 timestamp.
    Accepts: ISO-8601 (date, date-time, with or without offset), M/D/YYYY [time],
    YYYY/MM/DD and day/month-name forms such as "5 March 2024" or "March 5, 2024".
    Naive values are taken as UTC. Returns None when nothing matches.
    """
    ts = _parse(value.strip())
    if ts is None:
        return None
    return format_utc_iso(ts)
