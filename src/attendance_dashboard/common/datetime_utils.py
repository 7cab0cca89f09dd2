from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]

_FOUR_DIGIT_YEAR = re.compile(r"(\d{4})/(\d{1,2})/(\d{1,2})")
_TWO_DIGIT_YEAR = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{2})")


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can inject a fixed clock instead.
    """
    return datetime.now(timezone.utc)


def to_iso_timestamp(value: datetime) -> str:
    """ISO-8601 with millisecond precision and a trailing Z for UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


def parse_report_date(value: str) -> str:
    """Extract a YYYY-MM-DD date from a report start-time string.

    Accepts ``2026/1/15 19:00:00`` and ``1/15/26, 8:01:35 AM``; returns an
    empty string when neither shape is found.
    """
    m = _FOUR_DIGIT_YEAR.search(value or "")
    if m:
        return f"{m.group(1)}-{int(m.group(2)):02d}-{int(m.group(3)):02d}"

    m = _TWO_DIGIT_YEAR.search(value or "")
    if m:
        short_year = int(m.group(3))
        year = 1900 + short_year if short_year >= 50 else 2000 + short_year
        return f"{year}-{int(m.group(1)):02d}-{int(m.group(2)):02d}"

    return ""


def format_duration(seconds: int) -> str:
    """Render seconds as ``"1h 30m"`` or ``"45m"``."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
