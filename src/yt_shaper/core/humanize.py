"""Display formatting for counts, durations and upload dates."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any


def separate_numbers(value: Any) -> str | None:
    """Format an integer count with thousands separators.

    >>> separate_numbers(1234567)
    '1,234,567'
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        return f"{int(value):,}"
    except (TypeError, ValueError):
        return str(value)


def seconds_to_duration(value: Any) -> str | None:
    """Render seconds as ``M:SS`` or ``H:MM:SS``.

    >>> seconds_to_duration(3725)
    '1:02:05'
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        total = int(float(value))
    except (TypeError, ValueError):
        return None
    if total < 0:
        return None
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


_AGE_UNITS: tuple[tuple[str, int], ...] = (
    ("year", 365),
    ("month", 30),
    ("week", 7),
    ("day", 1),
)


def _parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    for fmt in ("%Y%m%d", "%Y-%m-%d"):
        try:
            return datetime.strptime(value.strip()[:10], fmt).date()
        except ValueError:
            continue
    return None


def upload_age(value: Any, *, today: date | None = None) -> str | None:
    """Describe how long ago *value* was, e.g. ``3 years ago``.

    *value* may be a ``date``, ``datetime``, ``YYYYMMDD`` or ``YYYY-MM-DD``
    string.  Unparseable input is returned unchanged (strings) or as
    ``None``.
    """
    parsed = _parse_date(value)
    if parsed is None:
        return value if isinstance(value, str) else None

    days = ((today or date.today()) - parsed).days
    if days <= 0:
        return "today"
    for unit, size in _AGE_UNITS:
        amount = days // size
        if amount >= 1:
            suffix = "" if amount == 1 else "s"
            return f"{amount} {unit}{suffix} ago"
    return "today"
