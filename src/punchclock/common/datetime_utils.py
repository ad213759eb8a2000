from __future__ import annotations

from datetime import date, datetime, time

from ..core.constants import HOURS_PRECISION
from ..core.exceptions import ValidationError


def parse_iso_date(value: str, field_name: str = "date") -> date:
    """Parse YYYY-MM-DD string into date."""
    if not isinstance(value, str):
        raise ValidationError(f"Invalid {field_name} (expected YYYY-MM-DD)")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid {field_name} (expected YYYY-MM-DD)")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def clock_time(moment: datetime) -> time:
    """Time-of-day at second precision, as stored in punch columns."""
    return moment.replace(microsecond=0).time()


def elapsed_hours(work_date: date, start: time, end: time) -> float:
    """Hours between two times of the same calendar day.

    The result may be negative when ``end`` is earlier than ``start``;
    callers decide how to treat that.
    """
    delta = datetime.combine(work_date, end) - datetime.combine(work_date, start)
    return round(delta.total_seconds() / 3600, HOURS_PRECISION)


def format_time(value: time | None) -> str | None:
    return value.strftime("%H:%M:%S") if value else None
