"""Calendar helpers shared by the leave, holiday and attendance services.

Everything here is pure: callers pass ``today`` explicitly. Unparsable input
yields ``None`` instead of raising, so views can render a placeholder.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Any, Optional

from ..core.enums import Classification
from ..core.exceptions import ValidationError

_SECONDS_PER_DAY = 86400


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_date(value: Any) -> Optional[date]:
    """Coerce a date, datetime or ISO string into a date (None if unparsable).

    The backend serializes dates as ISO timestamps (``2024-01-01T00:00:00.000Z``),
    so only the calendar part of a timestamp string is used.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    v = value.strip()
    try:
        if len(v) > 10 and v[10] in ("T", " "):
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        return parse_iso_date(v)
    except ValueError:
        return None


def to_datetime(value: Any) -> Optional[datetime]:
    """Coerce an ISO timestamp (``Z`` suffix allowed) into a naive datetime."""
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str) or not value.strip():
        return None
    v = value.strip().replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(v).replace(tzinfo=None)
    except ValueError:
        d = to_date(v)
        return datetime.combine(d, time.min) if d else None


def is_valid_date(value: Any) -> bool:
    return to_date(value) is not None


def is_range(start: Any, end: Any) -> bool:
    s = to_date(start)
    e = to_date(end)
    return s is not None and e is not None and s != e


def overlaps(start_a: Any, end_a: Any, start_b: Any, end_b: Any) -> bool:
    """Inclusive interval overlap. A missing end means a single-day interval."""
    sa = to_date(start_a)
    sb = to_date(start_b)
    if sa is None or sb is None:
        return False
    ea = to_date(end_a) or sa
    eb = to_date(end_b) or sb
    return sa <= eb and sb <= ea


def _start_of(value: Any) -> Any:
    if isinstance(value, (tuple, list)):
        return value[0] if value else None
    if hasattr(value, "start_date"):
        return value.start_date
    return value


def classify(value: Any, today: Any) -> Optional[Classification]:
    """Upcoming when the (range) start is on or after today, else past."""
    start = to_date(_start_of(value))
    ref = to_date(today)
    if start is None or ref is None:
        return None
    return Classification.UPCOMING if start >= ref else Classification.PAST


def days_until(value: Any, today: Any) -> Optional[int]:
    """Whole days from today to value, rounded up. Negative for past dates."""
    target = _start_of(value)
    if isinstance(target, datetime) or isinstance(today, datetime):
        t = target if isinstance(target, datetime) else _midnight(to_date(target))
        ref = today if isinstance(today, datetime) else _midnight(to_date(today))
        if t is None or ref is None:
            return None
        return math.ceil((t - ref).total_seconds() / _SECONDS_PER_DAY)

    d = to_date(target)
    ref_d = to_date(today)
    if d is None or ref_d is None:
        return None
    return (d - ref_d).days


def _midnight(d: Optional[date]) -> Optional[datetime]:
    if d is None:
        return None
    return datetime.combine(d, time.min)


def parse_time(value: Any) -> Optional[time]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Invalid time (HH:MM)", field="time")
    v = value.strip()
    if not v:
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError("Invalid time (HH:MM)", field="time")


def month_bounds(month: Any) -> tuple[date, date]:
    """First and last day of a month given as ``YYYY-MM`` or any date in it."""
    if isinstance(month, str):
        try:
            first = datetime.strptime(month.strip()[:7], "%Y-%m").date()
        except ValueError:
            raise ValidationError("Invalid month (YYYY-MM)", field="month")
    else:
        d = to_date(month)
        if d is None:
            raise ValidationError("Invalid month (YYYY-MM)", field="month")
        first = d.replace(day=1)

    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return first, date.fromordinal(next_first.toordinal() - 1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()
