"""Pure time-accounting helpers shared by the time card service and its tests"""

import calendar
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Tuple

from fieldops.exceptions import InvalidInput

SECONDS_PER_HOUR = 3600

EPOCH = datetime(1970, 1, 1)

PERIODS = ("day", "week", "month", "year")


def compute_total_hours(start: datetime, end: datetime) -> float:
    """Fractional hours between two instants, not rounded"""
    return (end - start).total_seconds() / SECONDS_PER_HOUR


def period_start(period: Optional[str], now: datetime) -> datetime:
    """
    Start boundary of a reporting period relative to ``now``.

    day: midnight today; week: most recent Sunday at midnight (today if
    today is Sunday); month: first of the month; year: January 1st.
    Anything else falls back to the epoch, i.e. all time.
    """
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == "day":
        return midnight
    if period == "week":
        # weekday(): Monday=0 .. Sunday=6
        days_since_sunday = (midnight.weekday() + 1) % 7
        return midnight - timedelta(days=days_since_sunday)
    if period == "month":
        return midnight.replace(day=1)
    if period == "year":
        return midnight.replace(month=1, day=1)
    return EPOCH


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """First instant and 23:59:59 of the last day of a calendar month"""
    if month < 1 or month > 12:
        raise InvalidInput(f"Month must be between 1 and 12, got {month}")
    last_day = calendar.monthrange(year, month)[1]
    return datetime(year, month, 1), datetime(year, month, last_day, 23, 59, 59)


def sum_hours(hours: Iterable[Optional[float]]) -> float:
    """Sum card totals; open or unfinalized cards count as zero"""
    return sum(h or 0.0 for h in hours)


def as_naive_utc(value: datetime) -> datetime:
    """Convert an offset-aware instant to the naive UTC form the columns store"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
