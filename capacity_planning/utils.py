"""
Calendar and utilization helpers shared by the workload and forecast calculators.
"""

import calendar
import math
from datetime import date, timedelta
from typing import Optional, Tuple

import pandas as pd


STATUS_AVAILABLE = 'available'
STATUS_BUSY = 'busy'
STATUS_AT_CAPACITY = 'at-capacity'
STATUS_OVERLOADED = 'overloaded'

WORKLOAD_STATUSES = [STATUS_AVAILABLE, STATUS_BUSY, STATUS_AT_CAPACITY, STATUS_OVERLOADED]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded away from zero."""
    if value < 0:
        return -round_half_up(-value)
    return int(math.floor(value + 0.5))


def month_start(day: date) -> date:
    """First calendar day of the month containing `day`."""
    return day.replace(day=1)


def month_end(day: date) -> date:
    """Last calendar day of the month containing `day`."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=last)


def month_bounds(day: date) -> Tuple[date, date]:
    return month_start(day), month_end(day)


def add_months(day: date, months: int) -> date:
    """Shift the first day of `day`'s month by `months` calendar months."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def month_label(day: date) -> str:
    return day.strftime('%B %Y')


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days in [start, end], both ends counted."""
    return (end - start).days + 1


def overlap_days(start: date, end: date, window_start: date, window_end: date) -> int:
    """
    Inclusive day count of the intersection of two date ranges.

    Args:
        start: First day of the range
        end: Last day of the range (inclusive)
        window_start: First day of the window
        window_end: Last day of the window (inclusive)

    Returns:
        Number of shared days, 0 when the ranges do not intersect
    """
    if start > window_end or end < window_start:
        return 0
    return inclusive_days(max(start, window_start), min(end, window_end))


def lookahead_window(today: date, days: int) -> Tuple[date, date]:
    return today, today + timedelta(days=days)


def utilization_percent(hours_assigned: float, capacity: float) -> float:
    """Assigned hours as a percentage of capacity; 0 when there is no capacity."""
    if capacity <= 0:
        return 0.0
    return max(0.0, hours_assigned / capacity * 100)


def classify_utilization(percent: float) -> str:
    """
    Map a utilization percentage to a workload status.

    Over 100 is overloaded, 86 and up is at capacity, 61 and up is busy,
    everything else is available.
    """
    if percent > 100:
        return STATUS_OVERLOADED
    if percent >= 86:
        return STATUS_AT_CAPACITY
    if percent >= 61:
        return STATUS_BUSY
    return STATUS_AVAILABLE


def parse_date(value) -> Optional[date]:
    """Coerce ISO strings, datetimes and pandas timestamps to `date`."""
    if value is None or (not isinstance(value, (str, date)) and pd.isna(value)):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    if hasattr(value, 'date') and callable(value.date):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip()[:10])
