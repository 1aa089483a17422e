"""
Time-off overlap calculations.

Only approved leave reduces capacity. Every calendar day in a request
counts, weekends included. Blockout periods are exposed for lookups but
never reduce an individual's capacity.
"""

import logging
from datetime import date
from typing import List, Optional, Tuple

from ..config import BASELINE_MONTHLY_HOURS, UPCOMING_TIME_OFF_WINDOW_DAYS, WORKDAY_HOURS
from ..engagements.models import BlockoutPeriod, TimeOffRequest, TimeOffStatus
from ..sources import CapacityDataSource
from ..utils import lookahead_window, month_bounds, overlap_days
from .models import TimeOffAdjustment

logger = logging.getLogger(__name__)


class TimeOffCalculator:
    """Computes approved leave overlapping a month and the resulting capacity."""

    def __init__(self,
                 source: CapacityDataSource,
                 baseline_monthly_hours: float = BASELINE_MONTHLY_HOURS,
                 workday_hours: float = WORKDAY_HOURS,
                 lookahead_days: int = UPCOMING_TIME_OFF_WINDOW_DAYS):
        self.source = source
        self.baseline_monthly_hours = baseline_monthly_hours
        self.workday_hours = workday_hours
        self.lookahead_days = lookahead_days

    def _approved_requests(self, consultant_id: str) -> List[TimeOffRequest]:
        return self.source.list_time_off(consultant_id=consultant_id,
                                         status=TimeOffStatus.APPROVED)

    def month_time_off(self, consultant_id: str, month: date) -> Tuple[float, float]:
        """
        Approved leave falling inside the month containing `month`.

        Args:
            consultant_id: Consultant to check
            month: Any day in the target month

        Returns:
            Tuple of (days, hours)
        """
        start, end = month_bounds(month)
        total_days = 0.0
        for request in self._approved_requests(consultant_id):
            days = overlap_days(request.start_date, request.end_date, start, end)
            if days == 0:
                continue
            total_days += 0.5 if request.is_half_day else days
        return total_days, total_days * self.workday_hours

    def upcoming_time_off(self, consultant_id: str, today: date) -> List[TimeOffRequest]:
        """Approved requests starting after today and within the lookahead window."""
        window_start, window_end = lookahead_window(today, self.lookahead_days)
        upcoming = [
            request for request in self._approved_requests(consultant_id)
            if window_start < request.start_date <= window_end
        ]
        return sorted(upcoming, key=lambda request: request.start_date)

    def adjusted_capacity(self, consultant_id: str, today: date) -> TimeOffAdjustment:
        """
        Capacity for the current month after approved leave.

        Args:
            consultant_id: Consultant to check
            today: Reference date; its month is the current month

        Returns:
            TimeOffAdjustment with the baseline, leave and adjusted hours
        """
        days, hours = self.month_time_off(consultant_id, today)
        adjusted = max(0.0, self.baseline_monthly_hours - hours)
        upcoming = self.upcoming_time_off(consultant_id, today)
        if days:
            logger.debug("Consultant %s has %.1f leave days this month", consultant_id, days,
                         extra={'consultant_id': consultant_id})
        return TimeOffAdjustment(
            baseline_hours=self.baseline_monthly_hours,
            time_off_days=days,
            time_off_hours=hours,
            adjusted_hours_available=adjusted,
            upcoming_time_off=upcoming,
        )

    def find_blockout(self, on_date: date, consultant_id: str) -> Optional[BlockoutPeriod]:
        """Active blockout period covering `on_date` for the consultant, if any."""
        for period in sorted(self.source.list_blockouts(), key=lambda p: p.start_date):
            if period.covers(on_date, consultant_id):
                return period
        return None
