"""
Multi-month workload forecasting.

Projects each active consultant's load over the coming months:

1. Active engagements spread their hours evenly across [start, deadline]
   and credit the month with the overlapping share
2. On-hold (pipeline) engagements credit 30 days of effort at their
   historical daily rate, discounted by the activation probability
3. Capacity is the monthly baseline minus approved leave in that month
"""

import logging
from datetime import date
from typing import List, Optional

from ..config import (
    BASELINE_MONTHLY_HOURS,
    DEFAULT_FORECAST_MONTHS,
    PIPELINE_ACTIVATION_PROBABILITY,
    PIPELINE_MONTHLY_WINDOW_DAYS,
    WORKDAY_HOURS,
)
from ..engagements.hours import ServiceHourResolver
from ..engagements.models import Consultant, EngagementStatus, ServiceEngagement
from ..sources import CapacityDataSource
from ..utils import (
    STATUS_AT_CAPACITY,
    STATUS_OVERLOADED,
    add_months,
    classify_utilization,
    month_bounds,
    month_label,
    month_start,
    overlap_days,
    round_half_up,
    utilization_percent,
)
from ..workload.timeoff import TimeOffCalculator
from .history import calculate_historical_metrics
from .models import (
    ConsultantMonthForecast,
    HistoricalMetrics,
    MonthlyForecast,
    ServiceForecastItem,
    WorkloadForecast,
)

logger = logging.getLogger(__name__)


class WorkloadForecastEngine:
    """
    Forecasts consultant utilization for N months starting at the current month.

    Historical metrics are recomputed on each `forecast` call and nothing
    is cached between calls.
    """

    def __init__(self,
                 source: CapacityDataSource,
                 resolver: ServiceHourResolver,
                 baseline_monthly_hours: float = BASELINE_MONTHLY_HOURS,
                 workday_hours: float = WORKDAY_HOURS,
                 activation_probability: int = PIPELINE_ACTIVATION_PROBABILITY,
                 default_months: int = DEFAULT_FORECAST_MONTHS):
        """
        Initialize forecasting engine.

        Args:
            source: Data source for consultants, engagements and time off
            resolver: Resolves engagement hour costs
            baseline_monthly_hours: Capacity of a consultant with no leave
            workday_hours: Hours deducted per day of leave
            activation_probability: Percent chance a pipeline engagement activates
            default_months: Horizon used when `forecast` is called without one
        """
        if not 0 <= activation_probability <= 100:
            raise ValueError("activation_probability must be between 0 and 100")

        self.source = source
        self.resolver = resolver
        self.baseline_monthly_hours = baseline_monthly_hours
        self.activation_probability = activation_probability
        self.default_months = default_months
        self.time_off = TimeOffCalculator(
            source,
            baseline_monthly_hours=baseline_monthly_hours,
            workday_hours=workday_hours,
        )

    def forecast(self,
                 months: Optional[int] = None,
                 today: Optional[date] = None) -> WorkloadForecast:
        """
        Generate a forecast for the coming months.

        Args:
            months: Number of months to forecast (default: engine default)
            today: Reference date; its month is the first forecast month

        Returns:
            WorkloadForecast with one MonthlyForecast per month
        """
        months = self.default_months if months is None else months
        if months < 1:
            raise ValueError("months must be at least 1")
        today = today or date.today()

        consultants = [c for c in self.source.list_consultants() if c.is_active]
        metrics = calculate_historical_metrics(self.source)

        first_month = month_start(today)
        monthly = [
            self.forecast_month(add_months(first_month, offset), consultants, metrics)
            for offset in range(months)
        ]

        logger.info("Forecast generated for %d consultants over %d months",
                    len(consultants), months, extra={'months': months})

        return WorkloadForecast(
            months=monthly,
            historical_metrics=metrics,
            activation_probability=self.activation_probability,
        )

    def forecast_month(self,
                       month: date,
                       consultants: List[Consultant],
                       metrics: HistoricalMetrics) -> MonthlyForecast:
        """Forecast every given consultant for one month and aggregate the team."""
        forecasts = [self.forecast_consultant_month(c, month, metrics) for c in consultants]

        total_assigned = sum(f.hours_assigned for f in forecasts)
        total_capacity = sum(f.adjusted_capacity for f in forecasts)

        return MonthlyForecast(
            month=month,
            month_label=month_label(month),
            consultant_forecasts=forecasts,
            team_average_utilization=round_half_up(utilization_percent(total_assigned, total_capacity)),
            team_total_hours_assigned=total_assigned,
            team_total_hours_available=total_capacity,
            overloaded_consultants=sum(1 for f in forecasts if f.status == STATUS_OVERLOADED),
            at_capacity_consultants=sum(1 for f in forecasts if f.status == STATUS_AT_CAPACITY),
        )

    def forecast_consultant_month(self,
                                  consultant: Consultant,
                                  month: date,
                                  metrics: HistoricalMetrics) -> ConsultantMonthForecast:
        """
        Project one consultant's load for one month.

        Args:
            consultant: Consultant to forecast
            month: Any day in the target month
            metrics: Historical metrics used for pipeline durations

        Returns:
            ConsultantMonthForecast with contributing engagements listed
        """
        active = self.source.list_engagements(status=EngagementStatus.ACTIVE,
                                              consultant_id=consultant.id)
        pipeline = self.source.list_engagements(status=EngagementStatus.ON_HOLD,
                                                consultant_id=consultant.id)

        active_items = [
            ServiceForecastItem(
                id=e.id,
                name=e.name,
                service_type=e.service_type.value,
                hours=self.active_hours_for_month(e, month),
                probability=100,
                expected_start=e.start_date,
                expected_end=e.deadline,
            )
            for e in active
        ]

        pipeline_items = []
        for engagement in pipeline:
            hours = self.pipeline_hours_for_month(engagement, metrics)
            pipeline_items.append(ServiceForecastItem(
                id=engagement.id,
                name=engagement.name,
                service_type=engagement.service_type.value,
                hours=round_half_up(hours * self.activation_probability / 100),
                probability=self.activation_probability,
                expected_start=engagement.start_date,
                expected_end=engagement.deadline,
            ))

        hours_assigned = (sum(item.hours for item in active_items)
                          + sum(item.hours for item in pipeline_items))

        time_off_days, time_off_hours = self.time_off.month_time_off(consultant.id, month)
        capacity = max(0.0, self.baseline_monthly_hours - time_off_hours)
        percent = utilization_percent(hours_assigned, capacity)

        return ConsultantMonthForecast(
            consultant_id=consultant.id,
            consultant_name=consultant.display_name,
            hours_assigned=hours_assigned,
            hours_available=max(0.0, capacity - hours_assigned),
            adjusted_capacity=capacity,
            time_off_days=time_off_days,
            time_off_hours=time_off_hours,
            utilization_percent=round_half_up(percent),
            status=classify_utilization(percent),
            active_services=active_items,
            pipeline_services=pipeline_items,
        )

    def active_hours_for_month(self, engagement: ServiceEngagement, month: date) -> int:
        """
        Share of an active engagement's hours falling in a month.

        Effort is assumed uniform across the inclusive [start, deadline]
        span, so a month receives hours in proportion to its overlapping days.
        """
        start, end = month_bounds(month)
        days = overlap_days(engagement.start_date, engagement.deadline, start, end)
        if days == 0:
            return 0
        hours_per_day = self.resolver.resolve(engagement) / engagement.duration_days
        return round_half_up(hours_per_day * days)

    def pipeline_hours_for_month(self,
                                 engagement: ServiceEngagement,
                                 metrics: HistoricalMetrics) -> int:
        """
        Undiscounted monthly hours of a pipeline engagement.

        The engagement's own dates are ignored; its hours are spread over the
        historical average duration for its type and a full 30-day window is
        credited.
        """
        duration = max(1.0, metrics.estimated_duration(engagement.service_type.value))
        hours_per_day = self.resolver.resolve(engagement) / duration
        return round_half_up(hours_per_day * PIPELINE_MONTHLY_WINDOW_DAYS)
