"""
Current workload calculator.

Combines the hours of each consultant's active engagements with their
approved leave for the current month into a utilization snapshot, and
rolls those snapshots up for the whole team.

Rules:
1. Only active engagements listing the consultant count toward load
2. Capacity is the monthly baseline minus this month's approved leave, floored at 0
3. Utilization is 0 whenever capacity is 0
"""

import logging
from datetime import date
from typing import Dict, List, Optional

from ..config import BASELINE_MONTHLY_HOURS, UPCOMING_TIME_OFF_WINDOW_DAYS, WORKDAY_HOURS
from ..engagements.hours import RPO, SERVICE_CATEGORIES, ServiceHourResolver
from ..engagements.models import Consultant, EngagementStatus, ServiceType
from ..sources import CapacityDataSource
from ..utils import (
    STATUS_AT_CAPACITY,
    STATUS_AVAILABLE,
    STATUS_BUSY,
    STATUS_OVERLOADED,
    classify_utilization,
    round_half_up,
    utilization_percent,
)
from .models import (
    ActiveServiceItem,
    CategoryShare,
    ServiceTypeDistribution,
    TeamWorkloadSummary,
    WorkloadData,
)
from .timeoff import TimeOffCalculator

logger = logging.getLogger(__name__)


class WorkloadCalculator:
    """
    Present-tense utilization for consultants.

    Every call reads a fresh snapshot from the data source; nothing is cached.
    """

    def __init__(self,
                 source: CapacityDataSource,
                 resolver: ServiceHourResolver,
                 baseline_monthly_hours: float = BASELINE_MONTHLY_HOURS,
                 workday_hours: float = WORKDAY_HOURS,
                 lookahead_days: int = UPCOMING_TIME_OFF_WINDOW_DAYS):
        """
        Initialize calculator.

        Args:
            source: Data source for consultants, engagements and time off
            resolver: Resolves engagement hour costs
            baseline_monthly_hours: Capacity of a consultant with no leave
            workday_hours: Hours deducted per day of leave
            lookahead_days: Window for listing upcoming leave
        """
        self.source = source
        self.resolver = resolver
        self.time_off = TimeOffCalculator(
            source,
            baseline_monthly_hours=baseline_monthly_hours,
            workday_hours=workday_hours,
            lookahead_days=lookahead_days,
        )

    def _find_consultant(self, consultant_id: str) -> Optional[Consultant]:
        for consultant in self.source.list_consultants():
            if consultant.id == consultant_id:
                return consultant
        return None

    def consultant_workload(self,
                            consultant_id: str,
                            today: Optional[date] = None) -> Optional[WorkloadData]:
        """
        Calculate the current workload of one consultant.

        Args:
            consultant_id: Consultant to evaluate
            today: Reference date (default: today)

        Returns:
            WorkloadData, or None when the consultant does not exist
        """
        today = today or date.today()
        consultant = self._find_consultant(consultant_id)
        if consultant is None:
            logger.debug("Consultant %s not found", consultant_id,
                         extra={'consultant_id': consultant_id})
            return None
        return self._workload_for(consultant, today)

    def _workload_for(self, consultant: Consultant, today: date) -> WorkloadData:
        adjustment = self.time_off.adjusted_capacity(consultant.id, today)

        engagements = self.source.list_engagements(status=EngagementStatus.ACTIVE,
                                                   consultant_id=consultant.id)

        hours_breakdown: Dict[str, float] = {key: 0.0 for key in SERVICE_CATEGORIES}
        count_breakdown: Dict[str, int] = {key: 0 for key in SERVICE_CATEGORIES}
        active_services: List[ActiveServiceItem] = []

        for engagement in engagements:
            hours = self.resolver.resolve(engagement)
            category = self.resolver.category(engagement)
            hours_breakdown[category] += hours
            count_breakdown[category] += 1
            active_services.append(ActiveServiceItem(
                id=engagement.id,
                name=engagement.name,
                service_type=engagement.service_type.value,
                hours=hours,
                expected_completion=engagement.deadline,
            ))

        hours_assigned = sum(hours_breakdown.values())
        capacity = adjustment.adjusted_hours_available
        percent = utilization_percent(hours_assigned, capacity)

        return WorkloadData(
            consultant_id=consultant.id,
            consultant_name=consultant.display_name,
            consultant_type=consultant.consultant_type,
            consultant_status=consultant.status.value,
            avatar=consultant.avatar,
            monthly_hours_available=capacity,
            hours_assigned=hours_assigned,
            hours_remaining=max(0.0, capacity - hours_assigned),
            utilization_percent=round_half_up(percent),
            status=classify_utilization(percent),
            service_hours_breakdown=hours_breakdown,
            service_count_breakdown=count_breakdown,
            active_services=active_services,
            time_off_adjustment=adjustment,
        )

    def team_summary(self, today: Optional[date] = None) -> TeamWorkloadSummary:
        """
        Roll up current workload across all active consultants.

        The average utilization is the plain mean of each consultant's
        rounded percentage, not weighted by hours.

        Args:
            today: Reference date (default: today)

        Returns:
            TeamWorkloadSummary with consultants sorted by utilization, highest first
        """
        today = today or date.today()
        active = [c for c in self.source.list_consultants() if c.is_active]
        workload_data = [self._workload_for(c, today) for c in active]

        def count(status: str) -> int:
            return sum(1 for w in workload_data if w.status == status)

        average = 0
        if workload_data:
            average = round_half_up(
                sum(w.utilization_percent for w in workload_data) / len(workload_data))

        logger.debug("Team workload computed for %d consultants", len(workload_data))

        return TeamWorkloadSummary(
            total_active=len(active),
            available=count(STATUS_AVAILABLE),
            busy=count(STATUS_BUSY),
            at_capacity=count(STATUS_AT_CAPACITY),
            overloaded=count(STATUS_OVERLOADED),
            average_utilization=average,
            total_hours_assigned=sum(w.hours_assigned for w in workload_data),
            total_hours_available=sum(w.monthly_hours_available for w in workload_data),
            workload_data=sorted(workload_data, key=lambda w: w.utilization_percent, reverse=True),
        )

    def service_type_distribution(self) -> ServiceTypeDistribution:
        """
        Count and hours of active engagements per service category.

        RPO contracts are excluded; they are staffed by dedicated teams.
        """
        engagements = [
            e for e in self.source.list_engagements(status=EngagementStatus.ACTIVE)
            if e.service_type != ServiceType.RPO
        ]

        counts = {key: 0 for key in SERVICE_CATEGORIES}
        hours = {key: 0.0 for key in SERVICE_CATEGORIES}
        for engagement in engagements:
            category = self.resolver.category(engagement)
            counts[category] += 1
            hours[category] += self.resolver.resolve(engagement)

        total = sum(counts.values())
        categories = {
            key: CategoryShare(
                count=counts[key],
                hours=hours[key],
                percentage=round_half_up(counts[key] / total * 100) if total else 0,
            )
            for key in SERVICE_CATEGORIES if key != RPO
        }
        return ServiceTypeDistribution(
            categories=categories,
            total=total,
            total_hours=sum(hours.values()),
        )
