"""
Result models for present-tense workload calculations.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

import pandas as pd

from ..engagements.models import TimeOffRequest


@dataclass
class TimeOffAdjustment:
    """Current-month capacity after approved leave."""

    baseline_hours: float
    time_off_days: float
    time_off_hours: float
    adjusted_hours_available: float
    upcoming_time_off: List[TimeOffRequest] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'baseline_hours': self.baseline_hours,
            'time_off_days': self.time_off_days,
            'time_off_hours': self.time_off_hours,
            'adjusted_hours_available': self.adjusted_hours_available,
            'upcoming_time_off': [r.to_dict() for r in self.upcoming_time_off],
        }


@dataclass
class ActiveServiceItem:
    """An active engagement contributing to a consultant's current load."""

    id: str
    name: str
    service_type: str
    hours: float
    expected_completion: date

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'service_type': self.service_type,
            'hours': self.hours,
            'expected_completion': self.expected_completion.isoformat(),
        }


@dataclass
class WorkloadData:
    """Utilization snapshot for one consultant."""

    consultant_id: str
    consultant_name: str
    consultant_type: str
    consultant_status: str
    avatar: Optional[str]
    monthly_hours_available: float
    hours_assigned: float
    hours_remaining: float
    utilization_percent: int
    status: str
    service_hours_breakdown: Dict[str, float]
    service_count_breakdown: Dict[str, int]
    active_services: List[ActiveServiceItem]
    time_off_adjustment: TimeOffAdjustment

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'consultant_id': self.consultant_id,
            'consultant_name': self.consultant_name,
            'consultant_type': self.consultant_type,
            'consultant_status': self.consultant_status,
            'avatar': self.avatar,
            'monthly_hours_available': self.monthly_hours_available,
            'hours_assigned': self.hours_assigned,
            'hours_remaining': self.hours_remaining,
            'utilization_percent': self.utilization_percent,
            'status': self.status,
            'service_hours_breakdown': dict(self.service_hours_breakdown),
            'service_count_breakdown': dict(self.service_count_breakdown),
            'active_services': [s.to_dict() for s in self.active_services],
            'time_off_adjustment': self.time_off_adjustment.to_dict(),
        }


@dataclass
class TeamWorkloadSummary:
    """Rollup of current workload across all active consultants."""

    total_active: int
    available: int
    busy: int
    at_capacity: int
    overloaded: int
    average_utilization: int
    total_hours_assigned: float
    total_hours_available: float
    workload_data: List[WorkloadData]

    def to_dataframe(self) -> pd.DataFrame:
        """One row per consultant, ordered by utilization."""
        return pd.DataFrame([
            {
                'consultant_id': w.consultant_id,
                'consultant_name': w.consultant_name,
                'hours_assigned': w.hours_assigned,
                'monthly_hours_available': w.monthly_hours_available,
                'hours_remaining': w.hours_remaining,
                'utilization_percent': w.utilization_percent,
                'status': w.status,
            }
            for w in self.workload_data
        ])

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'total_active': self.total_active,
            'available': self.available,
            'busy': self.busy,
            'at_capacity': self.at_capacity,
            'overloaded': self.overloaded,
            'average_utilization': self.average_utilization,
            'total_hours_assigned': self.total_hours_assigned,
            'total_hours_available': self.total_hours_available,
            'workload_data': [w.to_dict() for w in self.workload_data],
        }


@dataclass
class CategoryShare:
    count: int
    hours: float
    percentage: int

    def to_dict(self) -> Dict:
        return {'count': self.count, 'hours': self.hours, 'percentage': self.percentage}


@dataclass
class ServiceTypeDistribution:
    """Active non-RPO engagements grouped by service category."""

    categories: Dict[str, CategoryShare]
    total: int
    total_hours: float

    def to_dict(self) -> Dict:
        return {
            'categories': {key: share.to_dict() for key, share in self.categories.items()},
            'total': self.total,
            'total_hours': self.total_hours,
        }
