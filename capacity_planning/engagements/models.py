"""
Data models for consultants, service engagements and time-off records.

These records are owned by the surrounding application and are read-only
to the capacity calculators.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from ..exceptions import MalformedEngagementError, MalformedRecordError
from ..utils import inclusive_days, parse_date


class ConsultantStatus(str, Enum):
    ACTIVE = 'active'
    ON_LEAVE = 'on-leave'
    INACTIVE = 'inactive'
    SUSPENDED = 'suspended'


class ServiceType(str, Enum):
    SHORTLISTING = 'shortlisting'
    FULL_SERVICE = 'full-service'
    EXECUTIVE_SEARCH = 'executive-search'
    RPO = 'rpo'
    DEFAULT = 'default'

    @classmethod
    def parse(cls, value) -> 'ServiceType':
        """Parse a raw service type, mapping unknown values to DEFAULT."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.DEFAULT


class EngagementStatus(str, Enum):
    ACTIVE = 'active'
    ON_HOLD = 'on-hold'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'


class TimeOffStatus(str, Enum):
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'
    CANCELLED = 'cancelled'


def _required_id(data: Dict, key: str) -> str:
    value = data[key]
    if value is None or not str(value).strip():
        raise MalformedRecordError(f"Missing {key}")
    return str(value).strip()


def _split_ids(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return [str(v).strip() for v in value if str(v).strip()]
    return [v.strip() for v in str(value).split(',') if v.strip()]


def _optional_float(value) -> Optional[float]:
    if value is None or value == '':
        return None
    number = float(value)
    if number != number:  # NaN from pandas
        return None
    return number


def _flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'y')
    if value is None or value != value:
        return False
    return bool(value)


@dataclass
class Consultant:
    """A recruiting consultant whose time is allocated to engagements."""

    id: str
    first_name: str
    last_name: str
    consultant_type: str = 'recruiter'
    status: ConsultantStatus = ConsultantStatus.ACTIVE
    avatar: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_active(self) -> bool:
        return self.status == ConsultantStatus.ACTIVE

    @classmethod
    def from_dict(cls, data: Dict) -> 'Consultant':
        """Create Consultant instance from dictionary."""
        first_name = data.get('first_name')
        last_name = data.get('last_name')
        if first_name is None and 'name' in data:
            first_name, _, last_name = str(data['name']).partition(' ')
        avatar = data.get('avatar')
        return cls(
            id=_required_id(data, 'id'),
            first_name=str(first_name or ''),
            last_name=str(last_name or ''),
            consultant_type=str(data.get('consultant_type') or 'recruiter'),
            status=ConsultantStatus(str(data.get('status') or 'active').strip().lower()),
            avatar=avatar if isinstance(avatar, str) and avatar else None,
        )

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'id': self.id,
            'name': self.display_name,
            'consultant_type': self.consultant_type,
            'status': self.status.value,
            'avatar': self.avatar,
        }


@dataclass
class ServiceEngagement:
    """
    A billable recruiting service assigned to one or more consultants.

    The deadline is the planned end date. `completed_date` is only set once
    the engagement is completed. `custom_hours` overrides the configured
    hour cost, and `rpo_dedicated` marks RPO contracts staffed by dedicated
    consultants that are tracked as headcount rather than hours.
    """

    id: str
    name: str
    service_type: ServiceType
    status: EngagementStatus
    consultant_ids: List[str]
    start_date: date
    deadline: date
    completed_date: Optional[date] = None
    custom_hours: Optional[float] = None
    job_id: Optional[str] = None
    rpo_dedicated: bool = False

    def __post_init__(self):
        if self.deadline < self.start_date:
            raise MalformedEngagementError(
                "Engagement deadline precedes its start date",
                {'engagement_id': self.id, 'start_date': self.start_date.isoformat(),
                 'deadline': self.deadline.isoformat()},
            )
        if self.completed_date is not None and self.completed_date < self.start_date:
            raise MalformedEngagementError(
                "Engagement completion date precedes its start date",
                {'engagement_id': self.id, 'start_date': self.start_date.isoformat(),
                 'completed_date': self.completed_date.isoformat()},
            )

    @property
    def duration_days(self) -> int:
        """Planned span in days, start and deadline included."""
        return inclusive_days(self.start_date, self.deadline)

    def is_assigned_to(self, consultant_id: str) -> bool:
        return consultant_id in self.consultant_ids

    @classmethod
    def from_dict(cls, data: Dict) -> 'ServiceEngagement':
        """Create ServiceEngagement instance from dictionary."""
        job_id = data.get('job_id')
        if job_id is not None and job_id == job_id and str(job_id).strip():
            job_id = str(job_id).strip()
        else:
            job_id = None
        return cls(
            id=_required_id(data, 'id'),
            name=str(data.get('name') or data['id']),
            service_type=ServiceType.parse(data.get('service_type', 'default')),
            status=EngagementStatus(str(data['status']).strip().lower()),
            consultant_ids=_split_ids(data.get('consultant_ids')),
            start_date=parse_date(data['start_date']),
            deadline=parse_date(data['deadline']),
            completed_date=parse_date(data.get('completed_date')),
            custom_hours=_optional_float(data.get('custom_hours')),
            job_id=job_id,
            rpo_dedicated=_flag(data.get('rpo_dedicated')),
        )

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'id': self.id,
            'name': self.name,
            'service_type': self.service_type.value,
            'status': self.status.value,
            'consultant_ids': self.consultant_ids.copy(),
            'start_date': self.start_date.isoformat(),
            'deadline': self.deadline.isoformat(),
            'completed_date': self.completed_date.isoformat() if self.completed_date else None,
            'custom_hours': self.custom_hours,
            'job_id': self.job_id,
            'rpo_dedicated': self.rpo_dedicated,
        }


@dataclass
class TimeOffRequest:
    """A leave request; only approved requests reduce capacity."""

    id: str
    consultant_id: str
    leave_type: str
    start_date: date
    end_date: date
    status: TimeOffStatus = TimeOffStatus.PENDING
    is_half_day: bool = False

    def __post_init__(self):
        if self.end_date < self.start_date:
            raise MalformedRecordError(
                "Time-off request ends before it starts",
                {'request_id': self.id, 'start_date': self.start_date.isoformat(),
                 'end_date': self.end_date.isoformat()},
            )

    @property
    def total_days(self) -> float:
        if self.is_half_day:
            return 0.5
        return float(inclusive_days(self.start_date, self.end_date))

    @property
    def is_approved(self) -> bool:
        return self.status == TimeOffStatus.APPROVED

    @classmethod
    def from_dict(cls, data: Dict) -> 'TimeOffRequest':
        """Create TimeOffRequest instance from dictionary."""
        return cls(
            id=_required_id(data, 'id'),
            consultant_id=_required_id(data, 'consultant_id'),
            leave_type=str(data.get('leave_type') or 'vacation'),
            start_date=parse_date(data['start_date']),
            end_date=parse_date(data['end_date']),
            status=TimeOffStatus(str(data.get('status') or 'pending').strip().lower()),
            is_half_day=_flag(data.get('is_half_day')),
        )

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'id': self.id,
            'consultant_id': self.consultant_id,
            'leave_type': self.leave_type,
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'status': self.status.value,
            'is_half_day': self.is_half_day,
            'total_days': self.total_days,
        }


@dataclass
class BlockoutPeriod:
    """An organisation leave freeze. Constrains new requests, never capacity."""

    id: str
    name: str
    start_date: date
    end_date: date
    applies_to_all: bool = True
    consultant_ids: List[str] = field(default_factory=list)
    is_active: bool = True

    def covers(self, on_date: date, consultant_id: str) -> bool:
        if not self.is_active or not (self.start_date <= on_date <= self.end_date):
            return False
        return self.applies_to_all or consultant_id in self.consultant_ids

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'id': self.id,
            'name': self.name,
            'start_date': self.start_date.isoformat(),
            'end_date': self.end_date.isoformat(),
            'applies_to_all': self.applies_to_all,
            'consultant_ids': self.consultant_ids.copy(),
            'is_active': self.is_active,
        }
