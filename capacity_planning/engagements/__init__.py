"""
Engagement records and service hour resolution.
"""

from .hours import ServiceHourResolver, ServiceHoursConfig
from .models import (
    BlockoutPeriod,
    Consultant,
    ConsultantStatus,
    EngagementStatus,
    ServiceEngagement,
    ServiceType,
    TimeOffRequest,
    TimeOffStatus,
)

__all__ = [
    "BlockoutPeriod",
    "Consultant",
    "ConsultantStatus",
    "EngagementStatus",
    "ServiceEngagement",
    "ServiceHourResolver",
    "ServiceHoursConfig",
    "ServiceType",
    "TimeOffRequest",
    "TimeOffStatus",
]
