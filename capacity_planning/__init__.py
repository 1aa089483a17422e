"""
Consultant Capacity Planning

Utilization snapshots, multi-month workload forecasts and capacity alerts
for recruiting consultants.
"""



from .engagements.hours import ServiceHourResolver, ServiceHoursConfig
from .engagements.models import Consultant, ServiceEngagement, TimeOffRequest
from .forecasting.alerts import generate_capacity_alerts
from .forecasting.engine import WorkloadForecastEngine
from .sources import CapacityDataSource, InMemoryDataSource
from .workload.calculator import WorkloadCalculator

__all__ = [
    "CapacityDataSource",
    "Consultant",
    "InMemoryDataSource",
    "ServiceEngagement",
    "ServiceHourResolver",
    "ServiceHoursConfig",
    "TimeOffRequest",
    "WorkloadCalculator",
    "WorkloadForecastEngine",
    "generate_capacity_alerts",
]
