"""
Current workload and time-off capacity calculations.
"""

from .calculator import WorkloadCalculator
from .models import TeamWorkloadSummary, TimeOffAdjustment, WorkloadData
from .timeoff import TimeOffCalculator

__all__ = ["WorkloadCalculator", "TimeOffCalculator", "WorkloadData", "TeamWorkloadSummary", "TimeOffAdjustment"]
