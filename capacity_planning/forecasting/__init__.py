"""
Forecasting module for multi-month consultant workload.
"""

from .alerts import generate_capacity_alerts
from .engine import WorkloadForecastEngine
from .history import calculate_historical_metrics
from .models import CapacityAlert, HistoricalMetrics, MonthlyForecast, WorkloadForecast

__all__ = [
    "WorkloadForecastEngine",
    "WorkloadForecast",
    "MonthlyForecast",
    "HistoricalMetrics",
    "CapacityAlert",
    "calculate_historical_metrics",
    "generate_capacity_alerts",
]
