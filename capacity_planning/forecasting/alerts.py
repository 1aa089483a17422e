"""
Capacity alerts derived from a forecast.

Each month yields at most one alert; the first matching rule wins:
1. More than two overloaded consultants -> critical
2. Team utilization above 90% -> warning
3. Team utilization below 40% -> info (spare capacity to sell into)
"""

from typing import Iterable, List, Optional

from ..utils import STATUS_OVERLOADED
from .models import CapacityAlert, MonthlyForecast

SEVERITY_CRITICAL = 'critical'
SEVERITY_WARNING = 'warning'
SEVERITY_INFO = 'info'

CRITICAL_OVERLOADED_COUNT = 2
WARNING_UTILIZATION = 90
INFO_UTILIZATION = 40


def alert_for_month(forecast: MonthlyForecast) -> Optional[CapacityAlert]:
    """Return the alert for one month, or None when no rule matches."""
    if forecast.overloaded_consultants > CRITICAL_OVERLOADED_COUNT:
        return CapacityAlert(
            month=forecast.month_label,
            severity=SEVERITY_CRITICAL,
            message=f"{forecast.overloaded_consultants} consultants projected to be overloaded",
            consultants=[
                c.consultant_name for c in forecast.consultant_forecasts
                if c.status == STATUS_OVERLOADED
            ],
        )
    if forecast.team_average_utilization > WARNING_UTILIZATION:
        return CapacityAlert(
            month=forecast.month_label,
            severity=SEVERITY_WARNING,
            message=f"Team utilization projected at {forecast.team_average_utilization}%",
        )
    if forecast.team_average_utilization < INFO_UTILIZATION:
        return CapacityAlert(
            month=forecast.month_label,
            severity=SEVERITY_INFO,
            message=(f"Team utilization projected at {forecast.team_average_utilization}%"
                     " - consider new business"),
        )
    return None


def generate_capacity_alerts(forecasts: Iterable[MonthlyForecast]) -> List[CapacityAlert]:
    """
    Scan a month-ordered forecast series for capacity problems.

    Args:
        forecasts: MonthlyForecast objects in month order

    Returns:
        Alerts in month order, at most one per month
    """
    alerts = []
    for forecast in forecasts:
        alert = alert_for_month(forecast)
        if alert is not None:
            alerts.append(alert)
    return alerts
