"""
Result models for workload forecasting.

Everything here is derived on demand and safe to discard and recompute.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

import pandas as pd


@dataclass
class HistoricalMetrics:
    """Completion statistics derived from completed engagements."""

    avg_completion_days: float
    avg_completion_rate: float
    total_completed: int
    service_type_metrics: Dict[str, Dict[str, float]]
    duration_mae_days: Optional[float] = None

    def estimated_duration(self, service_type: str) -> float:
        """Average duration for a service type, else the overall average."""
        metrics = self.service_type_metrics.get(service_type)
        if metrics and metrics.get('avg_days'):
            return metrics['avg_days']
        return self.avg_completion_days

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'avg_completion_days': self.avg_completion_days,
            'avg_completion_rate': self.avg_completion_rate,
            'total_completed': self.total_completed,
            'service_type_metrics': {k: dict(v) for k, v in self.service_type_metrics.items()},
            'duration_mae_days': self.duration_mae_days,
        }


@dataclass
class ServiceForecastItem:
    """Hours one engagement contributes to a consultant in a month."""

    id: str
    name: str
    service_type: str
    hours: int
    probability: int
    expected_start: Optional[date] = None
    expected_end: Optional[date] = None

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'service_type': self.service_type,
            'hours': self.hours,
            'probability': self.probability,
            'expected_start': self.expected_start.isoformat() if self.expected_start else None,
            'expected_end': self.expected_end.isoformat() if self.expected_end else None,
        }


@dataclass
class ConsultantMonthForecast:
    """Projected load and capacity for one consultant in one month."""

    consultant_id: str
    consultant_name: str
    hours_assigned: int
    hours_available: float
    adjusted_capacity: float
    time_off_days: float
    time_off_hours: float
    utilization_percent: int
    status: str
    active_services: List[ServiceForecastItem] = field(default_factory=list)
    pipeline_services: List[ServiceForecastItem] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'consultant_id': self.consultant_id,
            'consultant_name': self.consultant_name,
            'hours_assigned': self.hours_assigned,
            'hours_available': self.hours_available,
            'adjusted_capacity': self.adjusted_capacity,
            'time_off_days': self.time_off_days,
            'time_off_hours': self.time_off_hours,
            'utilization_percent': self.utilization_percent,
            'status': self.status,
            'active_services': [s.to_dict() for s in self.active_services],
            'pipeline_services': [s.to_dict() for s in self.pipeline_services],
        }


@dataclass
class MonthlyForecast:
    """Team forecast for a single calendar month."""

    month: date
    month_label: str
    consultant_forecasts: List[ConsultantMonthForecast]
    team_average_utilization: int
    team_total_hours_assigned: int
    team_total_hours_available: float
    overloaded_consultants: int
    at_capacity_consultants: int

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'month': self.month.isoformat(),
            'month_label': self.month_label,
            'consultant_forecasts': [c.to_dict() for c in self.consultant_forecasts],
            'team_average_utilization': self.team_average_utilization,
            'team_total_hours_assigned': self.team_total_hours_assigned,
            'team_total_hours_available': self.team_total_hours_available,
            'overloaded_consultants': self.overloaded_consultants,
            'at_capacity_consultants': self.at_capacity_consultants,
        }


@dataclass
class CapacityAlert:
    """A threshold breach detected in a forecast month."""

    month: str
    severity: str
    message: str
    consultants: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'month': self.month,
            'severity': self.severity,
            'message': self.message,
            'consultants': self.consultants.copy(),
        }


@dataclass
class WorkloadForecast:
    """Result of a multi-month forecasting run."""

    months: List[MonthlyForecast]
    historical_metrics: HistoricalMetrics
    activation_probability: int

    @property
    def peak_month(self) -> Optional[MonthlyForecast]:
        """Month with the highest team utilization."""
        if not self.months:
            return None
        return max(self.months, key=lambda m: m.team_average_utilization)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to one row per consultant and month."""
        rows = []
        for monthly in self.months:
            for forecast in monthly.consultant_forecasts:
                rows.append({
                    'month': monthly.month,
                    'month_label': monthly.month_label,
                    'consultant_id': forecast.consultant_id,
                    'consultant_name': forecast.consultant_name,
                    'hours_assigned': forecast.hours_assigned,
                    'adjusted_capacity': forecast.adjusted_capacity,
                    'hours_available': forecast.hours_available,
                    'time_off_days': forecast.time_off_days,
                    'utilization_percent': forecast.utilization_percent,
                    'status': forecast.status,
                })
        return pd.DataFrame(rows, columns=[
            'month', 'month_label', 'consultant_id', 'consultant_name', 'hours_assigned',
            'adjusted_capacity', 'hours_available', 'time_off_days',
            'utilization_percent', 'status',
        ])

    def get_summary_report(self) -> str:
        """Generate a text summary report."""
        report = []
        report.append("=== WORKLOAD FORECAST SUMMARY ===")
        report.append(f"Months forecast: {len(self.months)}")
        report.append(f"Completed engagements in history: {self.historical_metrics.total_completed}")
        report.append(f"Pipeline activation probability: {self.activation_probability}%")
        report.append("")
        report.append("MONTHLY BREAKDOWN:")
        for monthly in self.months:
            report.append(f"  {monthly.month_label}: {monthly.team_average_utilization}% "
                          f"({monthly.team_total_hours_assigned}/{monthly.team_total_hours_available:.0f} h)")
            if monthly.overloaded_consultants:
                report.append(f"    Overloaded: {monthly.overloaded_consultants}")
            if monthly.at_capacity_consultants:
                report.append(f"    At capacity: {monthly.at_capacity_consultants}")

        return "\n".join(report)

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'months': [m.to_dict() for m in self.months],
            'historical_metrics': self.historical_metrics.to_dict(),
            'activation_probability': self.activation_probability,
        }
