"""
Historical completion metrics.

Derived fresh from every completed engagement on each call. The forecast
uses the per-type averages to estimate how long a pipeline engagement
will run once it activates.
"""

import logging
from typing import Iterable

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error

from ..engagements.models import EngagementStatus, ServiceEngagement
from ..sources import CapacityDataSource
from .models import HistoricalMetrics

logger = logging.getLogger(__name__)

DEFAULT_AVG_COMPLETION_DAYS = 30.0
DEFAULT_SERVICE_TYPE_DAYS = {
    'shortlisting': 7.0,
    'full-service': 21.0,
    'executive-search': 45.0,
    'rpo': 180.0,
}


def default_metrics() -> HistoricalMetrics:
    """Conservative estimates used when nothing has been completed yet."""
    return HistoricalMetrics(
        avg_completion_days=DEFAULT_AVG_COMPLETION_DAYS,
        avg_completion_rate=1.0,
        total_completed=0,
        service_type_metrics={
            service_type: {'avg_days': days, 'count': 0}
            for service_type, days in DEFAULT_SERVICE_TYPE_DAYS.items()
        },
    )


def metrics_from_engagements(engagements: Iterable[ServiceEngagement]) -> HistoricalMetrics:
    """
    Aggregate completion statistics over engagements.

    Only engagements with status completed and a completion date are used.

    Args:
        engagements: Candidate engagements, in any status

    Returns:
        HistoricalMetrics, or the fixed defaults when none are completed
    """
    completed = [
        e for e in engagements
        if e.status == EngagementStatus.COMPLETED and e.completed_date is not None
    ]
    if not completed:
        return default_metrics()

    data = pd.DataFrame({
        'service_type': [e.service_type.value for e in completed],
        'actual_days': [(e.completed_date - e.start_date).days for e in completed],
        'expected_days': [(e.deadline - e.start_date).days for e in completed],
    })
    # Same-day deadlines would divide by zero
    data['completion_rate'] = data['actual_days'] / data['expected_days'].clip(lower=1)

    by_type = data.groupby('service_type')['actual_days'].agg(['mean', 'count'])
    service_type_metrics = {
        service_type: {'avg_days': float(row['mean']), 'count': int(row['count'])}
        for service_type, row in by_type.iterrows()
    }

    mae = mean_absolute_error(data['expected_days'], data['actual_days'])

    return HistoricalMetrics(
        avg_completion_days=float(np.mean(data['actual_days'])),
        avg_completion_rate=float(np.mean(data['completion_rate'])),
        total_completed=len(completed),
        service_type_metrics=service_type_metrics,
        duration_mae_days=float(mae),
    )


def calculate_historical_metrics(source: CapacityDataSource) -> HistoricalMetrics:
    """Read completed engagements from the data source and aggregate them."""
    completed = source.list_engagements(status=EngagementStatus.COMPLETED)
    metrics = metrics_from_engagements(completed)
    logger.debug("Historical metrics from %d completed engagements", metrics.total_completed)
    return metrics
