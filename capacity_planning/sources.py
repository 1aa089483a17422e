"""
Data source contract for the capacity calculators.

The calculators never own storage. They read a fresh snapshot of
consultants, engagements and time-off through a `CapacityDataSource` on
every call. `InMemoryDataSource` is the implementation used by the API and
the tests; it can be populated from pandas DataFrames read from CSV.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Protocol

import pandas as pd

from .engagements.models import (
    BlockoutPeriod,
    Consultant,
    EngagementStatus,
    ServiceEngagement,
    TimeOffRequest,
    TimeOffStatus,
)
from .exceptions import MalformedRecordError

logger = logging.getLogger(__name__)


class CapacityDataSource(Protocol):
    """Read-only view of the records the capacity core depends on."""

    def list_consultants(self) -> List[Consultant]:
        ...

    def list_engagements(self,
                         status: Optional[EngagementStatus] = None,
                         consultant_id: Optional[str] = None) -> List[ServiceEngagement]:
        ...

    def list_time_off(self,
                      consultant_id: Optional[str] = None,
                      status: Optional[TimeOffStatus] = None) -> List[TimeOffRequest]:
        ...

    def list_blockouts(self) -> List[BlockoutPeriod]:
        ...

    def get_job_max_salary(self, job_id: str) -> Optional[float]:
        ...


ID_COLUMNS = ('id', 'consultant_id', 'consultant_ids', 'job_id')


def _is_missing(value) -> bool:
    return pd.api.types.is_scalar(value) and pd.isna(value)


def _id_text(value) -> Optional[str]:
    """
    Render an identifier cell as text.

    pandas reads a numeric ID column containing blanks as float, so 101
    arrives as 101.0; integral floats are written back without the fraction.
    """
    if _is_missing(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = str(value).strip()
    return text or None


def _clean_row(row: Dict) -> Dict:
    """Replace NaN/NaT cells with None and normalise identifier columns."""
    cleaned = {}
    for key, value in row.items():
        if key in ID_COLUMNS:
            cleaned[key] = _id_text(value)
        else:
            cleaned[key] = None if _is_missing(value) else value
    return cleaned


def _records_from_frame(df: pd.DataFrame,
                        required_columns: List[str],
                        parser: Callable[[Dict], object],
                        kind: str) -> list:
    """Parse DataFrame rows into records, skipping rows that fail validation."""
    missing_cols = [col for col in required_columns if col not in df.columns]
    if missing_cols:
        raise ValueError(f"Missing required columns: {missing_cols}")

    records = []
    for index, row in df.astype(object).iterrows():
        try:
            records.append(parser(_clean_row(row.to_dict())))
        except (KeyError, TypeError, ValueError, MalformedRecordError) as exc:
            logger.warning("Skipping malformed %s row %s: %s", kind, index, exc)
    return records


class InMemoryDataSource:
    """
    List-backed data source.

    Queries return new lists on each call, so callers may filter or sort
    the results freely.
    """

    CONSULTANT_COLUMNS = ['id', 'first_name', 'last_name', 'status']
    ENGAGEMENT_COLUMNS = ['id', 'service_type', 'status', 'consultant_ids', 'start_date', 'deadline']
    TIME_OFF_COLUMNS = ['id', 'consultant_id', 'start_date', 'end_date', 'status']
    JOB_COLUMNS = ['job_id', 'salary_max']

    def __init__(self,
                 consultants: Optional[Iterable[Consultant]] = None,
                 engagements: Optional[Iterable[ServiceEngagement]] = None,
                 time_off: Optional[Iterable[TimeOffRequest]] = None,
                 blockouts: Optional[Iterable[BlockoutPeriod]] = None,
                 job_salaries: Optional[Dict[str, float]] = None):
        self.consultants = list(consultants or [])
        self.engagements = list(engagements or [])
        self.time_off = list(time_off or [])
        self.blockouts = list(blockouts or [])
        self.job_salaries = dict(job_salaries or {})

    def list_consultants(self) -> List[Consultant]:
        return list(self.consultants)

    def list_engagements(self,
                         status: Optional[EngagementStatus] = None,
                         consultant_id: Optional[str] = None) -> List[ServiceEngagement]:
        engagements = self.engagements
        if status is not None:
            engagements = [e for e in engagements if e.status == status]
        if consultant_id is not None:
            engagements = [e for e in engagements if e.is_assigned_to(consultant_id)]
        return list(engagements)

    def list_time_off(self,
                      consultant_id: Optional[str] = None,
                      status: Optional[TimeOffStatus] = None) -> List[TimeOffRequest]:
        requests = self.time_off
        if consultant_id is not None:
            requests = [r for r in requests if r.consultant_id == consultant_id]
        if status is not None:
            requests = [r for r in requests if r.status == status]
        return list(requests)

    def list_blockouts(self) -> List[BlockoutPeriod]:
        return list(self.blockouts)

    def get_job_max_salary(self, job_id: str) -> Optional[float]:
        return self.job_salaries.get(job_id)

    def load_consultants(self, df: pd.DataFrame) -> int:
        """
        Replace consultants with the rows of a DataFrame.

        Args:
            df: DataFrame with columns ['id', 'first_name', 'last_name', 'status']

        Returns:
            Number of consultants loaded
        """
        self.consultants = _records_from_frame(
            df, self.CONSULTANT_COLUMNS, Consultant.from_dict, 'consultant')
        return len(self.consultants)

    def load_engagements(self, df: pd.DataFrame) -> int:
        """
        Replace engagements with the rows of a DataFrame.

        Args:
            df: DataFrame with at least ['id', 'service_type', 'status',
                'consultant_ids', 'start_date', 'deadline']; `consultant_ids`
                is comma separated

        Returns:
            Number of engagements loaded
        """
        self.engagements = _records_from_frame(
            df, self.ENGAGEMENT_COLUMNS, ServiceEngagement.from_dict, 'engagement')
        return len(self.engagements)

    def load_time_off(self, df: pd.DataFrame) -> int:
        """Replace time-off requests with the rows of a DataFrame."""
        self.time_off = _records_from_frame(
            df, self.TIME_OFF_COLUMNS, TimeOffRequest.from_dict, 'time-off')
        return len(self.time_off)

    def load_jobs(self, df: pd.DataFrame) -> int:
        """Replace the job salary table from ['job_id', 'salary_max'] rows."""
        missing_cols = [col for col in self.JOB_COLUMNS if col not in df.columns]
        if missing_cols:
            raise ValueError(f"Missing required columns: {missing_cols}")
        salaries = {}
        for job_id, salary in zip(df['job_id'].astype(object), df['salary_max']):
            key = _id_text(job_id)
            if key is not None and pd.notna(salary):
                salaries[key] = float(salary)
        self.job_salaries = salaries
        return len(self.job_salaries)
