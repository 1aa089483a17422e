"""
Service hour resolution.

Maps a service engagement to the number of labor hours it consumes. An
explicit override wins, dedicated RPO contracts cost no hourly capacity,
and everything else is looked up in an editable `ServiceHoursConfig`.
"""

import logging
import math
from typing import Callable, Dict, Optional

from ..config import EXECUTIVE_SEARCH_SALARY_THRESHOLD, Settings
from ..exceptions import ConfigurationError
from .models import ServiceEngagement, ServiceType

logger = logging.getLogger(__name__)

SHORTLISTING = 'shortlisting'
FULL_SERVICE = 'full-service'
EXECUTIVE_SEARCH_UNDER = 'executive-search-under-threshold'
EXECUTIVE_SEARCH_OVER = 'executive-search-over-threshold'
RPO = 'rpo'
DEFAULT = 'default'

SERVICE_CATEGORIES = [
    SHORTLISTING,
    FULL_SERVICE,
    EXECUTIVE_SEARCH_UNDER,
    EXECUTIVE_SEARCH_OVER,
    RPO,
    DEFAULT,
]

DEFAULT_SERVICE_HOURS = {
    SHORTLISTING: 8.0,
    FULL_SERVICE: 24.0,
    EXECUTIVE_SEARCH_UNDER: 40.0,
    EXECUTIVE_SEARCH_OVER: 54.0,
    RPO: 0.0,
    DEFAULT: 16.0,
}

SalaryLookup = Callable[[str], Optional[float]]


class ServiceHoursConfig:
    """
    Mutable table of default hours per service category.

    Executive search is split into two tiers by `salary_threshold`: jobs
    whose maximum salary is at or above the threshold use the
    over-threshold hours.
    """

    def __init__(self,
                 hours: Optional[Dict[str, float]] = None,
                 salary_threshold: float = EXECUTIVE_SEARCH_SALARY_THRESHOLD):
        self._hours = dict(DEFAULT_SERVICE_HOURS)
        self.salary_threshold = float(salary_threshold)
        if hours:
            self.update(hours)

    @classmethod
    def from_settings(cls, settings: Settings) -> 'ServiceHoursConfig':
        return cls(salary_threshold=settings.SALARY_THRESHOLD)

    def get(self, category: str) -> float:
        return self._hours.get(category, self._hours[DEFAULT])

    def update(self,
               hours: Optional[Dict[str, float]] = None,
               salary_threshold: Optional[float] = None) -> None:
        """
        Edit the table in place.

        Args:
            hours: Mapping of category key to hours; unspecified keys keep their value
            salary_threshold: New executive-search salary cutoff

        Raises:
            ConfigurationError: On unknown keys, negative or non-finite values
        """
        hours = hours or {}
        unknown = [key for key in hours if key not in SERVICE_CATEGORIES]
        if unknown:
            raise ConfigurationError(
                f"Unknown service categories: {unknown}",
                {'allowed': SERVICE_CATEGORIES},
            )
        validated = {}
        for key, value in hours.items():
            try:
                number = float(value)
            except (TypeError, ValueError):
                raise ConfigurationError(f"Hours for {key} must be a number", {'value': value})
            if not math.isfinite(number) or number < 0:
                raise ConfigurationError(f"Hours for {key} must be a finite, non-negative number",
                                         {'value': number})
            validated[key] = number
        if salary_threshold is not None:
            salary_threshold = float(salary_threshold)
            if not math.isfinite(salary_threshold) or salary_threshold < 0:
                raise ConfigurationError("Salary threshold must be a finite, non-negative number",
                                         {'value': salary_threshold})

        self._hours.update(validated)
        if salary_threshold is not None:
            self.salary_threshold = salary_threshold
        logger.info("Service hours updated: %s (threshold %.0f)", validated, self.salary_threshold)

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'hours': dict(self._hours),
            'salary_threshold': self.salary_threshold,
        }


class ServiceHourResolver:
    """
    Resolves the hour cost of an engagement against a live config table.

    The config is read on every call, so edits made through
    `ServiceHoursConfig.update` apply to the next resolution.
    """

    def __init__(self,
                 config: ServiceHoursConfig,
                 salary_lookup: Optional[SalaryLookup] = None):
        """
        Initialize resolver.

        Args:
            config: Service hours table to read from
            salary_lookup: Returns the maximum salary for a job id, or None
        """
        self.config = config
        self.salary_lookup = salary_lookup

    def _job_max_salary(self, engagement: ServiceEngagement) -> Optional[float]:
        if not engagement.job_id or self.salary_lookup is None:
            return None
        return self.salary_lookup(engagement.job_id)

    def category(self, engagement: ServiceEngagement) -> str:
        """Breakdown key for an engagement, with executive search split into tiers."""
        service_type = engagement.service_type
        if service_type == ServiceType.EXECUTIVE_SEARCH:
            salary_max = self._job_max_salary(engagement)
            if salary_max is not None and salary_max >= self.config.salary_threshold:
                return EXECUTIVE_SEARCH_OVER
            return EXECUTIVE_SEARCH_UNDER
        if service_type.value in SERVICE_CATEGORIES:
            return service_type.value
        return DEFAULT

    def resolve(self, engagement: ServiceEngagement) -> float:
        """
        Hours attributed to an engagement.

        Args:
            engagement: Engagement to cost

        Returns:
            The explicit override if set, 0 for dedicated RPO contracts,
            otherwise the configured default for its category
        """
        if engagement.custom_hours is not None:
            return engagement.custom_hours

        if engagement.service_type == ServiceType.RPO and engagement.rpo_dedicated:
            return 0.0

        return self.config.get(self.category(engagement))
