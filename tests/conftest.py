from datetime import date

import pytest

from capacity_planning.engagements.hours import ServiceHourResolver, ServiceHoursConfig
from capacity_planning.engagements.models import (
    Consultant,
    ConsultantStatus,
    EngagementStatus,
    ServiceEngagement,
    ServiceType,
    TimeOffRequest,
    TimeOffStatus,
)
from capacity_planning.sources import InMemoryDataSource

TODAY = date(2026, 10, 15)
OCTOBER_START = date(2026, 10, 1)
OCTOBER_END = date(2026, 10, 31)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def make_consultant():
    def _make(consultant_id="c1", first_name="Sarah", last_name="Johnson",
              status=ConsultantStatus.ACTIVE):
        return Consultant(id=consultant_id, first_name=first_name, last_name=last_name,
                          status=status)
    return _make


@pytest.fixture
def make_engagement():
    counter = {"n": 0}

    def _make(consultant_ids=("c1",), service_type=ServiceType.SHORTLISTING,
              status=EngagementStatus.ACTIVE, start_date=OCTOBER_START,
              deadline=OCTOBER_END, **kwargs):
        counter["n"] += 1
        return ServiceEngagement(
            id=kwargs.pop("id", f"e{counter['n']}"),
            name=kwargs.pop("name", f"Engagement {counter['n']}"),
            service_type=service_type,
            status=status,
            consultant_ids=list(consultant_ids),
            start_date=start_date,
            deadline=deadline,
            **kwargs,
        )
    return _make


@pytest.fixture
def make_time_off():
    counter = {"n": 0}

    def _make(start_date, end_date, consultant_id="c1", status=TimeOffStatus.APPROVED,
              is_half_day=False):
        counter["n"] += 1
        return TimeOffRequest(
            id=f"t{counter['n']}",
            consultant_id=consultant_id,
            leave_type="vacation",
            start_date=start_date,
            end_date=end_date,
            status=status,
            is_half_day=is_half_day,
        )
    return _make


@pytest.fixture
def hours_config():
    return ServiceHoursConfig()


@pytest.fixture
def source():
    return InMemoryDataSource()


@pytest.fixture
def resolver(hours_config, source):
    return ServiceHourResolver(hours_config, salary_lookup=source.get_job_max_salary)
