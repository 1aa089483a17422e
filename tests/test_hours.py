import pytest

from capacity_planning.engagements.hours import (
    EXECUTIVE_SEARCH_OVER,
    EXECUTIVE_SEARCH_UNDER,
    ServiceHourResolver,
    ServiceHoursConfig,
)
from capacity_planning.engagements.models import EngagementStatus, ServiceType
from capacity_planning.exceptions import ConfigurationError


def test_custom_hours_override_wins_even_when_zero(resolver, make_engagement):
    engagement = make_engagement(service_type=ServiceType.FULL_SERVICE, custom_hours=0.0)
    assert resolver.resolve(engagement) == 0.0

    engagement = make_engagement(service_type=ServiceType.RPO, rpo_dedicated=True, custom_hours=12.0)
    assert resolver.resolve(engagement) == 12.0


def test_dedicated_rpo_costs_no_hours(make_engagement, source):
    config = ServiceHoursConfig({"rpo": 30.0})
    resolver = ServiceHourResolver(config, salary_lookup=source.get_job_max_salary)

    assert resolver.resolve(make_engagement(service_type=ServiceType.RPO, rpo_dedicated=True)) == 0.0
    assert resolver.resolve(make_engagement(service_type=ServiceType.RPO)) == 30.0


def test_formula_lookup_per_type(resolver, make_engagement):
    assert resolver.resolve(make_engagement(service_type=ServiceType.SHORTLISTING)) == 8.0
    assert resolver.resolve(make_engagement(service_type=ServiceType.FULL_SERVICE)) == 24.0
    assert resolver.resolve(make_engagement(service_type=ServiceType.DEFAULT)) == 16.0


def test_executive_search_tiers_on_salary_threshold(resolver, make_engagement, source):
    source.job_salaries = {"senior": 100_000.0, "junior": 99_999.0}

    senior = make_engagement(service_type=ServiceType.EXECUTIVE_SEARCH, job_id="senior")
    junior = make_engagement(service_type=ServiceType.EXECUTIVE_SEARCH, job_id="junior")

    assert resolver.category(senior) == EXECUTIVE_SEARCH_OVER
    assert resolver.resolve(senior) == 54.0
    assert resolver.category(junior) == EXECUTIVE_SEARCH_UNDER
    assert resolver.resolve(junior) == 40.0


def test_executive_search_without_job_falls_back_to_lower_tier(resolver, make_engagement):
    pipeline = make_engagement(service_type=ServiceType.EXECUTIVE_SEARCH,
                               status=EngagementStatus.ON_HOLD)
    unknown_job = make_engagement(service_type=ServiceType.EXECUTIVE_SEARCH, job_id="missing")

    assert resolver.resolve(pipeline) == 40.0
    assert resolver.resolve(unknown_job) == 40.0


def test_config_edits_apply_to_next_lookup(resolver, hours_config, make_engagement):
    engagement = make_engagement(service_type=ServiceType.SHORTLISTING)
    assert resolver.resolve(engagement) == 8.0

    hours_config.update({"shortlisting": 12})

    assert resolver.resolve(engagement) == 12.0


def test_threshold_edit_moves_tier(resolver, hours_config, make_engagement, source):
    source.job_salaries = {"j1": 80_000.0}
    engagement = make_engagement(service_type=ServiceType.EXECUTIVE_SEARCH, job_id="j1")
    assert resolver.resolve(engagement) == 40.0

    hours_config.update(salary_threshold=75_000)

    assert resolver.resolve(engagement) == 54.0


def test_config_rejects_unknown_keys_and_negative_values(hours_config):
    with pytest.raises(ConfigurationError):
        hours_config.update({"retained-search": 10})
    with pytest.raises(ConfigurationError):
        hours_config.update({"shortlisting": -1})
    with pytest.raises(ConfigurationError):
        hours_config.update(salary_threshold=-5)

    assert hours_config.get("shortlisting") == 8.0


@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_config_rejects_non_finite_values(hours_config, value):
    with pytest.raises(ConfigurationError):
        hours_config.update({"full-service": value})
    with pytest.raises(ConfigurationError):
        hours_config.update(salary_threshold=value)

    assert hours_config.get("full-service") == 24.0
    assert hours_config.salary_threshold == 100000
