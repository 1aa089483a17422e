from datetime import date, timedelta

import pytest

from capacity_planning.engagements.models import ConsultantStatus, EngagementStatus, ServiceType
from capacity_planning.forecasting.engine import WorkloadForecastEngine


@pytest.fixture
def engine(source, resolver):
    return WorkloadForecastEngine(source, resolver)


def month(forecast, index):
    return forecast.months[index].consultant_forecasts[0]


def test_default_horizon_is_six_months_from_current_month(engine, source, make_consultant, today):
    source.consultants = [make_consultant()]

    forecast = engine.forecast(today=today)

    assert [m.month_label for m in forecast.months] == [
        "October 2026", "November 2026", "December 2026",
        "January 2027", "February 2027", "March 2027",
    ]
    assert forecast.months[3].month == date(2027, 1, 1)


def test_idle_consultant_is_available_every_month(engine, source, make_consultant, today):
    source.consultants = [make_consultant()]

    forecast = engine.forecast(months=3, today=today)

    for monthly in forecast.months:
        consultant = monthly.consultant_forecasts[0]
        assert consultant.hours_assigned == 0
        assert consultant.utilization_percent == 0
        assert consultant.status == "available"
        assert consultant.adjusted_capacity == 160


def test_shortlisting_spanning_the_month(engine, source, make_consultant, make_engagement, today):
    source.consultants = [make_consultant()]
    source.engagements = [make_engagement(service_type=ServiceType.SHORTLISTING)]

    october = month(engine.forecast(months=2, today=today), 0)

    assert october.hours_assigned == 8
    assert october.adjusted_capacity == 160
    assert october.utilization_percent == 5
    assert october.status == "available"
    assert october.active_services[0].probability == 100


def test_heavy_active_load_is_overloaded(engine, source, make_consultant, make_engagement, today):
    source.consultants = [make_consultant()]
    source.engagements = [make_engagement(custom_hours=170.0)]

    october = month(engine.forecast(months=1, today=today), 0)

    assert october.hours_assigned == 170
    assert october.utilization_percent == 106
    assert october.status == "overloaded"
    assert october.hours_available == 0


def test_active_hours_apportioned_across_months(engine, source, make_consultant,
                                                make_engagement, today):
    source.consultants = [make_consultant()]
    source.engagements = [make_engagement(custom_hours=60.0, start_date=date(2026, 10, 16),
                                          deadline=date(2026, 11, 14))]

    forecast = engine.forecast(months=3, today=today)

    assert month(forecast, 0).hours_assigned == 32
    assert month(forecast, 1).hours_assigned == 28
    assert month(forecast, 2).hours_assigned == 0
    assert month(forecast, 2).active_services[0].hours == 0


def test_pipeline_executive_search_without_job(engine, source, resolver, make_consultant,
                                               make_engagement, today):
    source.consultants = [make_consultant()]
    pipeline = make_engagement(service_type=ServiceType.EXECUTIVE_SEARCH,
                               status=EngagementStatus.ON_HOLD)
    source.engagements = [pipeline]

    october = month(engine.forecast(months=1, today=today), 0)

    assert resolver.resolve(pipeline) == 40
    # 40 hours over the 45-day default duration, 30 days credited, 60% likely
    assert october.pipeline_services[0].probability == 60
    assert october.pipeline_services[0].hours == 16
    assert october.hours_assigned == 16


def test_pipeline_ignores_its_own_dates(engine, source, make_consultant, make_engagement, today):
    source.consultants = [make_consultant()]
    source.engagements = [make_engagement(service_type=ServiceType.FULL_SERVICE,
                                          status=EngagementStatus.ON_HOLD,
                                          start_date=date(2027, 6, 1),
                                          deadline=date(2027, 6, 30))]

    forecast = engine.forecast(months=2, today=today)

    # 24 hours over the 21-day default, 30 days -> 34, at 60% -> 20
    assert month(forecast, 0).hours_assigned == 20
    assert month(forecast, 1).hours_assigned == 20


def test_pipeline_duration_uses_history(engine, source, make_consultant, make_engagement, today):
    source.consultants = [make_consultant()]
    start = date(2026, 1, 1)
    source.engagements = [
        make_engagement(service_type=ServiceType.FULL_SERVICE, status=EngagementStatus.COMPLETED,
                        consultant_ids=["c9"], start_date=start,
                        deadline=start + timedelta(days=60), completed_date=start + timedelta(days=60)),
        make_engagement(service_type=ServiceType.FULL_SERVICE, status=EngagementStatus.ON_HOLD,
                        custom_hours=100.0),
    ]

    forecast = engine.forecast(months=1, today=today)

    assert forecast.historical_metrics.total_completed == 1
    # 100 hours over 60 days, 30 days -> 50, at 60% -> 30
    assert month(forecast, 0).hours_assigned == 30


def test_activation_probability_is_configurable(source, resolver, make_consultant,
                                                make_engagement, today):
    source.consultants = [make_consultant()]
    source.engagements = [make_engagement(service_type=ServiceType.FULL_SERVICE,
                                          status=EngagementStatus.ON_HOLD, custom_hours=30.0)]
    engine = WorkloadForecastEngine(source, resolver, activation_probability=100)

    october = month(engine.forecast(months=1, today=today), 0)

    assert october.pipeline_services[0].probability == 100
    assert october.hours_assigned == 43


def test_leave_only_reduces_its_own_month(engine, source, make_consultant, make_time_off, today):
    source.consultants = [make_consultant()]
    source.time_off = [make_time_off(date(2026, 11, 2), date(2026, 11, 16))]

    forecast = engine.forecast(months=3, today=today)

    assert month(forecast, 0).adjusted_capacity == 160
    november = month(forecast, 1)
    assert november.time_off_days == 15
    assert november.time_off_hours == 120
    assert november.adjusted_capacity == 40
    assert month(forecast, 2).adjusted_capacity == 160


def test_fully_booked_month_has_zero_utilization(engine, source, make_consultant,
                                                 make_engagement, make_time_off, today):
    source.consultants = [make_consultant()]
    source.engagements = [make_engagement(custom_hours=90.0)]
    source.time_off = [make_time_off(date(2026, 10, 1), date(2026, 10, 31))]

    october = month(engine.forecast(months=1, today=today), 0)

    assert october.adjusted_capacity == 0
    assert october.hours_assigned == 90
    assert october.utilization_percent == 0
    assert october.status == "available"


def test_team_aggregates_are_hours_weighted(engine, source, make_consultant, make_engagement,
                                            make_time_off, today):
    source.consultants = [
        make_consultant("c1", "Sarah", "Johnson"),
        make_consultant("c2", "David", "Martinez"),
        make_consultant("c3", "Gone", "Away", status=ConsultantStatus.SUSPENDED),
    ]
    source.engagements = [
        make_engagement(consultant_ids=["c1"], custom_hours=80.0),
        make_engagement(consultant_ids=["c2"], custom_hours=40.0),
    ]
    source.time_off = [make_time_off(date(2026, 10, 5), date(2026, 10, 19), consultant_id="c2")]

    october = engine.forecast(months=1, today=today).months[0]

    assert len(october.consultant_forecasts) == 2
    assert october.team_total_hours_assigned == 120
    assert october.team_total_hours_available == 200
    assert october.team_average_utilization == 60
    assert october.at_capacity_consultants == 1
    assert october.overloaded_consultants == 0


def test_forecast_exports(engine, source, make_consultant, make_engagement, today):
    source.consultants = [make_consultant("c1"), make_consultant("c2", "David", "Martinez")]
    source.engagements = [make_engagement()]

    forecast = engine.forecast(months=4, today=today)
    df = forecast.to_dataframe()

    assert len(df) == 8
    assert set(df["consultant_name"]) == {"Sarah Johnson", "David Martinez"}
    assert "October 2026" in forecast.get_summary_report()
    assert forecast.to_dict()["activation_probability"] == 60


def test_invalid_horizon_and_probability_rejected(source, resolver, today):
    with pytest.raises(ValueError):
        WorkloadForecastEngine(source, resolver).forecast(months=0, today=today)
    with pytest.raises(ValueError):
        WorkloadForecastEngine(source, resolver, activation_probability=120)
