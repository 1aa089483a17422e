from datetime import date

import pytest

from capacity_planning.utils import (
    add_months,
    classify_utilization,
    month_bounds,
    month_label,
    overlap_days,
    parse_date,
    round_half_up,
    utilization_percent,
)


@pytest.mark.parametrize("percent,expected", [
    (0, "available"),
    (60, "available"),
    (61, "busy"),
    (85, "busy"),
    (86, "at-capacity"),
    (100, "at-capacity"),
    (101, "overloaded"),
    (250, "overloaded"),
])
def test_classify_utilization_boundaries(percent, expected):
    assert classify_utilization(percent) == expected


def test_utilization_is_zero_without_capacity():
    assert utilization_percent(120, 0) == 0
    assert utilization_percent(0, 0) == 0


def test_utilization_percent_ratio():
    assert utilization_percent(8, 160) == pytest.approx(5.0)
    assert utilization_percent(170, 160) == pytest.approx(106.25)


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.49) == 2


def test_month_helpers():
    assert month_bounds(date(2028, 2, 10)) == (date(2028, 2, 1), date(2028, 2, 29))
    assert add_months(date(2026, 11, 20), 3) == date(2027, 2, 1)
    assert month_label(date(2026, 10, 1)) == "October 2026"


def test_overlap_days_inclusive():
    oct_start, oct_end = date(2026, 10, 1), date(2026, 10, 31)
    assert overlap_days(date(2026, 10, 5), date(2026, 10, 5), oct_start, oct_end) == 1
    assert overlap_days(date(2026, 9, 25), date(2026, 10, 2), oct_start, oct_end) == 2
    assert overlap_days(date(2026, 11, 1), date(2026, 11, 3), oct_start, oct_end) == 0


def test_parse_date_accepts_common_inputs():
    assert parse_date("2026-10-15") == date(2026, 10, 15)
    assert parse_date("2026-10-15T09:00:00Z") == date(2026, 10, 15)
    assert parse_date(None) is None
    assert parse_date(float("nan")) is None
