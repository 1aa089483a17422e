#!/usr/bin/env python3
"""
Example usage of the Consultant Capacity Planning core.

This script builds a small team with engagements and approved leave,
then shows the current workload, a six-month forecast and the capacity
alerts derived from it.
"""

from datetime import date, timedelta

import pandas as pd

from capacity_planning import (
    InMemoryDataSource,
    ServiceHourResolver,
    ServiceHoursConfig,
    WorkloadCalculator,
    WorkloadForecastEngine,
    generate_capacity_alerts,
)
from capacity_planning.logging_config import setup_logging


def build_source(today: date) -> InMemoryDataSource:
    """Assemble demo records the way a CSV export would provide them."""
    source = InMemoryDataSource()
    source.load_consultants(pd.DataFrame([
        {'id': 'c1', 'first_name': 'Sarah', 'last_name': 'Johnson', 'status': 'active'},
        {'id': 'c2', 'first_name': 'David', 'last_name': 'Martinez', 'status': 'active'},
        {'id': 'c3', 'first_name': 'Priya', 'last_name': 'Natarajan', 'status': 'on-leave'},
    ]))
    source.load_engagements(pd.DataFrame([
        {'id': 'e1', 'name': 'Acme shortlist', 'service_type': 'shortlisting', 'status': 'active',
         'consultant_ids': 'c1', 'start_date': today, 'deadline': today + timedelta(days=14)},
        {'id': 'e2', 'name': 'Globex CFO search', 'service_type': 'executive-search',
         'status': 'active', 'consultant_ids': 'c1,c2', 'job_id': 'j1',
         'start_date': today - timedelta(days=20), 'deadline': today + timedelta(days=70)},
        {'id': 'e3', 'name': 'Initech hiring programme', 'service_type': 'full-service',
         'status': 'on-hold', 'consultant_ids': 'c2',
         'start_date': today + timedelta(days=30), 'deadline': today + timedelta(days=60)},
        {'id': 'e4', 'name': 'Umbrella RPO', 'service_type': 'rpo', 'status': 'active',
         'consultant_ids': 'c2', 'rpo_dedicated': True,
         'start_date': today - timedelta(days=90), 'deadline': today + timedelta(days=270)},
        {'id': 'e5', 'name': 'Hooli shortlist', 'service_type': 'shortlisting', 'status': 'completed',
         'consultant_ids': 'c1', 'start_date': today - timedelta(days=60),
         'deadline': today - timedelta(days=50), 'completed_date': today - timedelta(days=48)},
    ]))
    source.load_time_off(pd.DataFrame([
        {'id': 't1', 'consultant_id': 'c2', 'leave_type': 'vacation', 'status': 'approved',
         'start_date': today + timedelta(days=35), 'end_date': today + timedelta(days=44)},
    ]))
    source.load_jobs(pd.DataFrame([{'job_id': 'j1', 'salary_max': 145000}]))
    return source


def main():
    setup_logging("WARNING", json_output=False)
    print("=== Consultant Capacity Planning Demo ===\n")

    today = date.today()
    source = build_source(today)
    resolver = ServiceHourResolver(ServiceHoursConfig(), salary_lookup=source.get_job_max_salary)

    # 1. Current workload
    print("1. Current team workload...")
    calculator = WorkloadCalculator(source, resolver)
    summary = calculator.team_summary(today=today)
    print(f"   Active consultants: {summary.total_active}")
    print(f"   Average utilization: {summary.average_utilization}%")
    for workload in summary.workload_data:
        print(f"     - {workload.consultant_name}: {workload.hours_assigned:.0f}/"
              f"{workload.monthly_hours_available:.0f} h ({workload.status})")

    # 2. Forecast
    print("\n2. Generating six-month forecast...")
    engine = WorkloadForecastEngine(source, resolver)
    forecast = engine.forecast(months=6, today=today)
    print(forecast.get_summary_report())

    # 3. Alerts
    print("\n3. Capacity alerts:")
    alerts = generate_capacity_alerts(forecast.months)
    if not alerts:
        print("   No alerts")
    for alert in alerts:
        print(f"   [{alert.severity.upper()}] {alert.month}: {alert.message}")

    # 4. Export
    print("\n4. Exporting results...")
    forecast.to_dataframe().to_csv('forecast_output.csv', index=False)
    print("   ✓ Forecast saved to forecast_output.csv")
    summary.to_dataframe().to_csv('workload_output.csv', index=False)
    print("   ✓ Workload saved to workload_output.csv")

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()
