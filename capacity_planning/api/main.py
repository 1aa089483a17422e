"""
FastAPI application for consultant capacity planning.

Provides REST API endpoints for:
- Uploading consultants, engagements, time off and job salaries
- Current workload per consultant and for the team
- Multi-month workload forecasts and capacity alerts
- Viewing and editing the service hours table
"""

from contextlib import asynccontextmanager
from typing import List, Dict, Optional
from datetime import date
import io
import logging

import pandas as pd
from fastapi import FastAPI, HTTPException, UploadFile, File
from pydantic import BaseModel, Field

from ..config import get_settings
from ..engagements.hours import ServiceHourResolver, ServiceHoursConfig
from ..exceptions import ConfigurationError
from ..forecasting.alerts import generate_capacity_alerts
from ..forecasting.engine import WorkloadForecastEngine
from ..logging_config import setup_logging
from ..sources import InMemoryDataSource
from ..workload.calculator import WorkloadCalculator

logger = logging.getLogger(__name__)


# Pydantic models for API
class ForecastRequest(BaseModel):
    months: Optional[int] = Field(None, ge=1, le=36)
    today: Optional[date] = None


class ServiceHoursUpdate(BaseModel):
    hours: Dict[str, float] = Field(default_factory=dict)
    salary_threshold: Optional[float] = None


class ServiceHoursResponse(BaseModel):
    hours: Dict[str, float]
    salary_threshold: float


class AlertResponse(BaseModel):
    month: str
    severity: str
    message: str
    consultants: List[str]


class HealthResponse(BaseModel):
    status: str
    version: str
    records_loaded: Dict[str, int]


settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)
    logger.info("Capacity planning API starting")
    yield


app = FastAPI(
    title=settings.API_TITLE,
    description="API for consultant workload, forecasting and capacity alerts",
    version=settings.API_VERSION,
    lifespan=lifespan
)

# Process-wide state; a deployment would back the data source with its own store
data_source = InMemoryDataSource()
hours_config = ServiceHoursConfig.from_settings(settings)


def get_resolver() -> ServiceHourResolver:
    return ServiceHourResolver(hours_config, salary_lookup=data_source.get_job_max_salary)


def get_workload_calculator() -> WorkloadCalculator:
    return WorkloadCalculator(
        data_source,
        get_resolver(),
        baseline_monthly_hours=settings.BASELINE_MONTHLY_HOURS,
        workday_hours=settings.WORKDAY_HOURS,
        lookahead_days=settings.UPCOMING_TIME_OFF_WINDOW_DAYS,
    )


def get_forecast_engine() -> WorkloadForecastEngine:
    return WorkloadForecastEngine(
        data_source,
        get_resolver(),
        baseline_monthly_hours=settings.BASELINE_MONTHLY_HOURS,
        workday_hours=settings.WORKDAY_HOURS,
        activation_probability=settings.PIPELINE_ACTIVATION_PROBABILITY,
        default_months=settings.DEFAULT_FORECAST_MONTHS,
    )


async def _read_csv(file: UploadFile) -> pd.DataFrame:
    if not (file.filename or '').endswith('.csv'):
        raise HTTPException(status_code=400, detail="File must be CSV format")
    content = await file.read()
    try:
        return pd.read_csv(io.StringIO(content.decode('utf-8')))
    except (UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise HTTPException(status_code=400, detail=f"Error reading CSV: {str(e)}")


@app.get("/", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=settings.API_VERSION,
        records_loaded={
            "consultants": len(data_source.consultants),
            "engagements": len(data_source.engagements),
            "time_off": len(data_source.time_off),
            "jobs": len(data_source.job_salaries),
        }
    )


@app.post("/data/consultants")
async def load_consultants(file: UploadFile = File(...)):
    """
    Load consultants from CSV file.

    Expected CSV columns: id, first_name, last_name, status
    """
    df = await _read_csv(file)
    try:
        count = data_source.load_consultants(df)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"status": "success", "message": f"Loaded {count} consultants from CSV"}


@app.post("/data/engagements")
async def load_engagements(file: UploadFile = File(...)):
    """
    Load service engagements from CSV file.

    Expected CSV columns: id, service_type, status, consultant_ids, start_date, deadline
    Optional: name, completed_date, custom_hours, job_id, rpo_dedicated
    """
    df = await _read_csv(file)
    try:
        count = data_source.load_engagements(df)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("Loaded %d engagements, skipped %d malformed rows", count, len(df) - count)
    return {
        "status": "success",
        "message": f"Loaded {count} engagements from CSV",
        "skipped": len(df) - count
    }


@app.post("/data/time-off")
async def load_time_off(file: UploadFile = File(...)):
    """
    Load time-off requests from CSV file.

    Expected CSV columns: id, consultant_id, start_date, end_date, status
    """
    df = await _read_csv(file)
    try:
        count = data_source.load_time_off(df)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"status": "success", "message": f"Loaded {count} time-off requests from CSV"}


@app.post("/data/jobs")
async def load_jobs(file: UploadFile = File(...)):
    """
    Load job salary ceilings from CSV file.

    Expected CSV columns: job_id, salary_max
    """
    df = await _read_csv(file)
    try:
        count = data_source.load_jobs(df)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"status": "success", "message": f"Loaded {count} job salaries from CSV"}


@app.get("/workload/team")
async def get_team_workload(today: Optional[date] = None):
    """
    Get current workload rollup for all active consultants.
    """
    return get_workload_calculator().team_summary(today=today).to_dict()


@app.get("/workload/distribution")
async def get_service_distribution():
    """
    Get active engagement counts and hours per service category.
    """
    return get_workload_calculator().service_type_distribution().to_dict()


@app.get("/workload/{consultant_id}")
async def get_consultant_workload(consultant_id: str, today: Optional[date] = None):
    """
    Get current workload for a single consultant.
    """
    workload = get_workload_calculator().consultant_workload(consultant_id, today=today)
    if workload is None:
        raise HTTPException(status_code=404, detail=f"Consultant {consultant_id} not found")
    return workload.to_dict()


@app.post("/forecast")
async def create_forecast(request: ForecastRequest):
    """
    Generate a multi-month workload forecast.
    """
    forecast = get_forecast_engine().forecast(months=request.months, today=request.today)
    return forecast.to_dict()


@app.post("/forecast/alerts", response_model=List[AlertResponse])
async def get_capacity_alerts(request: ForecastRequest):
    """
    Generate a forecast and return its capacity alerts.
    """
    forecast = get_forecast_engine().forecast(months=request.months, today=request.today)
    return [alert.to_dict() for alert in generate_capacity_alerts(forecast.months)]


@app.get("/config/service-hours", response_model=ServiceHoursResponse)
async def get_service_hours():
    """
    Get the current service hours table.
    """
    return hours_config.to_dict()


@app.put("/config/service-hours", response_model=ServiceHoursResponse)
async def update_service_hours(update: ServiceHoursUpdate):
    """
    Edit the service hours table. Applies to the next calculation.
    """
    try:
        hours_config.update(update.hours, salary_threshold=update.salary_threshold)
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return hours_config.to_dict()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
