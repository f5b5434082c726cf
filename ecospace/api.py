"""HTTP API for the EcoSpace air-quality dashboard."""

import datetime as dt
import hmac
import math
from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel

from .air_quality_service import AirQualitySnapshot, InvalidLocationError, build_snapshot, date_forecast
from .aqi import AQI_CATEGORIES, AQICategory, classify
from .community import Advisory, CommunityInsights, advisories_by_severity, build_community_insights
from .config import settings
from .forecast_generator import TrendAnalysis, analyze_trend, generate
from .random_source import build_random_source
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="ecospace/api")


def require_api_key(x_api_key: str | None = Header(default=None)):
    """Validate the X-API-Key header against the configured static key."""
    if not settings.api_key:
        logger.debug("No API key configured; allowing all requests")
        return

    if not x_api_key:
        logger.debug("No API key provided")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")

    if hmac.compare_digest(str(x_api_key), str(settings.api_key)):
        return

    logger.debug("Invalid API key provided")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


router = APIRouter(dependencies=[Depends(require_api_key)])


class CategoryOut(BaseModel):
    """Serialized AQI band."""
    label: str
    severity_rank: int
    lower_bound: int
    upper_bound: Optional[int] = None
    description: str
    color: str


class ClassifyResponse(BaseModel):
    aqi: float
    category: CategoryOut


class TrendOut(BaseModel):
    trend: str
    delta: float
    message: str


class DailyForecastOut(BaseModel):
    date: dt.date
    day_offset: int
    aqi: int
    pm25: float
    confidence_percent: int
    category: str
    color: str


class ForecastResponse(BaseModel):
    """Dated 7-day forecast with its trend."""
    forecast: List[DailyForecastOut]
    trend: TrendOut


class LocationOut(BaseModel):
    lat: float
    lng: float


class PollutantsOut(BaseModel):
    pm25: float
    pm10: float
    o3: float
    no2: float
    so2: float
    co: float


class WeatherOut(BaseModel):
    temperature: int
    humidity: int
    wind_speed: float
    visibility: float


class AirQualityResponse(BaseModel):
    """Snapshot payload consumed by the dashboard cards."""
    location: LocationOut
    timestamp: dt.datetime
    aqi: int
    category: CategoryOut
    pollutants: PollutantsOut
    weather: WeatherOut
    forecast: List[DailyForecastOut]
    trend: TrendOut
    data_source: str
    last_updated: dt.datetime


class RecommendationGroupOut(BaseModel):
    kind: str
    title: str
    items: List[str]


class CommunityReportOut(BaseModel):
    user: str
    time: str
    kind: str
    message: str
    verified: bool


class CommunityResponse(BaseModel):
    active_users: int
    reports: int
    initiatives: int
    last_activity: str
    recommendations: List[RecommendationGroupOut]
    recent_reports: List[CommunityReportOut]


class AdvisoryOut(BaseModel):
    id: int
    kind: str
    title: str
    location: str
    time: str
    severity: str
    description: str
    recommendations: List[str]


class AlertsResponse(BaseModel):
    alerts: List[AdvisoryOut]


def _require_finite(name: str, value: float) -> None:
    """Reject nan/inf query values before they reach the clamps."""
    if not math.isfinite(value):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail=f"{name} must be a finite number")


def _category_out(category: AQICategory) -> CategoryOut:
    """Convert a band into its API shape."""
    return CategoryOut(**category.model_dump())


def _trend_out(trend: TrendAnalysis) -> TrendOut:
    return TrendOut(trend=trend.trend.value, delta=round(trend.delta, 1), message=trend.message)


def _snapshot_out(snapshot: AirQualitySnapshot) -> AirQualityResponse:
    """Convert a snapshot into the response payload."""
    p, w = snapshot.pollutants, snapshot.weather
    return AirQualityResponse(
        location=LocationOut(lat=snapshot.latitude, lng=snapshot.longitude),
        timestamp=snapshot.timestamp,
        aqi=snapshot.aqi,
        category=_category_out(snapshot.category),
        pollutants=PollutantsOut(pm25=p.pm25, pm10=p.pm10, o3=p.o3, no2=p.no2, so2=p.so2, co=p.co),
        weather=WeatherOut(
            temperature=w.temperature_c,
            humidity=w.humidity_percent,
            wind_speed=w.wind_speed_ms,
            visibility=w.visibility_km,
        ),
        forecast=[DailyForecastOut(**vars(day)) for day in snapshot.forecast],
        trend=_trend_out(snapshot.trend),
        data_source=snapshot.data_source,
        last_updated=snapshot.timestamp,
    )


def _community_out(insights: CommunityInsights) -> CommunityResponse:
    return CommunityResponse(
        active_users=insights.active_users,
        reports=insights.reports,
        initiatives=insights.initiatives,
        last_activity=insights.last_activity,
        recommendations=[
            RecommendationGroupOut(kind=g.kind, title=g.title, items=list(g.items))
            for g in insights.recommendations
        ],
        recent_reports=[CommunityReportOut(**vars(r)) for r in insights.recent_reports],
    )


def _advisory_out(advisory: Advisory) -> AdvisoryOut:
    return AdvisoryOut(
        id=advisory.id,
        kind=advisory.kind,
        title=advisory.title,
        location=advisory.location,
        time=advisory.time,
        severity=advisory.severity.value,
        description=advisory.description,
        recommendations=list(advisory.recommendations),
    )


@router.get("/air-quality", response_model=AirQualityResponse)
def get_air_quality(lat: float | None = None, lng: float | None = None):
    """Return a synthetic air-quality snapshot for a map location."""
    if lat is None or lng is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail="Latitude and longitude are required")
    try:
        snapshot = build_snapshot(
            lat,
            lng,
            build_random_source(settings),
            data_source_label=settings.data_source_label,
        )
    except InvalidLocationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return _snapshot_out(snapshot)


@router.get("/forecast", response_model=ForecastResponse)
def get_forecast(base_aqi: float | None = None):
    """Return a dated 7-day forecast, optionally anchored at `base_aqi`."""
    if base_aqi is not None:
        _require_finite("base_aqi", base_aqi)
    series = generate(build_random_source(settings), base_aqi=base_aqi)
    today = dt.datetime.now(dt.timezone.utc).date()
    logger.info(f"Generated forecast starting {today}")
    return ForecastResponse(
        forecast=[DailyForecastOut(**vars(day)) for day in date_forecast(series, today)],
        trend=_trend_out(analyze_trend(series)),
    )


@router.get("/classify", response_model=ClassifyResponse)
def classify_aqi(aqi: float):
    """Return the severity band for an AQI value."""
    _require_finite("aqi", aqi)
    return ClassifyResponse(aqi=aqi, category=_category_out(classify(aqi)))


@router.get("/categories", response_model=List[CategoryOut])
def list_categories():
    """Return every AQI band in ascending severity."""
    return [_category_out(c) for c in AQI_CATEGORIES]


@router.get("/community", response_model=CommunityResponse)
def get_community():
    """Return community activity counters and guidance."""
    return _community_out(build_community_insights(build_random_source(settings)))


@router.get("/alerts", response_model=AlertsResponse)
def get_alerts(severity: str | None = None):
    """Return active advisories, optionally filtered by severity."""
    try:
        alerts = advisories_by_severity(severity)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail=f"Unknown severity: {severity}")
    return AlertsResponse(alerts=[_advisory_out(a) for a in alerts])
