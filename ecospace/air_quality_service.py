"""Assemble a synthetic air-quality snapshot for a map location."""
from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import List, Optional

from ecospace.aqi import AQICategory, classify
from ecospace.forecast_generator import ForecastSeries, TrendAnalysis, analyze_trend, generate
from ecospace.random_source import RandomSource
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="air_quality_service")

DEFAULT_DATA_SOURCE_LABEL = "NASA Earth Observation (Simulated)"


class InvalidLocationError(ValueError):
    """Latitude or longitude outside the valid geographic range."""


@dataclass(frozen=True)
class Pollutants:
    """Pollutant concentrations; particulates in ug/m3, gases in ppb, CO in ppm."""
    pm25: float
    pm10: float
    o3: float
    no2: float
    so2: float
    co: float


@dataclass(frozen=True)
class Weather:
    """Surface weather accompanying the reading."""
    temperature_c: int
    humidity_percent: int
    wind_speed_ms: float
    visibility_km: float


@dataclass(frozen=True)
class DailyForecast:
    """A forecast point pinned to a calendar date and rounded for display."""
    date: dt.date
    day_offset: int
    aqi: int
    pm25: float
    confidence_percent: int
    category: str
    color: str


@dataclass(frozen=True)
class AirQualitySnapshot:
    """Everything the dashboard shows for one clicked location."""
    latitude: float
    longitude: float
    timestamp: dt.datetime
    aqi: int
    category: AQICategory
    pollutants: Pollutants
    weather: Weather
    forecast: List[DailyForecast]
    trend: TrendAnalysis
    data_source: str


def validate_location(latitude: float, longitude: float) -> None:
    """Raise InvalidLocationError unless the coordinates are on the globe."""
    if not -90.0 <= latitude <= 90.0:
        raise InvalidLocationError(f"Latitude must be between -90 and 90; got {latitude}")
    if not -180.0 <= longitude <= 180.0:
        raise InvalidLocationError(f"Longitude must be between -180 and 180; got {longitude}")


def _draw(source: RandomSource, span: float, offset: float) -> float:
    """Uniform draw in [offset, offset + span), rounded to one decimal."""
    return round(source.next() * span + offset, 1)


def draw_pollutants(source: RandomSource) -> Pollutants:
    """Draw pollutant levels in the order pm25, pm10, o3, no2, so2, co."""
    return Pollutants(
        pm25=_draw(source, 50, 5),
        pm10=_draw(source, 80, 10),
        o3=_draw(source, 100, 20),
        no2=_draw(source, 60, 10),
        so2=_draw(source, 30, 5),
        co=_draw(source, 2, 0.5),
    )


def draw_weather(source: RandomSource) -> Weather:
    """Draw weather in the order temperature, humidity, wind, visibility."""
    return Weather(
        temperature_c=math.floor(source.next() * 30 + 10),
        humidity_percent=math.floor(source.next() * 40 + 30),
        wind_speed_ms=_draw(source, 15, 2),
        visibility_km=_draw(source, 15, 5),
    )


def date_forecast(series: ForecastSeries, start: dt.date) -> List[DailyForecast]:
    """Attach calendar dates and band labels to a generated series."""
    out: List[DailyForecast] = []
    for point in series:
        # half-up; round() would send 50.5 to 50
        aqi = math.floor(point.aqi + 0.5)
        category = classify(aqi)
        out.append(
            DailyForecast(
                date=start + dt.timedelta(days=point.day_offset),
                day_offset=point.day_offset,
                aqi=aqi,
                pm25=round(point.pm25, 1),
                confidence_percent=point.confidence_percent,
                category=category.label,
                color=category.color,
            )
        )
    return out


def build_snapshot(
    latitude: float,
    longitude: float,
    source: RandomSource,
    *,
    today: Optional[dt.date] = None,
    now: Optional[dt.datetime] = None,
    data_source_label: str = DEFAULT_DATA_SOURCE_LABEL,
) -> AirQualitySnapshot:
    """
    Build a snapshot for (latitude, longitude).

    Current AQI is drawn first, then pollutants, then weather, then the
    forecast. `today`/`now` default to the current UTC date and time.
    """
    validate_location(latitude, longitude)
    now = now or dt.datetime.now(dt.timezone.utc)
    today = today or now.date()

    aqi = math.floor(source.next() * 200) + 20
    pollutants = draw_pollutants(source)
    weather = draw_weather(source)
    series = generate(source)

    logger.info(
        "Built air-quality snapshot",
        extra={"latitude": latitude, "longitude": longitude, "aqi": aqi},
    )

    return AirQualitySnapshot(
        latitude=latitude,
        longitude=longitude,
        timestamp=now,
        aqi=aqi,
        category=classify(aqi),
        pollutants=pollutants,
        weather=weather,
        forecast=date_forecast(series, today),
        trend=analyze_trend(series),
        data_source=data_source_label,
    )
