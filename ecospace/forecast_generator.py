"""Synthetic 7-day AQI / PM2.5 forecast.

The forecast is a linear random walk: a base AQI plus bounded noise and a
drift of 2 AQI points per day, clamped to published ranges. Every draw comes
from the injected RandomSource, so the same draw sequence always yields the
same series.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ecospace.random_source import RandomSource
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="forecast_generator")

FORECAST_DAYS = 7

AQI_MIN, AQI_MAX = 10.0, 300.0
PM25_MIN, PM25_MAX = 5.0, 50.0
CONFIDENCE_MIN = 85

DAILY_DRIFT = 2
AQI_NOISE_SPAN = 20
PM25_NOISE_SPAN = 10
PM25_PER_AQI = 0.3

# |last - first| below this is reported as stable
TREND_DEADBAND = 5.0


@dataclass(frozen=True)
class ForecastPoint:
    """Predicted air quality for one day of the series."""
    day_offset: int  # 0 is today
    aqi: float
    pm25: float
    confidence_percent: int


ForecastSeries = Tuple[ForecastPoint, ...]


class Trend(str, Enum):
    """Direction air quality is heading over the forecast."""
    IMPROVING = "improving"
    STABLE = "stable"
    WORSENING = "worsening"


@dataclass(frozen=True)
class TrendAnalysis:
    """Trend of a series plus a short human-readable summary."""
    trend: Trend
    delta: float
    message: str


_TREND_MESSAGES = {
    Trend.STABLE: "Air quality is expected to remain stable",
    Trend.WORSENING: "Air quality is expected to worsen",
    Trend.IMPROVING: "Air quality is expected to improve",
}


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def draw_base_aqi(source: RandomSource) -> int:
    """Draw a starting AQI in [30, 129]."""
    return math.floor(source.next() * 100) + 30


def generate(source: RandomSource, base_aqi: Optional[float] = None) -> ForecastSeries:
    """
    Generate a 7-day forecast series.

    Draw order is fixed: the base AQI first (only when `base_aqi` is None),
    then three draws per day for AQI noise, PM2.5 noise and confidence.
    An out-of-range `base_aqi` is accepted; the per-day clamp corrects it.
    Errors raised by `source` propagate unchanged.
    """
    if base_aqi is None:
        base_aqi = draw_base_aqi(source)

    points = []
    for day in range(FORECAST_DAYS):
        variation = (source.next() - 0.5) * AQI_NOISE_SPAN
        aqi = _clamp(base_aqi + variation + day * DAILY_DRIFT, AQI_MIN, AQI_MAX)
        pm25 = _clamp(aqi * PM25_PER_AQI + (source.next() - 0.5) * PM25_NOISE_SPAN, PM25_MIN, PM25_MAX)
        confidence = math.floor(source.next() * 10) + CONFIDENCE_MIN
        points.append(
            ForecastPoint(day_offset=day, aqi=aqi, pm25=pm25, confidence_percent=confidence)
        )

    logger.debug(
        "Generated forecast series",
        extra={"base_aqi": base_aqi, "first_aqi": points[0].aqi, "last_aqi": points[-1].aqi},
    )
    return tuple(points)


def analyze_trend(series: ForecastSeries) -> TrendAnalysis:
    """Compare the last day against today and label the direction."""
    if not series:
        raise ValueError("Cannot analyze the trend of an empty series")
    delta = series[-1].aqi - series[0].aqi
    if abs(delta) < TREND_DEADBAND:
        trend = Trend.STABLE
    elif delta > 0:
        trend = Trend.WORSENING
    else:
        trend = Trend.IMPROVING
    return TrendAnalysis(trend=trend, delta=delta, message=_TREND_MESSAGES[trend])
