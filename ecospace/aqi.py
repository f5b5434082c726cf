"""AQI severity bands and the lookups built on them.

A single ordered table, `AQI_CATEGORIES`, defines the six US EPA bands. Both
`classify` and `severity_color` read that table, so a value can never be put
in one band and painted with another band's color.
"""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict


class AQICategory(BaseModel):
    """One severity band of the Air Quality Index."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_bound: int
    upper_bound: int | None  # None for the open-ended top band
    label: str
    severity_rank: int
    description: str
    color: str

    def contains(self, aqi: float) -> bool:
        """Return True if `aqi` falls inside this band's closed interval."""
        if aqi < self.lower_bound:
            return False
        return self.upper_bound is None or aqi <= self.upper_bound


AQI_CATEGORIES: Tuple[AQICategory, ...] = (
    AQICategory(
        lower_bound=0,
        upper_bound=50,
        label="Good",
        severity_rank=0,
        description="Air quality is satisfactory, and air pollution poses little or no risk.",
        color="#00E400",
    ),
    AQICategory(
        lower_bound=51,
        upper_bound=100,
        label="Moderate",
        severity_rank=1,
        description="Air quality is acceptable. However, there may be a risk for some people.",
        color="#FFFF00",
    ),
    AQICategory(
        lower_bound=101,
        upper_bound=150,
        label="Unhealthy for Sensitive Groups",
        severity_rank=2,
        description="Members of sensitive groups may experience health effects.",
        color="#FF7E00",
    ),
    AQICategory(
        lower_bound=151,
        upper_bound=200,
        label="Unhealthy",
        severity_rank=3,
        description="Everyone may begin to experience health effects.",
        color="#FF0000",
    ),
    AQICategory(
        lower_bound=201,
        upper_bound=300,
        label="Very Unhealthy",
        severity_rank=4,
        description="Health warnings of emergency conditions.",
        color="#8F3F97",
    ),
    AQICategory(
        lower_bound=301,
        upper_bound=None,
        label="Hazardous",
        severity_rank=5,
        description="Health alert: everyone may experience more serious health effects.",
        color="#7E0023",
    ),
)

HAZARDOUS = AQI_CATEGORIES[-1]


def classify(aqi: float) -> AQICategory:
    """
    Return the band for an AQI value.

    Negative values are treated as 0. Bands are checked in ascending order and
    the first one whose upper bound is >= the value wins, so fractional values
    between two integer bands (e.g. 50.5) land in the higher band. Anything
    above 300 is Hazardous.
    """
    value = max(0, aqi)
    for category in AQI_CATEGORIES:
        if category.upper_bound is not None and value <= category.upper_bound:
            return category
    return HAZARDOUS


def severity_color(aqi: float) -> str:
    """Return the hex color of the band `aqi` falls in."""
    return classify(aqi).color
