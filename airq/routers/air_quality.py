# airq/routers/air_quality.py
# Read-only JSON endpoints. None of these return errors for bad input:
# unknown locations fall back to the default entry, bad aqi values to 50.

import re
from typing import List, Optional

from fastapi import APIRouter, Depends

from .. import schemas
from ..deps import get_resolver
from ..health import DEFAULT_AQI
from ..resolver import AirQualityResolver

router = APIRouter(prefix="/api", tags=["air-quality"])

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_aqi(raw: Optional[str], default: int = DEFAULT_AQI) -> int:
    """
    Lenient integer parse: '250' -> 250, '120.7' -> 120, '80abc' -> 80.
    Missing or non-numeric input gives `default`.
    """
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else default


@router.get(
    "/air-quality",
    response_model=schemas.Reading,
    summary="Current reading, forecast and advice for a location",
)
async def get_air_quality(
    location: Optional[str] = None,
    resolver: AirQualityResolver = Depends(get_resolver),
):
    return await resolver.resolve(location or resolver.default_location)


@router.get(
    "/forecast",
    response_model=List[schemas.ForecastDay],
    summary="Six-day outlook for a location",
)
async def get_forecast(
    location: Optional[str] = None,
    resolver: AirQualityResolver = Depends(get_resolver),
):
    reading = await resolver.resolve(location or resolver.default_location)
    return reading.forecast


@router.get("/locations", response_model=List[str], summary="Locations with baseline data")
def get_locations(resolver: AirQualityResolver = Depends(get_resolver)):
    return resolver.locations()


@router.get("/health", response_model=schemas.HealthAdvice, summary="Health advice for an AQI value")
def get_health_advice(
    aqi: Optional[str] = None,
    resolver: AirQualityResolver = Depends(get_resolver),
):
    return schemas.HealthAdvice(recommendations=resolver.recommendations(parse_aqi(aqi)))
