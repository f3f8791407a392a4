"""
OpenAQ adapter: latest measurements for a city, normalized into a pollutant map.

One request per call, no retries. Every failure mode (transport error, non-2xx,
body that is not the expected shape, empty result) comes back as `Unavailable`
so the resolver can fall back to static data.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

import httpx
from pydantic import BaseModel, Field, ValidationError

from ..aqi import AQI_MAX, AQI_MIN, aqi_category, canonical_pollutant, clamp, pollutant_status
from ..schemas import PollutantReading

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openaq.org/v3"
MEASUREMENT_LIMIT = 5

# Used when the response has no pm25 measurement
PM25_SURROGATE = 15
PM25_TO_AQI = 5


# ---------- Wire format ----------
class MeasurementTime(BaseModel):
    utc: datetime
    local: Optional[str] = None


class Measurement(BaseModel):
    parameter: str
    value: float
    unit: str
    # v3 sends {"utc": ..., "local": ...}; older payloads send a bare timestamp
    measured_at: Union[datetime, MeasurementTime] = Field(alias="datetime")

    @property
    def timestamp(self) -> datetime:
        """Measurement time as an aware datetime; offset-less timestamps are taken as UTC."""
        if isinstance(self.measured_at, MeasurementTime):
            when = self.measured_at.utc
        else:
            when = self.measured_at
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        return when


class MeasurementsResponse(BaseModel):
    results: List[Measurement]


# ---------- Outcomes ----------
@dataclass(frozen=True)
class LiveReading:
    aqi: int
    location: str
    pollutants: Dict[str, PollutantReading]
    last_updated: datetime

    @property
    def category(self) -> str:
        return aqi_category(self.aqi)


@dataclass(frozen=True)
class Unavailable:
    reason: str
    detail: Optional[str] = field(default=None, compare=False)


ProviderResult = Union[LiveReading, Unavailable]


def city_from_location(location: str) -> str:
    """'Delhi, India' -> 'Delhi'. A location without a comma is used whole."""
    return location.split(",", 1)[0].strip()


def aqi_from_pm25(pm25: Optional[float]) -> int:
    if pm25 is None:
        pm25 = PM25_SURROGATE
    return int(round(clamp(pm25 * PM25_TO_AQI, AQI_MIN, AQI_MAX)))


def normalize_measurements(payload: Any, city: str) -> ProviderResult:
    """
    Turn a raw /measurements body into a LiveReading.

    Measurements arrive newest first; when a parameter repeats, the newest
    value is kept. lastUpdated is the newest timestamp across all results.
    """
    try:
        parsed = MeasurementsResponse.model_validate(payload)
    except ValidationError as e:
        return Unavailable("malformed", detail=f"{e.error_count()} validation error(s)")

    if not parsed.results:
        return Unavailable("empty")

    pollutants: Dict[str, PollutantReading] = {}
    for m in parsed.results:
        if m.parameter in pollutants:
            continue
        pollutants[m.parameter] = PollutantReading(
            value=m.value,
            unit=m.unit,
            status=pollutant_status(m.parameter, m.value),
        )

    # Providers label pm25 several ways (pm25, pm2.5, PM2.5); the AQI needs whichever is present
    pm25 = next((p.value for name, p in pollutants.items() if canonical_pollutant(name) == "pm25"), None)
    return LiveReading(
        aqi=aqi_from_pm25(pm25),
        location=city,
        pollutants=pollutants,
        last_updated=max(m.timestamp for m in parsed.results),
    )


class OpenAQProvider:
    """
    Fetches live measurements from OpenAQ.

    The httpx.AsyncClient is owned by the caller (the app lifespan) so one
    connection pool is shared by every request and WebSocket tick.
    """

    SOURCE_NAME = "OpenAQ"

    def __init__(self, client: httpx.AsyncClient, base_url: str = DEFAULT_BASE_URL, api_key: Optional[str] = None):
        self.client = client
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key

    def _headers(self) -> Dict[str, str]:
        return {"X-API-Key": self.api_key} if self.api_key else {}

    async def fetch(self, location: str) -> ProviderResult:
        city = city_from_location(location)
        params = {
            "city": city,
            "limit": MEASUREMENT_LIMIT,
            "sort": "desc",
            "order_by": "datetime",
        }

        try:
            response = await self.client.get(
                f"{self.base_url}/measurements",
                params=params,
                headers=self._headers(),
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"{self.SOURCE_NAME} API error for {city!r}: HTTP {e.response.status_code}")
            return Unavailable("http_status", detail=str(e.response.status_code))
        except httpx.HTTPError as e:
            logger.warning(f"{self.SOURCE_NAME} API error for {city!r}: {e!r}")
            return Unavailable("transport", detail=str(e))
        except ValueError as e:
            logger.warning(f"{self.SOURCE_NAME} returned a non-JSON body for {city!r}: {e}")
            return Unavailable("malformed", detail=str(e))

        result = normalize_measurements(payload, city)
        if isinstance(result, Unavailable):
            logger.warning(f"{self.SOURCE_NAME} has no usable data for {city!r}: {result.reason}")
        else:
            logger.debug(f"{self.SOURCE_NAME} returned {len(result.pollutants)} pollutant(s) for {city!r}")
        return result
