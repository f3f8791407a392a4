"""
Resolve a location string into a complete Reading.

Live OpenAQ data is preferred. When the provider has nothing usable the
static fallback entry is jittered slightly so dashboards still move. Either
way the Reading gets a synthetic forecast and health advice attached.
"""
import logging
import random
from datetime import datetime, timezone
from typing import Callable, List, Optional, Protocol

from .aqi import AQI_MAX, AQI_MIN, aqi_category, clamp
from .fallback import FallbackStore
from .forecast import RandomSource, generate_forecast
from .health import health_recommendations
from .providers.openaq import LiveReading, ProviderResult, Unavailable
from .schemas import Reading

logger = logging.getLogger(__name__)

FALLBACK_VARIATION = 10  # jitter spans [-5, +5]


class Provider(Protocol):
    async def fetch(self, location: str) -> ProviderResult:
        ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AirQualityResolver:
    def __init__(
        self,
        provider: Provider,
        fallback: Optional[FallbackStore] = None,
        rng: Optional[RandomSource] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.provider = provider
        self.fallback = FallbackStore() if fallback is None else fallback
        self.rng = rng or random.Random()
        self.clock = clock

    @property
    def default_location(self) -> str:
        return self.fallback.default_location

    def locations(self) -> List[str]:
        return self.fallback.locations()

    def recommendations(self, aqi: float) -> List[str]:
        return health_recommendations(aqi)

    async def _fetch_live(self, location: str) -> ProviderResult:
        try:
            return await self.provider.fetch(location)
        except Exception as e:
            # Providers should return Unavailable, but a bug there must not break the endpoint
            logger.exception(f"Provider raised while fetching {location!r}")
            return Unavailable("provider_error", detail=str(e))

    async def resolve(self, location: Optional[str] = None) -> Reading:
        """Never raises for provider trouble; the fallback path always produces a Reading."""
        location = location or self.default_location

        result = await self._fetch_live(location)
        if isinstance(result, LiveReading):
            return self._from_live(result, location)

        logger.info(f"Using fallback data for {location!r} ({result.reason})")
        return self._from_fallback(location)

    def _from_live(self, live: LiveReading, requested: str) -> Reading:
        return Reading(
            aqi=live.aqi,
            category=live.category,
            location=live.location,
            pollutants=dict(live.pollutants),
            forecast=list(generate_forecast(live.aqi, requested, self.rng)),
            health_recommendations=health_recommendations(live.aqi),
            last_updated=live.last_updated,
            source="live",
        )

    def _from_fallback(self, location: str) -> Reading:
        entry = self.fallback.get(location)
        variation = (self.rng.random() - 0.5) * FALLBACK_VARIATION
        current = clamp(entry.aqi + variation, AQI_MIN, AQI_MAX)
        aqi = int(round(current))

        return Reading(
            aqi=aqi,
            category=aqi_category(aqi),
            location=location,
            pollutants=dict(entry.pollutants),
            forecast=list(generate_forecast(current, location, self.rng)),
            health_recommendations=health_recommendations(aqi),
            last_updated=self.clock(),
            source="fallback",
        )
