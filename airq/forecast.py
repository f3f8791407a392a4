# airq/forecast.py
# Synthetic six-day outlook: compound a small upward trend with uniform noise.
# There is no model behind this; values only need to look plausible.

import random
from typing import Iterator, Optional, Protocol

from .aqi import aqi_category, clamp
from .schemas import ForecastDay

FORECAST_DAYS = ("Today", "Tomorrow", "Wed", "Thu", "Fri", "Sat")

TREND = 1.05
VARIATION = 20          # noise spans [-VARIATION/2, +VARIATION/2]
FORECAST_MIN = 10
FORECAST_MAX = 400


class RandomSource(Protocol):
    """Anything with random() -> float in [0, 1). random.Random qualifies."""

    def random(self) -> float:
        ...


def generate_forecast(
    seed_aqi: float,
    location: Optional[str] = None,
    rng: Optional[RandomSource] = None,
) -> Iterator[ForecastDay]:
    """
    Yield one ForecastDay per label in FORECAST_DAYS, starting from seed_aqi.

    Each step: current = clamp(current * TREND + noise, FORECAST_MIN, FORECAST_MAX).
    The reported aqi is the rounded running value and the category is derived
    from that rounded value.

    `location` is accepted for per-region variation later; it does not affect
    the output today. Pass a seeded random.Random as `rng` for repeatable runs.
    """
    rng = rng or random
    current = seed_aqi
    for day in FORECAST_DAYS:
        noise = (rng.random() - 0.5) * VARIATION
        current = clamp(current * TREND + noise, FORECAST_MIN, FORECAST_MAX)
        aqi = int(round(current))
        yield ForecastDay(day=day, aqi=aqi, category=aqi_category(aqi))
