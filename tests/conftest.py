"""
Pytest configuration for the airq tests.

Registers custom markers and provides shared fixtures.
"""

import pytest

from airq.fallback import FallbackStore
from airq.forecast import generate_forecast
from airq.resolver import AirQualityResolver
from airq.schemas import PollutantReading, Reading
from fakes import FIXED_NOW, FixedRandom, StubProvider, fixed_clock


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def fallback_store():
    """Fixture providing the default fallback table."""
    return FallbackStore()


@pytest.fixture
def zero_noise():
    """Random source that makes every perturbation exactly zero."""
    return FixedRandom(0.5)


@pytest.fixture
def offline_resolver(fallback_store, zero_noise):
    """Resolver whose provider never has data, so every call takes the fallback path."""
    return AirQualityResolver(
        StubProvider(),
        fallback=fallback_store,
        rng=zero_noise,
        clock=fixed_clock,
    )


@pytest.fixture
def sample_reading():
    """A fully built Reading for tests that only need something to send."""
    return Reading(
        aqi=78,
        category="moderate",
        location="New York, NY",
        pollutants={"pm25": PollutantReading(value=12.3, unit="µg/m³", status="Moderate")},
        forecast=list(generate_forecast(78, "New York, NY", FixedRandom(0.5))),
        health_recommendations=["Air quality is acceptable for most people"],
        last_updated=FIXED_NOW,
        source="fallback",
    )
