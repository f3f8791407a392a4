# airq/schemas.py
from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Category = Literal[
    "good",
    "moderate",
    "unhealthy-sensitive",
    "unhealthy",
    "very-unhealthy",
    "hazardous",
]

PollutantStatus = Literal["Good", "Moderate", "Unhealthy", "Unknown"]


# ---------- Building blocks ----------
class PollutantReading(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: float
    unit: str
    status: PollutantStatus


class ForecastDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: str
    aqi: int = Field(ge=10, le=400)
    category: Category


# ---------- Output schemas ----------
class Reading(BaseModel):
    # Serialized with the dashboard's camelCase keys, built with snake_case names
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    aqi: int = Field(ge=0, le=500)
    category: Category
    location: str
    pollutants: Dict[str, PollutantReading]
    forecast: List[ForecastDay] = Field(min_length=6, max_length=6)
    health_recommendations: List[str] = Field(alias="healthRecommendations")
    last_updated: datetime = Field(alias="lastUpdated")
    # Diagnostic only: "live" when OpenAQ answered, "fallback" otherwise
    source: Optional[Literal["live", "fallback"]] = None


class HealthAdvice(BaseModel):
    recommendations: List[str]


class StreamMessage(BaseModel):
    type: Literal["initial", "update"]
    data: Reading
