# airq/fallback.py
# Static baseline readings served when OpenAQ has nothing for a location.

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from .aqi import AQI_MAX, AQI_MIN, aqi_category, pollutant_status
from .schemas import PollutantReading

DEFAULT_LOCATION = "New York, NY"

PM25_UNIT = "µg/m³"


@dataclass(frozen=True)
class FallbackEntry:
    aqi: int
    pollutants: Mapping[str, PollutantReading] = field(default_factory=dict)

    def __post_init__(self):
        if not AQI_MIN <= self.aqi <= AQI_MAX:
            raise ValueError(f"fallback aqi {self.aqi} outside {AQI_MIN}-{AQI_MAX}")

    @property
    def category(self) -> str:
        return aqi_category(self.aqi)


def _pm25_entry(aqi: int, pm25: float) -> FallbackEntry:
    snapshot = {
        "pm25": PollutantReading(value=pm25, unit=PM25_UNIT, status=pollutant_status("pm25", pm25)),
    }
    return FallbackEntry(aqi=aqi, pollutants=MappingProxyType(snapshot))


DEFAULT_TABLE: Dict[str, FallbackEntry] = {
    "New York, NY": _pm25_entry(78, 12.3),
    "Delhi, India": _pm25_entry(245, 45.6),
    "London, UK":   _pm25_entry(55, 11.2),
}


class FallbackStore:
    """
    Read-only location -> FallbackEntry table.

    Lookups are exact string matches; anything unknown resolves to the entry
    for `default_location`, which must be present in the table.
    """

    def __init__(
        self,
        table: Optional[Mapping[str, FallbackEntry]] = None,
        default_location: str = DEFAULT_LOCATION,
    ):
        table = DEFAULT_TABLE if table is None else table
        if default_location not in table:
            raise ValueError(f"default location {default_location!r} missing from fallback table")
        self._table = MappingProxyType(dict(table))
        self.default_location = default_location

    def get(self, location: str) -> FallbackEntry:
        return self._table.get(location, self._table[self.default_location])

    def locations(self) -> List[str]:
        return list(self._table)

    def __contains__(self, location: object) -> bool:
        return location in self._table

    def __len__(self) -> int:
        return len(self._table)
