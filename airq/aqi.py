# airq/aqi.py
# AQI category bands and per-pollutant status thresholds.
# Category labels are the kebab-case keys the dashboard styles against.

from typing import Optional

GOOD = "good"
MODERATE = "moderate"
UNHEALTHY_SENSITIVE = "unhealthy-sensitive"
UNHEALTHY = "unhealthy"
VERY_UNHEALTHY = "very-unhealthy"
HAZARDOUS = "hazardous"

# Each tuple: (upper bound inclusive, category). Anything above the last is hazardous.
CATEGORY_BANDS = [
    (50,  GOOD),
    (100, MODERATE),
    (150, UNHEALTHY_SENSITIVE),
    (200, UNHEALTHY),
    (300, VERY_UNHEALTHY),
]

CATEGORIES = [band[1] for band in CATEGORY_BANDS] + [HAZARDOUS]

AQI_MIN = 0
AQI_MAX = 500

# Pollutant -> (good upper bound, moderate upper bound)
THRESHOLDS = {
    "pm25": (12,  35),
    "pm10": (54,  154),
    "o3":   (54,  70),
    "no2":  (53,  100),
    "so2":  (35,  75),
    "co":   (4.4, 9.4),
}

# Provider parameter label -> canonical pollutant key used for threshold lookup.
# Pollutant maps keep the label exactly as the provider sent it.
POLLUTANT_ALIASES = {
    "pm2.5": "pm25",
    "pm2_5": "pm25",
    "ozone": "o3",
}

STATUS_GOOD = "Good"
STATUS_MODERATE = "Moderate"
STATUS_UNHEALTHY = "Unhealthy"
STATUS_UNKNOWN = "Unknown"


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def aqi_category(aqi: float) -> str:
    """
    Map an AQI value (fractional values allowed) to its category band.
    Total: every number lands in exactly one band.
    """
    for upper, category in CATEGORY_BANDS:
        if aqi <= upper:
            return category
    return HAZARDOUS


def canonical_pollutant(parameter: Optional[str]) -> Optional[str]:
    """
    Map a provider parameter label (e.g. 'PM2.5', 'pm25', 'ozone') to the
    canonical key this module has thresholds for. Returns None if unsupported.
    """
    if not parameter:
        return None
    key = parameter.strip().lower()
    key = POLLUTANT_ALIASES.get(key, key)
    return key if key in THRESHOLDS else None


def pollutant_status(pollutant: str, value: float) -> str:
    """
    Returns Good / Moderate / Unhealthy for a known pollutant.
    Unrecognized pollutants get "Unknown" rather than a guessed band.
    """
    key = canonical_pollutant(pollutant)
    if not key:
        return STATUS_UNKNOWN

    good, moderate = THRESHOLDS[key]
    if value <= good:
        return STATUS_GOOD
    if value <= moderate:
        return STATUS_MODERATE
    return STATUS_UNHEALTHY
