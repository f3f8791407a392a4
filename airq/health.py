# airq/health.py
# Health advice by AQI band. The bands mirror aqi.CATEGORY_BANDS up to 200,
# but everything above 200 shares one warning, so keep the two tables separate.

from typing import List

# Each tuple: (upper bound inclusive, advice)
ADVICE_BANDS = [
    (50,  "Ideal air quality for outdoor activities"),
    (100, "Air quality is acceptable for most people"),
    (150, "Sensitive groups should reduce outdoor activities"),
    (200, "Everyone may experience health effects"),
]
SEVERE_ADVICE = "Health warnings — avoid outdoor activities"

DEFAULT_AQI = 50


def health_recommendations(aqi: float) -> List[str]:
    for upper, advice in ADVICE_BANDS:
        if aqi <= upper:
            return [advice]
    return [SEVERE_ADVICE]
