"""US EPA AQI health categories.

Buckets are closed on the upper bound: 50 is Good, 100 is Moderate, and so on.
"""

import math

from services.models import AqiCategory

UNKNOWN = AqiCategory(
    label="Unknown",
    color="#9E9E9E",
    level="unknown",
    health_implications="Air quality data is not available.",
)

# (inclusive upper bound, category), ascending
AQI_BREAKPOINTS = [
    (50, AqiCategory(
        label="Good",
        color="#009966",
        level="good",
        health_implications=(
            "Air quality is considered satisfactory, and air pollution poses little or no risk."
        ),
    )),
    (100, AqiCategory(
        label="Moderate",
        color="#FFDE33",
        level="moderate",
        health_implications=(
            "Air quality is acceptable; however, for some pollutants there may be a moderate "
            "health concern for a very small number of people."
        ),
    )),
    (150, AqiCategory(
        label="Unhealthy for Sensitive Groups",
        color="#FF9933",
        level="usg",
        health_implications=(
            "Members of sensitive groups may experience health effects. "
            "The general public is not likely to be affected."
        ),
    )),
    (200, AqiCategory(
        label="Unhealthy",
        color="#CC0033",
        level="unhealthy",
        health_implications=(
            "Everyone may begin to experience health effects; members of sensitive groups "
            "may experience more serious health effects."
        ),
    )),
    (300, AqiCategory(
        label="Very Unhealthy",
        color="#660099",
        level="very-unhealthy",
        health_implications=(
            "Health warnings of emergency conditions. "
            "The entire population is more likely to be affected."
        ),
    )),
]

HAZARDOUS = AqiCategory(
    label="Hazardous",
    color="#7E0023",
    level="hazardous",
    health_implications="Health alert: everyone may experience more serious health effects.",
)


def is_number(value) -> bool:
    """True for real ints/floats that are not NaN. Booleans don't count."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def classify(aqi) -> AqiCategory:
    """Map an AQI value to its health category. Never raises."""
    if not is_number(aqi):
        return UNKNOWN

    for upper, category in AQI_BREAKPOINTS:
        if aqi <= upper:
            return category
    return HAZARDOUS
