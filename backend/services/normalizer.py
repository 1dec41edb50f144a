"""Translate WAQI feed responses into AqiRecord.

This is the only module that knows the provider's field names
(``iaqi``, ``dominentpol``, ``v``, ``tz``). Missing or malformed sub-fields
never raise: they come out as None / empty rather than as made-up defaults.
"""

import logging
from typing import Any

from services.categories import classify, is_number
from services.models import AqiRecord, Attribution, City, Measurement, ObservationTime

logger = logging.getLogger(__name__)

SOURCE = "aqicn.org"
PROVIDER_META = {
    "provider": "World Air Quality Index (WAQI)",
    "apiDocs": "https://aqicn.org/api/",
}

# The feed doesn't report units per pollutant
POLLUTANT_UNIT = "µg/m³"

POLLUTANT_LABELS = {
    "pm25": "PM2.5 (fine particulate matter)",
    "pm10": "PM10 (coarse particulate matter)",
    "o3": "Ozone (O₃)",
    "no2": "Nitrogen Dioxide (NO₂)",
    "so2": "Sulfur Dioxide (SO₂)",
    "co": "Carbon Monoxide (CO)",
}


def pollutant_label(code: str) -> str:
    """Human-readable pollutant name, falling back to the uppercased code."""
    return POLLUTANT_LABELS.get(code.lower(), code.upper())


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _measurements(iaqi: Any) -> dict[str, Measurement]:
    result = {}
    for code, reading in _as_dict(iaqi).items():
        value = reading.get("v") if isinstance(reading, dict) else None
        if not is_number(value):
            continue
        key = str(code).lower()
        result[key] = Measurement(value=value, label=pollutant_label(key), unit=POLLUTANT_UNIT)
    return result


def _city(raw_city: Any, query: str) -> City:
    raw_city = _as_dict(raw_city)

    geo = raw_city.get("geo")
    if isinstance(geo, (list, tuple)) and len(geo) == 2 and all(is_number(c) for c in geo):
        geo = (geo[0], geo[1])
    else:
        geo = None

    return City(
        name=raw_city.get("name") or query,
        geo=geo,
        url=raw_city.get("url") or None,
    )


def _time(raw_time: Any) -> ObservationTime:
    if not isinstance(raw_time, dict):
        return ObservationTime()
    return ObservationTime(
        iso=raw_time.get("iso") or None,
        timezone=raw_time.get("tz") or None,
        raw=raw_time,
    )


def _attributions(raw: Any) -> tuple[Attribution, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(
        Attribution(name=item.get("name"), url=item.get("url") or None)
        for item in raw
        if isinstance(item, dict)
    )


def is_success(raw: Any) -> bool:
    """Whether the provider reported data for the query at all."""
    return isinstance(raw, dict) and raw.get("status") == "ok"


def normalize(raw: Any, query: str) -> AqiRecord | None:
    """Build an AqiRecord from a WAQI ``/feed`` response.

    Args:
        raw: Decoded JSON body from the provider.
        query: The city string the caller asked for.

    Returns:
        The record, or None when the body has no ``status: "ok"`` or no
        ``data`` block (the provider has nothing for this city). An empty
        ``data`` block still yields a best-effort record.
    """
    if not is_success(raw) or raw.get("data") is None:
        return None

    data = _as_dict(raw["data"])
    aqi = data.get("aqi")
    if not is_number(aqi):
        # WAQI reports "-" for stations without a current reading
        logger.debug("No numeric AQI for %r (got %r)", query, aqi)
        aqi = None

    return AqiRecord(
        source=SOURCE,
        query=query,
        city=_city(data.get("city"), query),
        aqi=aqi,
        category=classify(aqi),
        dominant_pollutant=data.get("dominentpol") or None,
        measurements=_measurements(data.get("iaqi")),
        time=_time(data.get("time")),
        attribution=_attributions(data.get("attributions")),
        meta=PROVIDER_META,
    )
