"""Canonical AQI record types.

Records are frozen once built. Mapping fields are wrapped in read-only
proxies so a cached record cannot be changed through a reference handed to
a caller.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


def _readonly(mapping: Mapping | None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class AqiCategory:
    label: str
    color: str
    level: str
    health_implications: str

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "color": self.color,
            "level": self.level,
            "healthImplications": self.health_implications,
        }


@dataclass(frozen=True)
class Measurement:
    value: float
    label: str
    unit: str

    def to_dict(self) -> dict:
        return {"value": self.value, "label": self.label, "unit": self.unit}


@dataclass(frozen=True)
class City:
    name: str
    geo: tuple[float, float] | None = None
    url: str | None = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "geo": list(self.geo) if self.geo is not None else None,
            "url": self.url,
        }


@dataclass(frozen=True)
class ObservationTime:
    iso: str | None = None
    timezone: str | None = None
    raw: Mapping[str, Any] | None = None

    def __post_init__(self):
        if self.raw is not None:
            object.__setattr__(self, "raw", _readonly(self.raw))

    def to_dict(self) -> dict:
        return {
            "iso": self.iso,
            "timezone": self.timezone,
            "raw": dict(self.raw) if self.raw is not None else None,
        }


@dataclass(frozen=True)
class Attribution:
    name: str | None
    url: str | None = None

    def to_dict(self) -> dict:
        return {"name": self.name, "url": self.url}


@dataclass(frozen=True)
class AqiRecord:
    """A normalized AQI reading for one city query. Carries no cache state."""

    source: str
    query: str
    city: City
    aqi: float | None
    category: AqiCategory
    dominant_pollutant: str | None = None
    measurements: Mapping[str, Measurement] = field(default_factory=dict)
    time: ObservationTime = field(default_factory=ObservationTime)
    attribution: tuple[Attribution, ...] = ()
    meta: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "measurements", _readonly(self.measurements))
        object.__setattr__(self, "meta", _readonly(self.meta))
        object.__setattr__(self, "attribution", tuple(self.attribution))

    def to_dict(self) -> dict:
        """JSON-ready shape served by the API."""
        return {
            "source": self.source,
            "query": self.query,
            "city": self.city.to_dict(),
            "aqi": {"value": self.aqi, **self.category.to_dict()},
            "dominantPollutant": self.dominant_pollutant,
            "measurements": {code: m.to_dict() for code, m in self.measurements.items()},
            "time": self.time.to_dict(),
            "attribution": [a.to_dict() for a in self.attribution],
            "meta": dict(self.meta),
        }


@dataclass(frozen=True)
class LookupResult:
    """A record plus the cache freshness info attached at response time."""

    record: AqiRecord
    cache_hit: bool
    ttl_ms: int

    def to_dict(self) -> dict:
        body = self.record.to_dict()
        body["meta"]["cache"] = {"hit": self.cache_hit, "ttlMs": self.ttl_ms}
        return body
