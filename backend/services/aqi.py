"""City AQI lookups: cache first, then the WAQI feed.

Negative results (provider has no data for the city) are not cached, so
repeated lookups for an unknown city hit the provider every time.

Concurrent misses for the same city share one upstream request: the first
caller starts the fetch, later callers await the same task until it settles.
"""

import asyncio
import logging

from config import settings
from services.cache import CacheStore, cache, city_key
from services.models import AqiRecord, LookupResult
from services.normalizer import is_success, normalize
from services.waqi_client import WaqiClient

logger = logging.getLogger(__name__)


class AqiLookupService:
    def __init__(self, client: WaqiClient, store: CacheStore | None = None):
        self._client = client
        self._cache = store if store is not None else CacheStore()
        self._in_flight: dict[str, asyncio.Task] = {}

    @property
    def cache(self) -> CacheStore:
        return self._cache

    async def lookup(self, city: str) -> LookupResult | None:
        """Get AQI for a city.

        Returns None when the provider has no data for it. UpstreamError
        from the client propagates unchanged.
        """
        key = city_key(city)

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit for %r", key)
            return LookupResult(record=cached, cache_hit=True, ttl_ms=self._cache.ttl_ms)

        task = self._in_flight.get(key)
        if task is None:
            logger.debug("Cache miss for %r", key)
            task = asyncio.ensure_future(self._fetch_and_store(key, city))
            self._in_flight[key] = task
            task.add_done_callback(lambda t, k=key: self._settle(k, t))
        else:
            logger.debug("Joining in-flight fetch for %r", key)

        # Shielded so one cancelled caller doesn't cancel the fetch for the others
        record = await asyncio.shield(task)
        if record is None:
            return None
        return LookupResult(record=record, cache_hit=False, ttl_ms=self._cache.ttl_ms)

    async def _fetch_and_store(self, key: str, city: str) -> AqiRecord | None:
        raw = await self._client.fetch(city)

        if not is_success(raw):
            status = raw.get("status") if isinstance(raw, dict) else None
            logger.info("No AQI data for %r (status=%r)", city, status)
            return None

        record = normalize(raw, city)
        if record is None:
            logger.info("No AQI data block for %r", city)
            return None

        self._cache.put(key, record)
        return record

    def _settle(self, key: str, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        # Mark the error retrieved even if every waiter was cancelled
        if not task.cancelled():
            task.exception()


aqi_service = AqiLookupService(
    WaqiClient(settings.aqicn_api_token, settings.aqicn_base_url),
    cache,
)


def get_aqi_service() -> AqiLookupService:
    """FastAPI dependency returning the process-wide service."""
    return aqi_service
