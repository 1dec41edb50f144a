"""WAQI (aqicn.org) feed client.

Requires an API token. One request per call, no retries; failures are
raised as UpstreamError subclasses for the caller to map.
"""

import asyncio
import logging
from urllib.parse import quote

import httpx

from errors import MissingCredentialError, TransportError, UpstreamTimeoutError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 8.0


class WaqiClient:
    def __init__(
        self,
        token: str | None,
        base_url: str = "https://api.waqi.info",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    def feed_url(self, city: str) -> str:
        return f"{self._base_url}/feed/{quote(city, safe='')}/"

    async def fetch(self, city: str) -> dict:
        """Fetch the raw feed document for a city.

        Raises:
            MissingCredentialError: no token configured; nothing is sent.
            UpstreamTimeoutError: no complete response within 8 seconds.
            TransportError: network failure, non-2xx status, or a non-JSON body.
        """
        if not self._token:
            raise MissingCredentialError()

        url = self.feed_url(city)
        logger.info("Fetching WAQI feed: %s", url)

        try:
            async with httpx.AsyncClient(
                timeout=REQUEST_TIMEOUT_SECONDS, transport=self._transport
            ) as client:
                resp = await asyncio.wait_for(
                    client.get(
                        url,
                        params={"token": self._token},
                        headers={"Accept": "application/json"},
                    ),
                    timeout=REQUEST_TIMEOUT_SECONDS,
                )
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.warning("WAQI request timed out for %r", city)
            raise UpstreamTimeoutError(REQUEST_TIMEOUT_SECONDS) from e
        except httpx.HTTPError as e:
            logger.warning("WAQI request failed for %r: %s", city, type(e).__name__)
            raise TransportError(f"AQICN API request failed: {type(e).__name__}") from e

        if not resp.is_success:
            logger.warning("WAQI returned %d for %r", resp.status_code, city)
            raise TransportError(
                f"AQICN API request failed with status {resp.status_code}: {resp.reason_phrase}",
                status_code=resp.status_code,
                reason=resp.reason_phrase,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise TransportError("AQICN API returned a non-JSON body", status_code=resp.status_code) from e
