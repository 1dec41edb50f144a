"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AirQualityError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class UpstreamError(AirQualityError):
    """The AQI provider could not be reached or answered badly.

    ``str(exc)`` holds the internal detail for logs. Callers only ever see
    ``public_message``.
    """

    kind = "upstream"
    public_message = "Failed to fetch AQI data from upstream provider."

    def __init__(self, message: str):
        super().__init__(message, status_code=502)


class MissingCredentialError(UpstreamError):
    kind = "missing_credential"

    def __init__(self, variable: str = "AQICN_API_TOKEN"):
        super().__init__(
            f"Missing {variable} environment variable. Please set your API token."
        )
        self.variable = variable


class TransportError(UpstreamError):
    kind = "transport_failure"

    def __init__(self, message: str, status_code: int | None = None, reason: str | None = None):
        super().__init__(message)
        # HTTP status reported by the provider, not the one we answer with
        self.upstream_status = status_code
        self.reason = reason


class UpstreamTimeoutError(UpstreamError):
    kind = "timeout"

    def __init__(self, timeout_seconds: float):
        super().__init__(f"AQICN API request timed out after {timeout_seconds:g}s")
        self.timeout_seconds = timeout_seconds


class CityNotFoundError(AirQualityError):
    def __init__(self, city: str):
        super().__init__(f"No AQI data found for city '{city}'.", status_code=404)


class MissingCityError(AirQualityError):
    def __init__(self):
        super().__init__("Missing required query parameter 'city'.", status_code=400)


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(UpstreamError)
    async def handle_upstream_error(request: Request, exc: UpstreamError):
        logger.error("Upstream failure on %s (%s): %s", request.url.path, exc.kind, exc)
        return JSONResponse({"error": exc.public_message}, status_code=exc.status_code)

    @app.exception_handler(AirQualityError)
    async def handle_air_quality_error(_request: Request, exc: AirQualityError):
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
