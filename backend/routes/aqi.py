"""AQI lookup route."""

from fastapi import APIRouter, Depends, Query

from errors import CityNotFoundError, MissingCityError
from services.aqi import AqiLookupService, get_aqi_service

router = APIRouter()


@router.get("/api/aqi")
async def get_city_aqi(
    city: str | None = Query(None),
    service: AqiLookupService = Depends(get_aqi_service),
) -> dict:
    """Normalized AQI for a city, with cache freshness under meta.cache."""
    city = (city or "").strip()
    if not city:
        raise MissingCityError()

    result = await service.lookup(city)
    if result is None:
        raise CityNotFoundError(city)

    return result.to_dict()
