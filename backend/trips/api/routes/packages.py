"""Trip package endpoints - search, destination catalogue, and service status."""

from datetime import UTC, datetime
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status

from backend.trips.adapters.fixtures import (
    FixtureActivitySearch,
    FixtureFlightSearch,
    FixtureHotelSearch,
)
from backend.trips.adapters.weather import OpenMeteoWeather
from backend.trips.composition.errors import CompositionError, CompositionTimeoutError
from backend.trips.config import get_settings
from backend.trips.data.destinations import POPULAR_DESTINATIONS
from backend.trips.models.package import PackageSearchResponse
from backend.trips.models.search import SearchRequest
from backend.trips.services.providers import ProviderSuite
from backend.trips.services.trip_packages import TripPackageService
from backend.trips.utils.metrics import PrometheusProviderMetrics

router = APIRouter(prefix="/trip-packages", tags=["trip-packages"])

FEATURES = [
    "Multi-destination trip planning",
    "Flight search",
    "Hotel recommendations",
    "Activity suggestions",
    "Weather forecasting",
    "Budget filtering",
    "Tiered package composition",
]


@lru_cache
def get_trip_package_service() -> TripPackageService:
    """Build the service with bundled fixture providers and live weather."""
    settings = get_settings()
    fixtures_dir = Path(settings.fixtures_dir) if settings.fixtures_dir else None
    providers = ProviderSuite(
        flights=FixtureFlightSearch(fixtures_dir),
        hotels=FixtureHotelSearch(fixtures_dir),
        activities=FixtureActivitySearch(fixtures_dir),
        weather=OpenMeteoWeather(
            base_url=settings.weather_base_url,
            geocoding_url=settings.geocoding_base_url,
            timeout=settings.provider_timeout_seconds,
        ),
    )
    return TripPackageService(providers, settings=settings, metrics=PrometheusProviderMetrics())


@router.post("/search", response_model=PackageSearchResponse)
async def search_packages(
    request: SearchRequest,
    service: Annotated[TripPackageService, Depends(get_trip_package_service)],
) -> PackageSearchResponse:
    """Compose budget, standard, and luxury packages for a search.

    Returns:
        200 with packages (possibly empty when all exceed the budget)
        502 when a required category has no offers or currencies are mixed
        504 when composition exceeds its deadline
    """
    try:
        return await service.compose(request)
    except CompositionTimeoutError as e:
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(e)) from e
    except CompositionError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e


@router.get("/destinations")
async def list_destinations() -> dict[str, Any]:
    """Popular destinations with airport codes."""
    return {
        "data": [d.model_dump(exclude={"geo"}) for d in POPULAR_DESTINATIONS],
        "meta": {
            "total": len(POPULAR_DESTINATIONS),
            "last_updated": datetime.now(UTC).isoformat(),
        },
    }


@router.get("/status")
async def service_status() -> dict[str, Any]:
    """Which provider integrations back the service."""
    return {
        "service": "Trip Package Service",
        "status": "operational",
        "integrations": {
            "flights": "fixtures",
            "hotels": "fixtures",
            "activities": "fixtures",
            "weather": "open_meteo",
            "fallback": "synthetic",
        },
        "features": FEATURES,
    }
