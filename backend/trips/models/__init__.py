"""Models package - re-exports for convenience."""

from backend.trips.models.common import (
    CabinClass,
    Geo,
    Money,
    OfferCategory,
    Provenance,
    Tier,
    TravelerCounts,
)
from backend.trips.models.offers import (
    ActivityOffer,
    FlightOffer,
    HotelOffer,
    ProviderOffer,
    WeatherDay,
    WeatherSummary,
)
from backend.trips.models.package import (
    ActivityResults,
    DestinationSelection,
    FlightLeg,
    HotelResults,
    PackageSearchResponse,
    RawResults,
    SearchMeta,
    TripPackage,
)
from backend.trips.models.search import Preferences, SearchRequest

__all__ = [
    # Common
    "Geo",
    "Money",
    "Tier",
    "OfferCategory",
    "CabinClass",
    "TravelerCounts",
    "Provenance",
    # Search
    "SearchRequest",
    "Preferences",
    # Offers
    "FlightOffer",
    "HotelOffer",
    "ActivityOffer",
    "ProviderOffer",
    "WeatherDay",
    "WeatherSummary",
    # Packages
    "TripPackage",
    "DestinationSelection",
    "FlightLeg",
    "HotelResults",
    "ActivityResults",
    "RawResults",
    "SearchMeta",
    "PackageSearchResponse",
]
