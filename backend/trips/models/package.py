"""Package models - composed trip packages and the search response envelope."""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from backend.trips.models.common import CabinClass, Tier
from backend.trips.models.offers import ActivityOffer, FlightOffer, HotelOffer, WeatherSummary


class DestinationSelection(BaseModel):
    """Hotel and activities chosen for one destination in one tier."""

    model_config = ConfigDict(frozen=True)

    destination: str
    hotel: HotelOffer
    activities: tuple[ActivityOffer, ...] = ()


class TripPackage(BaseModel):
    """A fully priced, tiered trip package. Immutable once composed.

    Every flight's ``price`` is the fare actually charged (the ``fare_cabin``
    fare), so ``total_price`` can be rebuilt from the components alone:
    flight prices + hotel stay totals + activity prices x ``adults``,
    rounded half-up to whole units.
    """

    model_config = ConfigDict(frozen=True)

    tier: Tier
    name: str
    description: str
    fare_cabin: CabinClass = CabinClass.economy
    adults: int = Field(1, ge=1)
    flights: tuple[FlightOffer, ...]  # outbound legs in itinerary order, then the return leg
    destinations: tuple[DestinationSelection, ...]
    total_price: Decimal
    currency: str
    savings: Decimal = Decimal(0)
    rating: float
    highlights: tuple[str, ...] = ()
    synthetic: bool = False

    def offer_ids(self) -> list[str]:
        """Ids of every selected offer, flights first."""
        ids = [f.offer_id for f in self.flights]
        for sel in self.destinations:
            ids.append(sel.hotel.offer_id)
            ids.extend(a.offer_id for a in sel.activities)
        return ids


class FlightLeg(BaseModel):
    """Flight results for one leg of the itinerary."""

    leg_type: Literal["outbound", "return"]
    route: str
    origin: str
    destination: str
    offers: list[FlightOffer]
    synthetic: bool = False


class HotelResults(BaseModel):
    destination: str
    offers: list[HotelOffer]
    synthetic: bool = False


class ActivityResults(BaseModel):
    destination: str
    offers: list[ActivityOffer]
    synthetic: bool = False


class RawResults(BaseModel):
    """Per-category data actually used for composition, fallbacks included."""

    flights: list[FlightLeg] = Field(default_factory=list)
    hotels: list[HotelResults] = Field(default_factory=list)
    activities: list[ActivityResults] = Field(default_factory=list)
    weather: list[WeatherSummary] = Field(default_factory=list)


class SearchMeta(BaseModel):
    searched_at: datetime
    currency: str
    total_packages: int
    synthetic_categories: list[str] = Field(default_factory=list)


class PackageSearchResponse(BaseModel):
    """Result of one composition request."""

    packages: list[TripPackage]
    raw_results: RawResults
    meta: SearchMeta
