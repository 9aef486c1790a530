"""Shared pytest fixtures for all test suites."""

from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from typing import Any

import pytest

from backend.trips.composition.result_set import ProviderResultSet
from backend.trips.models.common import (
    CabinClass,
    Money,
    OfferCategory,
    Provenance,
    TravelerCounts,
)
from backend.trips.models.offers import (
    ActivityOffer,
    FlightOffer,
    HotelOffer,
    WeatherDay,
    WeatherSummary,
)
from backend.trips.models.search import Preferences

TRIP_START = date(2030, 6, 10)
TRIP_END = date(2030, 6, 13)


def _provenance(source: str = "provider.test") -> Provenance:
    return Provenance(source=source, fetched_at=datetime.now(UTC))


def make_flight(
    offer_id: str,
    economy: int | str,
    business: int | str | None = None,
    *,
    origin: str = "JFK",
    destination: str = "CDG",
    synthetic: bool = False,
) -> FlightOffer:
    departure = datetime(2030, 6, 10, 9, 0)
    cabin_prices = {CabinClass.economy: Decimal(str(economy))}
    if business is not None:
        cabin_prices[CabinClass.business] = Decimal(str(business))
    return FlightOffer(
        offer_id=offer_id,
        origin=origin,
        destination=destination,
        name=f"{offer_id} {origin}-{destination}",
        airline="XX",
        flight_number=offer_id.upper(),
        departure=departure,
        arrival=departure + timedelta(hours=7),
        price=Money(amount=Decimal(str(economy))),
        cabin_prices=cabin_prices,
        synthetic=synthetic,
        provenance=_provenance(),
    )


def make_hotel(
    offer_id: str,
    stars: int,
    nightly: int | str,
    total: int | str,
    *,
    destination: str = "CDG",
    synthetic: bool = False,
) -> HotelOffer:
    return HotelOffer(
        offer_id=offer_id,
        destination=destination,
        name=f"Hotel {offer_id}",
        check_in=TRIP_START,
        check_out=TRIP_END,
        nightly_rate=Money(amount=Decimal(str(nightly))),
        stars=stars,
        price=Money(amount=Decimal(str(total))),
        synthetic=synthetic,
        provenance=_provenance(),
    )


def make_activity(
    offer_id: str,
    price: int | str,
    *,
    destination: str = "CDG",
    currency: str = "USD",
    synthetic: bool = False,
) -> ActivityOffer:
    return ActivityOffer(
        offer_id=offer_id,
        destination=destination,
        name=f"Activity {offer_id}",
        activity_type="tour",
        duration_hours=2,
        price=Money(amount=Decimal(str(price)), currency=currency),
        synthetic=synthetic,
        provenance=_provenance(),
    )


@pytest.fixture
def flight_factory() -> Callable[..., FlightOffer]:
    return make_flight


@pytest.fixture
def hotel_factory() -> Callable[..., HotelOffer]:
    return make_hotel


@pytest.fixture
def activity_factory() -> Callable[..., ActivityOffer]:
    return make_activity


def regression_flights(origin: str, destination: str) -> list[FlightOffer]:
    """Three flights: economy [100, 200, 300], business [500, 800, 1100]."""
    prefix = f"{origin.lower()}_{destination.lower()}"
    return [
        make_flight(f"{prefix}_1", 100, 500, origin=origin, destination=destination),
        make_flight(f"{prefix}_2", 200, 800, origin=origin, destination=destination),
        make_flight(f"{prefix}_3", 300, 1100, origin=origin, destination=destination),
    ]


def regression_hotels(destination: str = "CDG") -> list[HotelOffer]:
    """Three hotels: stars [2, 3, 5], nightly [50, 100, 300], stay totals [150, 300, 900]."""
    return [
        make_hotel("hotel_2star", 2, 50, 150, destination=destination),
        make_hotel("hotel_3star", 3, 100, 300, destination=destination),
        make_hotel("hotel_5star", 5, 300, 900, destination=destination),
    ]


def regression_activities(destination: str = "CDG") -> list[ActivityOffer]:
    """Five activities priced [10, 20, 30, 40, 50] per adult."""
    return [
        make_activity(f"act_{price}", price, destination=destination)
        for price in (10, 20, 30, 40, 50)
    ]


@pytest.fixture
def regression_result_sets() -> dict[str, Any]:
    """Hand-built result sets for JFK -> CDG -> JFK with one adult."""
    flights: ProviderResultSet[FlightOffer] = ProviderResultSet(OfferCategory.flight)
    flights.add("outbound:JFK-CDG", regression_flights("JFK", "CDG"))
    flights.add("return:CDG-JFK", regression_flights("CDG", "JFK"))

    hotels: ProviderResultSet[HotelOffer] = ProviderResultSet(OfferCategory.hotel)
    hotels.add("CDG", regression_hotels())

    activities: ProviderResultSet[ActivityOffer] = ProviderResultSet(OfferCategory.activity)
    activities.add("CDG", regression_activities())

    return {
        "flights": flights,
        "hotels": hotels,
        "activities": activities,
        "legs": ["outbound:JFK-CDG", "return:CDG-JFK"],
        "destinations": ["CDG"],
    }


class StaticFlightSearch:
    """Returns the regression flights for any route; records calls."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, date]] = []

    async def search(
        self,
        origin: str,
        destination: str,
        on_date: date,
        travelers: TravelerCounts,
        cabin_class: CabinClass,
    ) -> list[FlightOffer]:
        self.calls.append((origin, destination, on_date))
        return regression_flights(origin, destination)


class StaticHotelSearch:
    def __init__(self) -> None:
        self.calls: list[str] = []

    async def search(
        self,
        destination: str,
        check_in: date,
        check_out: date,
        travelers: TravelerCounts,
        budget_hint: Decimal | None,
    ) -> list[HotelOffer]:
        self.calls.append(destination)
        return regression_hotels(destination)


class StaticActivitySearch:
    def __init__(self) -> None:
        self.calls: list[str] = []

    async def search(self, destination: str, preferences: Preferences) -> list[ActivityOffer]:
        self.calls.append(destination)
        return regression_activities(destination)


class StaticWeather:
    def __init__(self) -> None:
        self.calls: list[str] = []

    async def forecast(self, destination: str, start_date: date, end_date: date) -> WeatherSummary:
        self.calls.append(destination)
        return WeatherSummary(
            destination=destination,
            forecast=[
                WeatherDay(
                    date=start_date,
                    condition="Clear",
                    temp_high_c=24.0,
                    temp_low_c=15.0,
                    precip_chance=0.1,
                )
            ],
            provenance=_provenance("provider.test.weather"),
        )


class FailingProvider:
    """Every call raises; counts how often it was invoked."""

    def __init__(self, exc: Exception | None = None) -> None:
        self.exc = exc or RuntimeError("provider unavailable")
        self.calls = 0

    async def search(self, *args: Any, **kwargs: Any) -> Any:
        self.calls += 1
        raise self.exc

    async def forecast(self, *args: Any, **kwargs: Any) -> Any:
        self.calls += 1
        raise self.exc


@pytest.fixture
def static_providers() -> dict[str, Any]:
    return {
        "flights": StaticFlightSearch(),
        "hotels": StaticHotelSearch(),
        "activities": StaticActivitySearch(),
        "weather": StaticWeather(),
    }


@pytest.fixture
def failing_provider_factory() -> Callable[..., FailingProvider]:
    return FailingProvider
