"""Fixture-based provider adapters for flights, hotels, and activities.

Unknown routes and cities raise ProviderError so the orchestrator substitutes
fallback output, the same as it would for a live provider outage.
"""

import json
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Any

from backend.trips.adapters.provenance import provenance_for_fixture
from backend.trips.composition.errors import ProviderError
from backend.trips.models.common import CabinClass, Money, TravelerCounts
from backend.trips.models.offers import ActivityOffer, FlightOffer, HotelOffer
from backend.trips.models.search import Preferences

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def _load(fixtures_dir: Path, name: str) -> dict[str, Any]:
    with open(fixtures_dir / name) as f:
        data: dict[str, Any] = json.load(f)
    return data


class FixtureFlightSearch:
    """Flight search backed by flights.json, keyed by "<origin>_<destination>"."""

    def __init__(self, fixtures_dir: Path | None = None) -> None:
        self._dir = fixtures_dir or FIXTURES_DIR

    async def search(
        self,
        origin: str,
        destination: str,
        on_date: date,
        travelers: TravelerCounts,
        cabin_class: CabinClass,
    ) -> list[FlightOffer]:
        """Fetch flight options for one route and date.

        Args:
            origin: Origin IATA code
            destination: Destination IATA code
            on_date: Departure date
            travelers: Party composition (fares are per booking, not per seat)
            cabin_class: Requested cabin; its fare becomes the quoted price

        Returns:
            FlightOffer list in fixture order

        Raises:
            ProviderError: Route not covered by fixtures
        """
        data = _load(self._dir, "flights.json")

        route_key = f"{origin}_{destination}"
        if route_key not in data:
            raise ProviderError("fixtures.flights", route_key, f"no fixture route {route_key}")

        flights = []
        for fd in data[route_key]:
            cabin_prices = {CabinClass(k): Decimal(str(v)) for k, v in fd["price"].items()}
            departure = datetime.combine(on_date, time.fromisoformat(fd["departure"]))
            quoted = cabin_prices.get(cabin_class, cabin_prices[CabinClass.economy])
            flights.append(
                FlightOffer(
                    offer_id=fd["flight_id"],
                    origin=origin,
                    destination=destination,
                    name=f"{fd['flight_number']} {origin}-{destination}",
                    airline=fd["airline"],
                    flight_number=fd["flight_number"],
                    departure=departure,
                    arrival=departure + timedelta(minutes=fd["duration_minutes"]),
                    stops=fd["stops"],
                    price=Money(amount=quoted, currency=fd["currency"]),
                    cabin_prices=cabin_prices,
                    provenance=provenance_for_fixture("fixtures.flights", route_key),
                )
            )

        return flights


class FixtureHotelSearch:
    """Hotel search backed by hotels.json, keyed by destination code."""

    def __init__(self, fixtures_dir: Path | None = None) -> None:
        self._dir = fixtures_dir or FIXTURES_DIR

    async def search(
        self,
        destination: str,
        check_in: date,
        check_out: date,
        travelers: TravelerCounts,
        budget_hint: Decimal | None,
    ) -> list[HotelOffer]:
        """Fetch hotel options with stay totals for the requested nights.

        The budget hint is advisory; every fixture hotel is returned so that
        each tier has candidates to choose from.

        Raises:
            ProviderError: Destination not covered by fixtures
        """
        data = _load(self._dir, "hotels.json")

        if destination not in data:
            raise ProviderError(
                "fixtures.hotels", destination, f"no fixture hotels for {destination}"
            )

        nights = max((check_out - check_in).days, 1)
        hotels = []
        for hd in data[destination]:
            nightly = Decimal(str(hd["price_per_night"]))
            hotels.append(
                HotelOffer(
                    offer_id=hd["hotel_id"],
                    destination=destination,
                    name=hd["name"],
                    check_in=check_in,
                    check_out=check_in + timedelta(days=nights),
                    nightly_rate=Money(amount=nightly, currency=hd["currency"]),
                    stars=hd["stars"],
                    review_score=hd.get("review_score"),
                    price=Money(amount=nightly * nights, currency=hd["currency"]),
                    provenance=provenance_for_fixture("fixtures.hotels", destination),
                )
            )

        return hotels


class FixtureActivitySearch:
    """Activity search backed by activities.json, keyed by destination code."""

    def __init__(self, fixtures_dir: Path | None = None) -> None:
        self._dir = fixtures_dir or FIXTURES_DIR

    async def search(self, destination: str, preferences: Preferences) -> list[ActivityOffer]:
        """Fetch activities, narrowed to the preferred activity types when any match.

        Raises:
            ProviderError: Destination not covered by fixtures
        """
        data = _load(self._dir, "activities.json")

        if destination not in data:
            raise ProviderError(
                "fixtures.activities", destination, f"no fixture activities for {destination}"
            )

        activities_data = data[destination]
        if preferences.activities:
            preferred = [ad for ad in activities_data if ad["type"] in preferences.activities]
            # Fall back to the full list rather than return nothing
            if preferred:
                activities_data = preferred

        activities = []
        for ad in activities_data:
            child_price = ad.get("price_child")
            activities.append(
                ActivityOffer(
                    offer_id=ad["activity_id"],
                    destination=destination,
                    name=ad["name"],
                    activity_type=ad["type"],
                    duration_hours=ad["duration_hours"],
                    rating=ad.get("rating"),
                    price=Money(amount=Decimal(str(ad["price_adult"])), currency=ad["currency"]),
                    child_price=(
                        Money(amount=Decimal(str(child_price)), currency=ad["currency"])
                        if child_price is not None
                        else None
                    ),
                    provenance=provenance_for_fixture("fixtures.activities", destination),
                )
            )

        return activities
