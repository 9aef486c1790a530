"""Synthetic stand-in offers for failed provider calls.

Output is structurally valid but not an estimate: every offer is tagged
``synthetic=True``. Each call draws from its own ``random.Random`` seeded from
the base seed and the call arguments, so the same inputs always produce the
same offers and no global random state is touched.
"""

import hashlib
import random
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from backend.trips.adapters.provenance import provenance_for_fallback
from backend.trips.models.common import CabinClass, Money, OfferCategory, TravelerCounts
from backend.trips.models.offers import (
    ActivityOffer,
    FlightOffer,
    HotelOffer,
    WeatherDay,
    WeatherSummary,
)

FLIGHT_COUNT = 5
HOTEL_COUNT = 10

AIRLINES = ["AA", "DL", "UA", "BA", "LH", "AF", "KL", "TK"]
HOTEL_TYPES = ["Budget Inn", "Comfort Hotel", "Business Hotel", "Luxury Resort", "Boutique Hotel"]
ACTIVITY_ARCHETYPES = [
    "Tour",
    "Museum",
    "Adventure",
    "Cultural",
    "Food",
    "Shopping",
    "Entertainment",
]
WEATHER_CONDITIONS = ["Sunny", "Partly Cloudy", "Cloudy", "Light Rain", "Clear"]


class FallbackGenerator:
    """Deterministically seeded generator of synthetic provider results."""

    def __init__(self, seed: int = 42) -> None:
        self.seed = seed

    def _rng(self, *parts: object) -> random.Random:
        key = ":".join(str(p) for p in (self.seed, *parts))
        digest = hashlib.sha256(key.encode()).digest()
        return random.Random(int.from_bytes(digest[:8], "big"))

    def generate(
        self,
        category: OfferCategory,
        destination: str,
        *,
        on_date: date,
        travelers: TravelerCounts,
        origin: str | None = None,
        check_out: date | None = None,
        currency: str = "USD",
    ) -> list[FlightOffer] | list[HotelOffer] | list[ActivityOffer]:
        """Synthetic offers for one category and destination.

        Args:
            category: Offer category to stand in for
            destination: Destination code (arrival airport for flights)
            on_date: Departure date for flights, check-in date for hotels
            travelers: Party composition
            origin: Departure airport (flights only)
            check_out: Check-out date (hotels only; defaults to one night)
            currency: Currency for every generated price

        Returns:
            5 flights, 10 hotels, or one activity per archetype
        """
        if category == OfferCategory.flight:
            return self.flights(origin or destination, destination, on_date, currency=currency)
        if category == OfferCategory.hotel:
            return self.hotels(
                destination,
                on_date,
                check_out or on_date + timedelta(days=1),
                guests=travelers.total_guests,
                currency=currency,
            )
        return self.activities(destination, currency=currency)

    def flights(
        self, origin: str, destination: str, on_date: date, *, currency: str = "USD"
    ) -> list[FlightOffer]:
        rng = self._rng(OfferCategory.flight.value, origin, destination, on_date.isoformat())
        route = f"{origin}-{destination}"
        offers = []
        for i in range(FLIGHT_COUNT):
            departure = datetime.combine(on_date, time(6 + i * 2, rng.randrange(60)))
            duration = timedelta(hours=rng.randint(2, 9), minutes=rng.randrange(60))
            economy = Decimal(rng.randint(200, 999))
            carrier = AIRLINES[i % len(AIRLINES)]
            offers.append(
                FlightOffer(
                    offer_id=f"flight_{origin}_{destination}_{i}",
                    origin=origin,
                    destination=destination,
                    name=f"{carrier} {route}",
                    airline=carrier,
                    flight_number=f"{carrier}{rng.randint(1000, 9999)}",
                    departure=departure,
                    arrival=departure + duration,
                    stops=rng.randint(0, 2),
                    price=Money(amount=economy, currency=currency),
                    cabin_prices={
                        CabinClass.economy: economy,
                        CabinClass.business: Decimal(rng.randint(1000, 2999)),
                        CabinClass.first: Decimal(rng.randint(3000, 6999)),
                    },
                    synthetic=True,
                    provenance=provenance_for_fallback(OfferCategory.flight.value, route),
                )
            )
        return offers

    def hotels(
        self,
        destination: str,
        check_in: date,
        check_out: date,
        *,
        guests: int = 2,
        currency: str = "USD",
    ) -> list[HotelOffer]:
        if check_out <= check_in:
            check_out = check_in + timedelta(days=1)
        nights = (check_out - check_in).days
        rng = self._rng(
            OfferCategory.hotel.value, destination, check_in.isoformat(), nights, guests
        )
        offers = []
        for i in range(HOTEL_COUNT):
            nightly = Decimal(rng.randint(50, 349))
            hotel_type = HOTEL_TYPES[i % len(HOTEL_TYPES)]
            offers.append(
                HotelOffer(
                    offer_id=f"hotel_{destination}_{i}",
                    destination=destination,
                    name=f"{hotel_type} {destination}",
                    check_in=check_in,
                    check_out=check_out,
                    nightly_rate=Money(amount=nightly, currency=currency),
                    stars=rng.randint(3, 5),
                    review_score=round(rng.uniform(3.0, 5.0), 1),
                    price=Money(amount=nightly * nights, currency=currency),
                    synthetic=True,
                    provenance=provenance_for_fallback(OfferCategory.hotel.value, destination),
                )
            )
        return offers

    def activities(self, destination: str, *, currency: str = "USD") -> list[ActivityOffer]:
        rng = self._rng(OfferCategory.activity.value, destination)
        offers = []
        for i, archetype in enumerate(ACTIVITY_ARCHETYPES):
            offers.append(
                ActivityOffer(
                    offer_id=f"activity_{destination}_{archetype}_{i}",
                    destination=destination,
                    name=f"{archetype} Experience in {destination}",
                    activity_type=archetype.lower(),
                    duration_hours=rng.randint(2, 7),
                    rating=round(rng.uniform(3.0, 5.0), 1),
                    price=Money(amount=Decimal(rng.randint(20, 119)), currency=currency),
                    child_price=Money(amount=Decimal(rng.randint(10, 59)), currency=currency),
                    synthetic=True,
                    provenance=provenance_for_fallback(OfferCategory.activity.value, destination),
                )
            )
        return offers

    def forecast(self, destination: str, start_date: date, end_date: date) -> WeatherSummary:
        """Synthetic forecast covering the trip dates (at least one day)."""
        rng = self._rng("weather", destination, start_date.isoformat(), end_date.isoformat())
        days = max((end_date - start_date).days, 1)
        forecast = [
            WeatherDay(
                date=start_date + timedelta(days=i),
                condition=rng.choice(WEATHER_CONDITIONS),
                temp_high_c=rng.randint(20, 34),
                temp_low_c=rng.randint(10, 19),
                precip_chance=rng.randrange(30) / 100.0,
            )
            for i in range(days)
        ]
        return WeatherSummary(
            destination=destination,
            forecast=forecast,
            synthetic=True,
            provenance=provenance_for_fallback("weather", destination),
        )
