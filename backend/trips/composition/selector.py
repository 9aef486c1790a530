"""Tier selection - picks one flight per leg, one hotel and a bounded activity set per destination.

The rule table below defines the product's pricing tiers:

| tier     | flight                        | hotel                         | activities           |
|----------|-------------------------------|-------------------------------|----------------------|
| budget   | lowest economy fare           | lowest nightly rate           | 2 cheapest per adult |
| standard | median economy fare           | first 3-4 star, else first    | first 3              |
| luxury   | highest business fare         | first 4+ star, else first     | first 5              |

Budget and standard compare economy fares while luxury compares business
fares. That asymmetry is the observed pricing behavior and is kept as-is.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from backend.trips.composition.errors import CompositionError
from backend.trips.composition.result_set import ProviderResultSet
from backend.trips.models.common import CabinClass, OfferCategory, Tier
from backend.trips.models.offers import ActivityOffer, FlightOffer, HotelOffer
from backend.trips.models.package import DestinationSelection

logger = logging.getLogger(__name__)


def _cheapest_economy(flights: list[FlightOffer]) -> FlightOffer:
    return min(flights, key=lambda f: f.fare(CabinClass.economy))


def _median_economy(flights: list[FlightOffer]) -> FlightOffer:
    # stable sort: equal fares keep provider order
    ranked = sorted(flights, key=lambda f: f.fare(CabinClass.economy))
    return ranked[len(ranked) // 2]


def _priciest_business(flights: list[FlightOffer]) -> FlightOffer:
    return max(flights, key=lambda f: f.fare(CabinClass.business))


def _cheapest_nightly(hotels: list[HotelOffer]) -> HotelOffer:
    return min(hotels, key=lambda h: h.nightly_rate.amount)


def _first_mid_star(hotels: list[HotelOffer]) -> HotelOffer:
    return next((h for h in hotels if 3 <= h.stars <= 4), hotels[0])


def _first_high_star(hotels: list[HotelOffer]) -> HotelOffer:
    return next((h for h in hotels if h.stars >= 4), hotels[0])


def _cheapest(n: int) -> Callable[[list[ActivityOffer]], list[ActivityOffer]]:
    def pick(activities: list[ActivityOffer]) -> list[ActivityOffer]:
        return sorted(activities, key=lambda a: a.price.amount)[:n]

    return pick


def _first(n: int) -> Callable[[list[ActivityOffer]], list[ActivityOffer]]:
    def pick(activities: list[ActivityOffer]) -> list[ActivityOffer]:
        return activities[:n]

    return pick


@dataclass(frozen=True)
class TierRule:
    """Selection rule for one tier."""

    flight: Callable[[list[FlightOffer]], FlightOffer]
    fare_cabin: CabinClass  # cabin the flight rule compares on; also the priced fare
    hotel: Callable[[list[HotelOffer]], HotelOffer]
    activities: Callable[[list[ActivityOffer]], list[ActivityOffer]]


TIER_RULES: dict[Tier, TierRule] = {
    Tier.budget: TierRule(
        flight=_cheapest_economy,
        fare_cabin=CabinClass.economy,
        hotel=_cheapest_nightly,
        activities=_cheapest(2),
    ),
    Tier.standard: TierRule(
        flight=_median_economy,
        fare_cabin=CabinClass.economy,
        hotel=_first_mid_star,
        activities=_first(3),
    ),
    Tier.luxury: TierRule(
        flight=_priciest_business,
        fare_cabin=CabinClass.business,
        hotel=_first_high_star,
        activities=_first(5),
    ),
}


@dataclass(frozen=True)
class TierSelection:
    """Components chosen for one tier, not yet priced."""

    tier: Tier
    fare_cabin: CabinClass
    flights: list[FlightOffer]
    destinations: list[DestinationSelection]


class TierSelector:
    """Applies the tier rule table to provider result sets."""

    def __init__(self, rules: dict[Tier, TierRule] | None = None) -> None:
        self._rules = rules or TIER_RULES

    def select(
        self,
        tier: Tier,
        *,
        flights: ProviderResultSet[FlightOffer],
        hotels: ProviderResultSet[HotelOffer],
        activities: ProviderResultSet[ActivityOffer],
        legs: list[str],
        destinations: list[str],
    ) -> TierSelection:
        """Select components for one tier.

        Args:
            tier: Tier whose rule to apply
            flights: Flight offers keyed by leg
            hotels: Hotel offers keyed by destination
            activities: Activity offers keyed by destination
            legs: Leg keys in itinerary order (outbound legs, then return)
            destinations: Destination codes in itinerary order

        Returns:
            TierSelection with one flight per leg and one hotel per destination

        Raises:
            CompositionError: A leg has no flights or a destination has no hotels
        """
        rule = self._rules[tier]

        chosen_flights = []
        for leg in legs:
            offers = flights.get(leg)
            if not offers:
                raise CompositionError(OfferCategory.flight.value, leg)
            chosen_flights.append(rule.flight(offers))

        chosen_destinations = []
        for destination in destinations:
            hotel_offers = hotels.get(destination)
            if not hotel_offers:
                raise CompositionError(OfferCategory.hotel.value, destination)
            chosen_destinations.append(
                DestinationSelection(
                    destination=destination,
                    hotel=rule.hotel(hotel_offers),
                    activities=rule.activities(activities.get(destination)),
                )
            )

        logger.debug(
            f"Tier selection: {tier.value}",
            extra={
                "structured": {
                    "tier": tier.value,
                    "flights": [f.offer_id for f in chosen_flights],
                    "hotels": [d.hotel.offer_id for d in chosen_destinations],
                }
            },
        )

        return TierSelection(
            tier=tier,
            fare_cabin=rule.fare_cabin,
            flights=chosen_flights,
            destinations=chosen_destinations,
        )

    def select_all(
        self,
        *,
        flights: ProviderResultSet[FlightOffer],
        hotels: ProviderResultSet[HotelOffer],
        activities: ProviderResultSet[ActivityOffer],
        legs: list[str],
        destinations: list[str],
    ) -> dict[Tier, TierSelection]:
        """Select components for every tier, in tier order."""
        return {
            tier: self.select(
                tier,
                flights=flights,
                hotels=hotels,
                activities=activities,
                legs=legs,
                destinations=destinations,
            )
            for tier in Tier
        }
