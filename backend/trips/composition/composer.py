"""Package composition - prices tier selections into TripPackage objects."""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from backend.trips.composition.errors import CompositionError
from backend.trips.composition.selector import TierSelection
from backend.trips.models.common import CabinClass, Money, Tier
from backend.trips.models.offers import FlightOffer
from backend.trips.models.package import TripPackage


@dataclass(frozen=True)
class TierProfile:
    """Display metadata for a tier."""

    name: str
    description: str
    rating: float
    highlights: list[str] = field(default_factory=list)


TIER_PROFILES: dict[Tier, TierProfile] = {
    Tier.budget: TierProfile(
        name="Budget Explorer",
        description="Affordable travel without compromising on experience",
        rating=4.0,
        highlights=[
            "Best value for money",
            "Essential experiences included",
            "Comfortable accommodations",
        ],
    ),
    Tier.standard: TierProfile(
        name="Comfort Traveler",
        description="Perfect balance of comfort and value",
        rating=4.5,
        highlights=[
            "Balanced comfort and price",
            "Quality accommodations",
            "Popular attractions included",
        ],
    ),
    Tier.luxury: TierProfile(
        name="Premium Experience",
        description="Luxury travel with premium services",
        rating=5.0,
        highlights=[
            "Premium accommodations",
            "Exclusive experiences",
            "VIP services included",
        ],
    ),
}

WHOLE_UNIT = Decimal("1")


def price_selection(selection: TierSelection, *, adults: int) -> Decimal:
    """Total price of a tier selection, rounded to whole currency units.

    Sum of:
    - every flight leg at the fare of the tier's compared cabin
    - every hotel's stay total (not the nightly rate)
    - every selected activity's per-adult price times the number of adults
    """
    total = Decimal(0)
    for flight in selection.flights:
        total += flight.fare(selection.fare_cabin)
    for dest in selection.destinations:
        total += dest.hotel.price.amount
        for activity in dest.activities:
            total += activity.price.amount * adults
    return total.quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP)


def charged_flight(flight: FlightOffer, cabin: CabinClass) -> FlightOffer:
    """Copy of a flight whose quoted price is the fare charged for ``cabin``."""
    fare = flight.fare(cabin)
    if fare == flight.price.amount:
        return flight
    return flight.model_copy(update={"price": Money(amount=fare, currency=flight.price.currency)})


def _component_currencies(selection: TierSelection) -> set[str]:
    currencies = {f.price.currency for f in selection.flights}
    for dest in selection.destinations:
        currencies.add(dest.hotel.price.currency)
        currencies.update(a.price.currency for a in dest.activities)
    return currencies


def _is_synthetic(selection: TierSelection) -> bool:
    if any(f.synthetic for f in selection.flights):
        return True
    for dest in selection.destinations:
        if dest.hotel.synthetic or any(a.synthetic for a in dest.activities):
            return True
    return False


class PackageComposer:
    """Builds the budget, standard, and luxury packages from tier selections."""

    def __init__(self, profiles: dict[Tier, TierProfile] | None = None) -> None:
        self._profiles = profiles or TIER_PROFILES

    def compose(
        self,
        selections: dict[Tier, TierSelection],
        *,
        adults: int,
        currency: str,
        budget: Decimal | None = None,
    ) -> list[TripPackage]:
        """Price every selection and return the packages within budget.

        Args:
            selections: One TierSelection per tier (luxury is required for savings)
            adults: Number of adult travelers (activity prices are per adult)
            currency: Package currency; every component must be quoted in it
            budget: Optional ceiling; packages priced above it are excluded

        Returns:
            Packages in tier order. May be empty when every tier exceeds the budget.

        Raises:
            ValueError: No luxury selection was given
            CompositionError: A component is quoted in a currency other than ``currency``
        """
        if Tier.luxury not in selections:
            raise ValueError("luxury selection is required to compute savings")

        currency = currency.upper()
        for tier, selection in selections.items():
            foreign = _component_currencies(selection) - {currency}
            if foreign:
                raise CompositionError(
                    "currency",
                    tier.value,
                    f"{tier.value} package mixes currencies: components quoted in "
                    f"{', '.join(sorted(foreign))}, package currency is {currency}",
                )

        totals = {tier: price_selection(sel, adults=adults) for tier, sel in selections.items()}
        luxury_total = totals[Tier.luxury]

        packages = []
        for tier in Tier:
            if tier not in selections:
                continue
            selection = selections[tier]
            profile = self._profiles[tier]
            packages.append(
                TripPackage(
                    tier=tier,
                    name=profile.name,
                    description=profile.description,
                    fare_cabin=selection.fare_cabin,
                    adults=adults,
                    flights=tuple(
                        charged_flight(f, selection.fare_cabin) for f in selection.flights
                    ),
                    destinations=tuple(selection.destinations),
                    total_price=totals[tier],
                    currency=currency,
                    savings=Decimal(0) if tier == Tier.luxury else luxury_total - totals[tier],
                    rating=profile.rating,
                    highlights=tuple(profile.highlights),
                    synthetic=_is_synthetic(selection),
                )
            )

        if budget is not None:
            packages = [p for p in packages if p.total_price <= budget]

        return packages
