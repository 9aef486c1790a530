"""Trip package orchestration.

Queries every provider for every destination (plus one return flight leg)
concurrently, substitutes fallback output for any failed or timed-out call,
then runs tier selection and package composition over the collected results.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from functools import partial
from typing import Literal, TypeVar

from pydantic import TypeAdapter, ValidationError

from backend.trips.composition.composer import PackageComposer
from backend.trips.composition.errors import (
    CompositionTimeoutError,
    ProviderError,
    ProviderTimeoutError,
)
from backend.trips.composition.fallback import FallbackGenerator
from backend.trips.composition.result_set import ProviderResultSet
from backend.trips.composition.selector import TierSelector
from backend.trips.config import Settings, get_settings
from backend.trips.models.common import OfferCategory
from backend.trips.models.offers import ActivityOffer, FlightOffer, HotelOffer, WeatherSummary
from backend.trips.models.package import (
    ActivityResults,
    FlightLeg,
    HotelResults,
    PackageSearchResponse,
    RawResults,
    SearchMeta,
)
from backend.trips.models.search import SearchRequest
from backend.trips.services.providers import ProviderSuite
from backend.trips.utils.logging import StructuredProviderLogger
from backend.trips.utils.metrics import ProviderMetrics

logger = logging.getLogger(__name__)

T = TypeVar("T")

FLIGHTS_ADAPTER = TypeAdapter(list[FlightOffer])
HOTELS_ADAPTER = TypeAdapter(list[HotelOffer])
ACTIVITIES_ADAPTER = TypeAdapter(list[ActivityOffer])
WEATHER_ADAPTER = TypeAdapter(WeatherSummary)


@dataclass(frozen=True)
class Leg:
    """One flight leg of the itinerary."""

    leg_type: Literal["outbound", "return"]
    origin: str
    destination: str
    departure_date: date

    @property
    def route(self) -> str:
        return f"{self.origin}-{self.destination}"

    @property
    def key(self) -> str:
        return f"{self.leg_type}:{self.route}"


def plan_legs(request: SearchRequest) -> list[Leg]:
    """Outbound leg to every destination on the start date, then one return leg."""
    legs = [
        Leg("outbound", request.origin, dest, request.start_date) for dest in request.destinations
    ]
    legs.append(Leg("return", request.last_destination, request.origin, request.end_date))
    return legs


class TripPackageService:
    """Composes tiered trip packages from unreliable provider results."""

    def __init__(
        self,
        providers: ProviderSuite,
        *,
        settings: Settings | None = None,
        fallback: FallbackGenerator | None = None,
        selector: TierSelector | None = None,
        composer: PackageComposer | None = None,
        call_logger: StructuredProviderLogger | None = None,
        metrics: ProviderMetrics | None = None,
    ) -> None:
        self._providers = providers
        self._settings = settings or get_settings()
        self._fallback = fallback or FallbackGenerator(seed=self._settings.fallback_seed)
        self._selector = selector or TierSelector()
        self._composer = composer or PackageComposer()
        self._call_logger = call_logger or StructuredProviderLogger()
        self._metrics = metrics or ProviderMetrics()

    async def compose(self, request: SearchRequest) -> PackageSearchResponse:
        """Compose packages for a search request.

        Returns:
            Packages (possibly empty when all exceed the budget) and the raw
            per-category results they were built from

        Raises:
            CompositionError: A required category has no offers after fallback
            CompositionTimeoutError: The whole request exceeded its deadline
        """
        timeout = self._settings.composition_timeout_seconds
        try:
            return await asyncio.wait_for(self._compose(request), timeout=timeout)
        except TimeoutError as e:
            raise CompositionTimeoutError(timeout) from e

    async def _compose(self, request: SearchRequest) -> PackageSearchResponse:
        logger.info(
            "Creating trip packages",
            extra={
                "structured": {
                    "origin": request.origin,
                    "destinations": request.destinations,
                    "start_date": request.start_date.isoformat(),
                    "end_date": request.end_date.isoformat(),
                }
            },
        )

        legs = plan_legs(request)
        flight_results, hotel_results, activity_results, weather_results = await asyncio.gather(
            asyncio.gather(*(self._search_flights(request, leg) for leg in legs)),
            asyncio.gather(*(self._search_hotels(request, d) for d in request.destinations)),
            asyncio.gather(*(self._search_activities(request, d) for d in request.destinations)),
            asyncio.gather(*(self._forecast(request, d) for d in request.destinations)),
        )

        flights: ProviderResultSet[FlightOffer] = ProviderResultSet(OfferCategory.flight)
        for leg, (offers, synthetic) in zip(legs, flight_results, strict=True):
            flights.add(leg.key, offers, synthetic=synthetic)

        hotels: ProviderResultSet[HotelOffer] = ProviderResultSet(OfferCategory.hotel)
        activities: ProviderResultSet[ActivityOffer] = ProviderResultSet(OfferCategory.activity)
        for dest, (hotel_offers, hotel_synthetic), (activity_offers, activity_synthetic) in zip(
            request.destinations, hotel_results, activity_results, strict=True
        ):
            hotels.add(dest, hotel_offers, synthetic=hotel_synthetic)
            activities.add(dest, activity_offers, synthetic=activity_synthetic)

        weather = [summary for summary, _ in weather_results]

        selections = self._selector.select_all(
            flights=flights,
            hotels=hotels,
            activities=activities,
            legs=[leg.key for leg in legs],
            destinations=request.destinations,
        )
        packages = self._composer.compose(
            selections,
            adults=request.travelers.adults,
            currency=request.currency,
            budget=request.budget,
        )
        for package in packages:
            self._metrics.inc_packages(package.tier.value)

        raw_results = RawResults(
            flights=[
                FlightLeg(
                    leg_type=leg.leg_type,
                    route=leg.route,
                    origin=leg.origin,
                    destination=leg.destination,
                    offers=flights.get(leg.key),
                    synthetic=flights.is_synthetic(leg.key),
                )
                for leg in legs
            ],
            hotels=[
                HotelResults(destination=d, offers=hotels.get(d), synthetic=hotels.is_synthetic(d))
                for d in request.destinations
            ],
            activities=[
                ActivityResults(
                    destination=d, offers=activities.get(d), synthetic=activities.is_synthetic(d)
                )
                for d in request.destinations
            ],
            weather=weather,
        )

        logger.info(
            f"Composed {len(packages)} trip packages",
            extra={"structured": {"tiers": [p.tier.value for p in packages]}},
        )

        return PackageSearchResponse(
            packages=packages,
            raw_results=raw_results,
            meta=SearchMeta(
                searched_at=datetime.now(UTC),
                currency=request.currency,
                total_packages=len(packages),
                synthetic_categories=_synthetic_categories(raw_results),
            ),
        )

    async def _call(
        self,
        provider: str,
        key: str,
        call: Callable[[], Awaitable[T]],
        fallback: Callable[[], T],
        adapter: TypeAdapter[T],
    ) -> tuple[T, bool]:
        """Run one provider call; on any failure return fallback output instead.

        No retry: a single failure triggers exactly one substitution.

        Returns:
            (result, synthetic) where synthetic is True when fallback was used
        """
        start = time.monotonic()
        try:
            result = await self._invoke(provider, key, call, adapter)
        except ProviderTimeoutError:
            outcome, reason = "timeout", "timeout"
        except ProviderError as e:
            outcome, reason = "error", type(e.__cause__ or e).__name__
        else:
            elapsed_ms = (time.monotonic() - start) * 1000
            self._metrics.record_latency(provider, "success", elapsed_ms)
            self._call_logger.log_call(provider, key, "success", elapsed_ms)
            return result, False

        elapsed_ms = (time.monotonic() - start) * 1000
        self._metrics.record_latency(provider, outcome, elapsed_ms)
        self._metrics.inc_fallback(provider, reason)
        self._call_logger.log_call(
            provider, key, outcome, elapsed_ms, synthetic=True, error_reason=reason
        )
        return fallback(), True

    async def _invoke(
        self,
        provider: str,
        key: str,
        call: Callable[[], Awaitable[T]],
        adapter: TypeAdapter[T],
    ) -> T:
        """Run a provider call under the per-call timeout and validate its result.

        Raises:
            ProviderTimeoutError: The call exceeded provider_timeout_seconds
            ProviderError: The call raised anything else, or returned data that
                does not match the expected shape (None, wrong offer category)
        """
        timeout = self._settings.provider_timeout_seconds
        try:
            result = await asyncio.wait_for(call(), timeout=timeout)
        except TimeoutError as e:
            raise ProviderTimeoutError(provider, key, timeout) from e
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(provider, key, f"{provider} failed for {key}: {e}") from e

        try:
            return adapter.validate_python(result)
        except ValidationError as e:
            message = f"{provider} returned invalid data for {key}: {e.error_count()} errors"
            raise ProviderError(provider, key, message) from e

    async def _search_flights(
        self, request: SearchRequest, leg: Leg
    ) -> tuple[list[FlightOffer], bool]:
        return await self._call(
            "flights",
            leg.key,
            partial(
                self._providers.flights.search,
                leg.origin,
                leg.destination,
                leg.departure_date,
                request.travelers,
                request.cabin_class,
            ),
            partial(
                self._fallback.generate,
                OfferCategory.flight,
                leg.destination,
                on_date=leg.departure_date,
                travelers=request.travelers,
                origin=leg.origin,
                currency=self._settings.provider_currency,
            ),
            FLIGHTS_ADAPTER,
        )

    async def _search_hotels(
        self, request: SearchRequest, destination: str
    ) -> tuple[list[HotelOffer], bool]:
        check_in = request.start_date
        check_out = check_in + timedelta(days=request.nights)
        return await self._call(
            "hotels",
            destination,
            partial(
                self._providers.hotels.search,
                destination,
                check_in,
                check_out,
                request.travelers,
                request.budget,
            ),
            partial(
                self._fallback.generate,
                OfferCategory.hotel,
                destination,
                on_date=check_in,
                travelers=request.travelers,
                check_out=check_out,
                currency=self._settings.provider_currency,
            ),
            HOTELS_ADAPTER,
        )

    async def _search_activities(
        self, request: SearchRequest, destination: str
    ) -> tuple[list[ActivityOffer], bool]:
        return await self._call(
            "activities",
            destination,
            partial(self._providers.activities.search, destination, request.preferences),
            partial(
                self._fallback.generate,
                OfferCategory.activity,
                destination,
                on_date=request.start_date,
                travelers=request.travelers,
                currency=self._settings.provider_currency,
            ),
            ACTIVITIES_ADAPTER,
        )

    async def _forecast(
        self, request: SearchRequest, destination: str
    ) -> tuple[WeatherSummary, bool]:
        return await self._call(
            "weather",
            destination,
            partial(
                self._providers.weather.forecast,
                destination,
                request.start_date,
                request.end_date,
            ),
            partial(self._fallback.forecast, destination, request.start_date, request.end_date),
            WEATHER_ADAPTER,
        )


def _synthetic_categories(raw: RawResults) -> list[str]:
    categories = []
    if any(leg.synthetic for leg in raw.flights):
        categories.append("flights")
    if any(h.synthetic for h in raw.hotels):
        categories.append("hotels")
    if any(a.synthetic for a in raw.activities):
        categories.append("activities")
    if any(w.synthetic for w in raw.weather):
        categories.append("weather")
    return categories
