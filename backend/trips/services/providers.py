"""Provider collaborator interfaces.

Any implementation may raise; the orchestrator treats every exception
(including timeouts) as a provider failure and substitutes fallback output.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol

from backend.trips.models.common import CabinClass, TravelerCounts
from backend.trips.models.offers import ActivityOffer, FlightOffer, HotelOffer, WeatherSummary
from backend.trips.models.search import Preferences


class FlightSearch(Protocol):
    async def search(
        self,
        origin: str,
        destination: str,
        on_date: date,
        travelers: TravelerCounts,
        cabin_class: CabinClass,
    ) -> list[FlightOffer]: ...


class HotelSearch(Protocol):
    async def search(
        self,
        destination: str,
        check_in: date,
        check_out: date,
        travelers: TravelerCounts,
        budget_hint: Decimal | None,
    ) -> list[HotelOffer]: ...


class ActivitySearch(Protocol):
    async def search(self, destination: str, preferences: Preferences) -> list[ActivityOffer]: ...


class WeatherForecast(Protocol):
    async def forecast(
        self, destination: str, start_date: date, end_date: date
    ) -> WeatherSummary: ...


@dataclass
class ProviderSuite:
    """One collaborator per provider category."""

    flights: FlightSearch
    hotels: HotelSearch
    activities: ActivitySearch
    weather: WeatherForecast
