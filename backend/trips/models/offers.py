"""Provider offer models - normalized external data shapes."""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from backend.trips.models.common import CabinClass, Money, Provenance


class FlightOffer(BaseModel):
    """One flight for one leg."""

    category: Literal["flight"] = "flight"
    offer_id: str
    origin: str
    destination: str
    name: str
    airline: str
    flight_number: str
    departure: datetime
    arrival: datetime
    stops: int = Field(0, ge=0)
    price: Money
    cabin_prices: dict[CabinClass, Decimal] = Field(default_factory=dict)
    synthetic: bool = False
    provenance: Provenance

    @field_validator("arrival")
    @classmethod
    def validate_arrival_after_departure(cls, v: datetime, info: ValidationInfo) -> datetime:
        """Ensure arrival > departure."""
        if "departure" in info.data and v <= info.data["departure"]:
            raise ValueError("arrival must be after departure")
        return v

    def fare(self, cabin: CabinClass) -> Decimal:
        """Fare for a cabin, or the quoted price when the provider has no tiered fares."""
        return self.cabin_prices.get(cabin, self.price.amount)


class HotelOffer(BaseModel):
    """Hotel stay; price is the total for the whole stay."""

    category: Literal["hotel"] = "hotel"
    offer_id: str
    destination: str
    name: str
    check_in: date
    check_out: date
    nightly_rate: Money
    stars: int = Field(..., ge=1, le=5)
    review_score: float | None = None
    price: Money
    synthetic: bool = False
    provenance: Provenance

    @field_validator("check_out")
    @classmethod
    def validate_checkout_after_checkin(cls, v: date, info: ValidationInfo) -> date:
        """Ensure check_out > check_in."""
        if "check_in" in info.data and v <= info.data["check_in"]:
            raise ValueError("check_out must be after check_in")
        return v


class ActivityOffer(BaseModel):
    """Bookable activity; price is per adult."""

    category: Literal["activity"] = "activity"
    offer_id: str
    destination: str
    name: str
    activity_type: str
    duration_hours: float = Field(..., gt=0)
    rating: float | None = None
    price: Money
    child_price: Money | None = None
    synthetic: bool = False
    provenance: Provenance


ProviderOffer = Annotated[FlightOffer | HotelOffer | ActivityOffer, Field(discriminator="category")]


class WeatherDay(BaseModel):
    """Daily weather forecast."""

    date: date
    condition: str
    temp_high_c: float
    temp_low_c: float
    precip_chance: float = Field(..., ge=0.0, le=1.0)


class WeatherSummary(BaseModel):
    """Forecast for one destination over the trip dates. Informational only."""

    destination: str
    forecast: list[WeatherDay]
    synthetic: bool = False
    provenance: Provenance
