"""Common types and enums shared across all models."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Geo(BaseModel):
    """Geographic coordinates (WGS84)."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class Money(BaseModel):
    """Monetary amount in major currency units."""

    amount: Decimal = Field(..., ge=0)
    currency: str = "USD"

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        """Upper-case ISO 4217 code."""
        if len(v) != 3:
            raise ValueError("currency must be a 3-letter code")
        return v.upper()


class Tier(str, Enum):
    """Package pricing tier."""

    budget = "budget"
    standard = "standard"
    luxury = "luxury"


class OfferCategory(str, Enum):
    """Provider offer category."""

    flight = "flight"
    hotel = "hotel"
    activity = "activity"


class CabinClass(str, Enum):
    """Flight cabin class."""

    economy = "economy"
    premium_economy = "premium_economy"
    business = "business"
    first = "first"


class TravelerCounts(BaseModel):
    """Party composition."""

    adults: int = Field(1, ge=1, le=9)
    children: int = Field(0, ge=0, le=8)
    infants: int = Field(0, ge=0, le=4)

    @property
    def total_guests(self) -> int:
        """Guests needing a bed (infants excluded)."""
        return self.adults + self.children


class Provenance(BaseModel):
    """Provenance metadata for provider results."""

    source: str  # e.g. "provider.fixtures.flights", "fallback.hotel"
    ref_id: str | None = None
    source_url: str | None = None
    fetched_at: datetime
    cache_hit: bool | None = None
    synthetic: bool = False
