"""Search models - validated trip package search parameters."""

from datetime import date
from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from backend.trips.models.common import CabinClass, TravelerCounts

ActivityInterest = Literal["cultural", "adventure", "food", "shopping", "entertainment", "nature"]


class Preferences(BaseModel):
    """Traveler preferences passed through to activity search."""

    accommodation: Literal["budget", "mid-range", "luxury"] = "mid-range"
    activities: list[ActivityInterest] = Field(default_factory=list)
    pace: Literal["relaxed", "moderate", "fast"] = "moderate"
    interests: list[str] = Field(default_factory=list)


class SearchRequest(BaseModel):
    """Trip package search request."""

    origin: str = Field(..., min_length=3, max_length=3, description="3-letter airport code")
    destinations: Annotated[list[str], Field(min_length=1, max_length=5)]
    start_date: date
    end_date: date
    travelers: TravelerCounts = Field(default_factory=TravelerCounts)
    cabin_class: CabinClass = CabinClass.economy
    currency: str = Field("USD", min_length=3, max_length=3)
    budget: Decimal | None = Field(None, gt=0)
    preferences: Preferences = Field(default_factory=Preferences)

    @field_validator("origin", "currency")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.upper()

    @field_validator("destinations")
    @classmethod
    def validate_destination_codes(cls, v: list[str]) -> list[str]:
        """Ensure every destination is a 3-letter code."""
        codes = []
        for code in v:
            if len(code) != 3:
                raise ValueError(f"destination must be a 3-letter airport code: {code!r}")
            codes.append(code.upper())
        if len(set(codes)) != len(codes):
            raise ValueError("destinations must not repeat")
        return codes

    @field_validator("end_date")
    @classmethod
    def validate_end_after_start(cls, v: date, info: ValidationInfo) -> date:
        """Ensure end >= start."""
        if "start_date" in info.data and v < info.data["start_date"]:
            raise ValueError("end_date must be >= start_date")
        return v

    @property
    def nights(self) -> int:
        """Hotel nights for the stay (a same-day trip still books one night)."""
        return max((self.end_date - self.start_date).days, 1)

    @property
    def last_destination(self) -> str:
        return self.destinations[-1]
