"""Per-category store of provider offers keyed by destination (or flight leg)."""

from collections.abc import Iterable
from typing import Generic, TypeVar

from backend.trips.models.common import OfferCategory
from backend.trips.models.offers import ActivityOffer, FlightOffer, HotelOffer

OfferT = TypeVar("OfferT", FlightOffer, HotelOffer, ActivityOffer)


class ProviderResultSet(Generic[OfferT]):
    """Offers for one provider category.

    A key that was added with an empty list is a valid, empty result and is
    distinct from a key that was never queried (`has()` tells them apart).
    Each key is written by exactly one provider call, so concurrent queries
    never share a slot.
    """

    def __init__(self, category: OfferCategory) -> None:
        self.category = category
        self._by_key: dict[str, list[OfferT]] = {}
        self._synthetic: set[str] = set()

    def add(self, key: str, offers: Iterable[OfferT], *, synthetic: bool = False) -> None:
        """Append offers under a key; nothing is dropped or deduplicated."""
        offers = list(offers)
        for offer in offers:
            if offer.category != self.category.value:
                raise ValueError(
                    f"cannot add {offer.category} offer {offer.offer_id!r} "
                    f"to {self.category.value} result set"
                )
        self._by_key.setdefault(key, []).extend(offers)
        if synthetic:
            self._synthetic.add(key)

    def get(self, key: str) -> list[OfferT]:
        """Offers for a key, in provider order (empty if none)."""
        return list(self._by_key.get(key, []))

    def has(self, key: str) -> bool:
        return key in self._by_key

    def is_synthetic(self, key: str) -> bool:
        """Whether the key was filled by fallback output."""
        return key in self._synthetic

    def keys(self) -> list[str]:
        return list(self._by_key)

    def __len__(self) -> int:
        return len(self._by_key)
