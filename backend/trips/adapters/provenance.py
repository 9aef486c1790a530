"""Provenance helpers for provider adapters."""

from datetime import UTC, datetime

from backend.trips.models.common import Provenance


def provenance_for_fixture(source: str, ref_id: str | None = None) -> Provenance:
    """Create provenance for fixture-based provider results.

    Args:
        source: Source identifier (e.g., "fixtures.flights")
        ref_id: Optional reference ID (e.g., "JFK_CDG")

    Returns:
        Provenance with source=provider-specific string, fetched_at=now(UTC), cache_hit=False
    """
    return Provenance(
        source=f"provider.{source}",
        ref_id=f"{source}/{ref_id}" if ref_id else source,
        source_url=f"fixtures://{source}/{ref_id}" if ref_id else f"fixtures://{source}",
        fetched_at=datetime.now(UTC),
        cache_hit=False,
    )


def provenance_for_http(source: str, url: str, cache_hit: bool = False) -> Provenance:
    """Create provenance for HTTP-based provider results.

    Args:
        source: Source identifier (e.g., "weather.open_meteo")
        url: Full URL of the HTTP request
        cache_hit: Whether result came from cache

    Returns:
        Provenance with source=provider-specific string, fetched_at=now(UTC)
    """
    return Provenance(
        source=f"provider.{source}",
        ref_id=source,
        source_url=url,
        fetched_at=datetime.now(UTC),
        cache_hit=cache_hit,
    )


def provenance_for_fallback(category: str, ref_id: str) -> Provenance:
    """Create provenance for synthetic stand-in results.

    Args:
        category: Offer category or "weather"
        ref_id: Destination or leg key the stand-in replaces

    Returns:
        Provenance with source="fallback.<category>" and synthetic=True
    """
    return Provenance(
        source=f"fallback.{category}",
        ref_id=f"{category}/{ref_id}",
        fetched_at=datetime.now(UTC),
        cache_hit=False,
        synthetic=True,
    )
