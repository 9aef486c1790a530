"""Prometheus metrics for provider calls and package composition."""

from prometheus_client import Counter, Histogram

# Provider call metrics
provider_latency_ms = Histogram(
    "provider_latency_ms",
    "Provider call latency in milliseconds",
    ["provider", "outcome"],
    buckets=[10, 50, 100, 200, 500, 1000, 2000, 4000, 8000],
)

provider_fallbacks_total = Counter(
    "provider_fallbacks_total",
    "Total provider calls replaced by synthetic fallback output",
    ["provider", "reason"],
)

# Composition metrics
packages_composed_total = Counter(
    "packages_composed_total",
    "Total trip packages returned to callers",
    ["tier"],
)


class ProviderMetrics:
    """Interface for provider call metrics (no-op)."""

    def record_latency(self, provider: str, outcome: str, latency_ms: float) -> None:
        pass

    def inc_fallback(self, provider: str, reason: str) -> None:
        pass

    def inc_packages(self, tier: str) -> None:
        pass


class PrometheusProviderMetrics(ProviderMetrics):
    """Prometheus-based provider metrics implementation."""

    def record_latency(self, provider: str, outcome: str, latency_ms: float) -> None:
        """Record provider call latency."""
        provider_latency_ms.labels(provider=provider, outcome=outcome).observe(latency_ms)

    def inc_fallback(self, provider: str, reason: str) -> None:
        """Increment fallback counter."""
        provider_fallbacks_total.labels(provider=provider, reason=reason).inc()

    def inc_packages(self, tier: str) -> None:
        """Increment composed package counter."""
        packages_composed_total.labels(tier=tier).inc()
