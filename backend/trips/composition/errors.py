"""Exception types for provider calls and package composition."""


class ProviderError(Exception):
    """A provider call failed. Always absorbed by a fallback substitution."""

    def __init__(self, provider: str, key: str, message: str | None = None) -> None:
        self.provider = provider
        self.key = key
        super().__init__(message or f"{provider} failed for {key}")


class ProviderTimeoutError(ProviderError):
    """A provider call exceeded its timeout."""

    def __init__(self, provider: str, key: str, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(provider, key, f"{provider} timed out after {timeout_seconds}s for {key}")


class CompositionError(Exception):
    """A required category has no offers; no bookable package can be built."""

    def __init__(self, category: str, key: str, message: str | None = None) -> None:
        self.category = category
        self.key = key
        super().__init__(message or f"no {category} offers available for {key}")


class CompositionTimeoutError(CompositionError):
    """The whole composition request exceeded its deadline."""

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(
            "request", "*", f"trip package composition timed out after {timeout_seconds}s"
        )
