"""Structured logging for provider calls."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredProviderLogger:
    """Structured logger for provider calls."""

    def log_call(
        self,
        provider: str,
        key: str,
        outcome: str,
        latency_ms: float,
        synthetic: bool = False,
        error_reason: str | None = None,
    ) -> None:
        """Log one provider call with structured data."""
        log_data: dict[str, Any] = {
            "provider": provider,
            "key": key,
            "outcome": outcome,
            "latency_ms": round(latency_ms, 2),
            "synthetic": synthetic,
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Provider call: {provider} [{key}] - {outcome}"

        if outcome == "success":
            logger.info(log_msg, extra={"structured": log_data})
        else:
            logger.warning(log_msg, extra={"structured": log_data})


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the application process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
