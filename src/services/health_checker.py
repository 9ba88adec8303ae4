# src/services/health_checker.py

"""Dependency health checks for the oracle, rate provider and catalog."""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from src.services.tool_orchestrator import ToolOrchestrator

logger = logging.getLogger("shop_assistant.health")

_SLOW_THRESHOLD_MS = 5000


@dataclass
class HealthResult:
    """Result of a single dependency health check."""

    source_id: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def probe_dependency(
    source_id: str, check: Callable[[], bool],
) -> HealthResult:
    """Time one liveness check; a raise counts as down."""
    start = time.monotonic()
    try:
        healthy = check()
    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            source_id=source_id,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )
    elapsed_ms = (time.monotonic() - start) * 1000

    if not healthy:
        return HealthResult(
            source_id=source_id,
            status="down",
            latency_ms=elapsed_ms,
            message="Check failed",
        )

    if elapsed_ms > _SLOW_THRESHOLD_MS:
        return HealthResult(
            source_id=source_id,
            status="slow",
            latency_ms=elapsed_ms,
            message="High latency",
        )

    return HealthResult(
        source_id=source_id,
        status="ok",
        latency_ms=elapsed_ms,
        message="",
    )


class HealthChecker:
    """Runs concurrent health probes against every dependency."""

    def __init__(self, orchestrator: ToolOrchestrator) -> None:
        self.checks: dict[str, Callable[[], bool]] = {
            "oracle": orchestrator.oracle.is_available,
            "exchange_rates": orchestrator.converter.is_available,
            "catalog": lambda: bool(orchestrator.searcher.get_categories()),
        }

    async def check_all(self) -> list[HealthResult]:
        """Probe every dependency concurrently."""
        tasks = [
            asyncio.to_thread(probe_dependency, source_id, check)
            for source_id, check in self.checks.items()
        ]
        results: list[HealthResult] = list(
            await asyncio.gather(*tasks)
        )
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.source_id,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
