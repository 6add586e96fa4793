# src/services/health_checker.py

"""Reachability checks for the configured backends."""

import asyncio
import logging
import time
from dataclasses import dataclass

from curl_cffi import requests as curl_requests

from src.config.settings import Settings

logger = logging.getLogger("listro.health")

_SLOW_MS = 5000


@dataclass
class HealthResult:
    """Result of a single backend probe."""

    backend_id: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def probe_backend(backend: dict[str, str]) -> HealthResult:
    """GET a backend's base URL; anything below HTTP 500 is reachable."""
    backend_id = backend["id"]
    base_url = getattr(Settings, backend["setting"], "")
    if not base_url:
        return HealthResult(
            backend_id=backend_id,
            status="down",
            latency_ms=0.0,
            message=f"{backend['setting']} is not configured",
        )

    start = time.monotonic()
    try:
        resp = curl_requests.get(
            base_url,
            headers=Settings.DEFAULT_HEADERS,
            timeout=Settings.HEALTH_TIMEOUT,
        )
        elapsed_ms = (time.monotonic() - start) * 1000

        if resp.status_code >= 500:
            return HealthResult(
                backend_id=backend_id,
                status="down",
                latency_ms=elapsed_ms,
                message=f"HTTP {resp.status_code}",
            )

        if elapsed_ms > _SLOW_MS:
            return HealthResult(
                backend_id=backend_id,
                status="slow",
                latency_ms=elapsed_ms,
                message="High latency",
            )

        return HealthResult(
            backend_id=backend_id,
            status="ok",
            latency_ms=elapsed_ms,
            message="",
        )

    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        return HealthResult(
            backend_id=backend_id,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )


class HealthChecker:
    """Probes every registered backend concurrently."""

    def __init__(self) -> None:
        self.backends = Settings.BACKENDS

    async def check_all(self) -> list[HealthResult]:
        """Probe all backends and log one line per result."""
        results: list[HealthResult] = list(
            await asyncio.gather(
                *(
                    asyncio.to_thread(probe_backend, backend)
                    for backend in self.backends
                )
            )
        )
        for r in results:
            logger.info(
                "Health check %s: %s (%.0fms) %s",
                r.backend_id,
                r.status,
                r.latency_ms,
                r.message,
            )
        return results
