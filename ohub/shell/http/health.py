"""
Site health and request metrics.

Endpoints:
- /health: site status, CMS status and whether fallback content is served
- /health/ready: 200 once startup has finished
- /health/live: 200 while the process responds
- /metrics: request counters since the process started

The site renders bundled fallback content when Contentful is not
configured, so that state is "degraded" and the site stays ready. The only
"unhealthy" state is a startup that has not finished.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse


class HealthStatus(str, Enum):
    """Status reported by /health and by each check."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check, as listed under `checks`."""

    name: str
    status: HealthStatus
    message: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "status": self.status.value, "message": self.message}


def overall_status(results: list[CheckResult]) -> HealthStatus:
    """Worst status across results; no checks counts as healthy."""
    if any(r.status == HealthStatus.UNHEALTHY for r in results):
        return HealthStatus.UNHEALTHY
    if any(r.status == HealthStatus.DEGRADED for r in results):
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY


class SiteHealth:
    """
    Process-wide health state.

    Holds the startup time, the request counters fed by the HTTP
    middleware, and the CMS configuration probe installed at startup.
    """

    def __init__(self) -> None:
        self._started_at: float | None = None
        self._cms_configured: Callable[[], bool] | None = None
        self._request_count = 0
        self._error_count = 0
        self._total_response_time_ms = 0.0

    # --- Startup ---

    def mark_started(self) -> None:
        """Record that startup finished; the site is ready from now on."""
        self._started_at = time.time()

    def is_started(self) -> bool:
        """Whether startup has finished."""
        return self._started_at is not None

    def uptime_seconds(self) -> float:
        """Seconds since startup finished, 0 before that."""
        if self._started_at is None:
            return 0.0
        return time.time() - self._started_at

    # --- Content Source ---

    def watch_content_source(self, is_configured: Callable[[], bool] | None) -> None:
        """Install the CMS configuration probe, replacing any previous one."""
        self._cms_configured = is_configured

    def serving_fallback(self) -> bool:
        """True when a CMS probe is installed and reports no configuration."""
        return self._cms_configured is not None and not self._cms_configured()

    # --- Checks ---

    def check_startup(self) -> CheckResult:
        if self.is_started():
            return CheckResult("startup", HealthStatus.HEALTHY, "Startup complete")
        return CheckResult("startup", HealthStatus.UNHEALTHY, "Startup not complete")

    def check_content_source(self) -> CheckResult | None:
        """
        CMS configuration check, or None when no probe is installed.

        Only inspects configuration; Contentful itself is never called, so
        probes stay cheap and do not count against the delivery API limits.
        """
        if self._cms_configured is None:
            return None
        if self._cms_configured():
            return CheckResult("content_source", HealthStatus.HEALTHY, "Contentful configured")
        return CheckResult(
            "content_source",
            HealthStatus.DEGRADED,
            "Contentful not configured, serving fallback content",
        )

    def results(self) -> list[CheckResult]:
        """All checks in reporting order."""
        results = [self.check_startup()]
        cms = self.check_content_source()
        if cms is not None:
            results.append(cms)
        return results

    # --- Metrics ---

    def record_request(self, response_time_ms: float, is_error: bool = False) -> None:
        """Count one handled request; `is_error` marks a 5xx response."""
        self._request_count += 1
        self._total_response_time_ms += response_time_ms
        if is_error:
            self._error_count += 1

    def metrics(self) -> dict[str, Any]:
        """Counters as served by /metrics."""
        count = self._request_count
        return {
            "request_count": count,
            "error_count": self._error_count,
            "avg_response_time_ms": self._total_response_time_ms / count if count else 0.0,
            "uptime_seconds": self.uptime_seconds(),
        }

    def reset_metrics(self) -> None:
        """Zero the request counters."""
        self._request_count = 0
        self._error_count = 0
        self._total_response_time_ms = 0.0


_site_health = SiteHealth()


def get_site_health() -> SiteHealth:
    """Get the process-wide health state."""
    return _site_health


def create_health_router(version: str = "0.0.0", health: SiteHealth | None = None) -> APIRouter:
    """Build the health and metrics router over `health` (process-wide if None)."""
    router = APIRouter(tags=["health"])
    site = health or get_site_health()

    @router.get(
        "/health",
        response_model=None,
        responses={
            200: {"description": "Site is healthy or serving fallback content"},
            503: {"description": "Startup has not finished"},
        },
    )
    def health_check() -> JSONResponse:
        results = site.results()
        overall = overall_status(results)
        code = (
            status.HTTP_503_SERVICE_UNAVAILABLE
            if overall == HealthStatus.UNHEALTHY
            else status.HTTP_200_OK
        )
        return JSONResponse(
            content={
                "status": overall.value,
                "version": version,
                "uptime_seconds": site.uptime_seconds(),
                "fallback_content": site.serving_fallback(),
                "checks": [r.to_dict() for r in results],
            },
            status_code=code,
        )

    @router.get("/health/ready", response_model=None)
    def readiness_check() -> JSONResponse:
        """Ready unless some check is unhealthy; degraded still takes traffic."""
        results = site.results()
        ready = overall_status(results) != HealthStatus.UNHEALTHY
        return JSONResponse(
            content={"ready": ready, "checks": [r.to_dict() for r in results]},
            status_code=status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    @router.get("/health/live", response_model=None)
    def liveness_check() -> JSONResponse:
        return JSONResponse(content={"alive": True, "uptime_seconds": site.uptime_seconds()})

    @router.get("/metrics", response_model=None)
    def metrics_endpoint() -> JSONResponse:
        return JSONResponse(content=site.metrics())

    return router
