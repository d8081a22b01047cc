"""HTTP endpoints for the health monitor.

The status and liveness endpoints answer 200 when the gateway is healthy
and 503 otherwise, with the full report as the body either way.
"""

# pyright: reportUnusedFunction=false
# FastAPI route handlers are registered via decorators, not direct calls

from typing import TYPE_CHECKING

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

if TYPE_CHECKING:
    from ._monitor import HealthMonitor


def _report_response(report: BaseModel, *, healthy: bool) -> JSONResponse:
    return JSONResponse(
        content=report.model_dump(mode="json", by_alias=True, exclude_none=True),
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )


def create_health_router(monitor: "HealthMonitor") -> APIRouter:  # noqa: UP037
    """Create a router exposing liveness and status checks.

    Args:
        monitor: The monitor that runs the probes.

    Returns:
        A FastAPI APIRouter with the health endpoints.
    """
    router = APIRouter(tags=["health"])

    @router.get("/sandbox-health")
    async def sandbox_health() -> dict[str, object]:
        """Static answer for the hosting platform; never touches the gateway."""
        return {"status": "ok", "service": "gatewarden", "gatewayPort": monitor.gateway_port}

    @router.get("/api/liveness")
    async def liveness() -> JSONResponse:
        """Full liveness report."""
        report = await monitor.check_liveness()
        return _report_response(report, healthy=report.healthy)

    @router.get("/api/status")
    async def gateway_status() -> JSONResponse:
        """Gateway process and port status only."""
        report = await monitor.check_status()
        return _report_response(report, healthy=report.ok)

    return router
