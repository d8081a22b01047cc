"""Health application factory for the start command."""

from typing import TYPE_CHECKING

from fastapi import FastAPI

from gatewarden.health import create_health_router

if TYPE_CHECKING:
    from gatewarden.health import HealthMonitor


def create_health_app(monitor: "HealthMonitor") -> FastAPI:  # noqa: UP037
    """Create the FastAPI application serving the health endpoints.

    Args:
        monitor: The HealthMonitor that runs the probes.

    Returns:
        A FastAPI application with the health router mounted.
    """
    app = FastAPI(
        title="gatewarden",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.include_router(create_health_router(monitor))
    return app
