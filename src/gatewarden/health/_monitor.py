"""Aggregates health probes into reports."""

from pathlib import Path
from typing import TYPE_CHECKING, final

import anyio

from gatewarden.config import GatewayConfig, HealthConfig
from gatewarden.utils import Clock, SystemClock

from ._models import (
    GatewayCheck,
    GatewayStatus,
    HealthChecks,
    HealthReport,
    ResourceCheck,
    StatusReport,
    StorageCheck,
    StorageStatus,
)
from ._probes import ProcessLookup, probe_gateway, probe_resource, probe_storage

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


@final
class HealthMonitor:
    """Runs the gateway, storage, and resource probes.

    Probes run concurrently, so the total latency is bounded by the
    slowest probe's deadline rather than their sum.
    """

    __slots__ = (
        "_clock",
        "_gateway",
        "_health",
        "_logger",
        "_lookup",
        "_storage_path",
    )

    def __init__(  # noqa: PLR0913
        self,
        health: HealthConfig,
        gateway: GatewayConfig,
        storage_path: Path,
        lookup: ProcessLookup,
        logger: "FilteringBoundLogger",  # noqa: UP037
        *,
        clock: Clock | None = None,
    ) -> None:
        self._health = health
        self._gateway = gateway
        self._storage_path = storage_path
        self._lookup = lookup
        self._logger = logger.bind(component="health")
        self._clock: Clock = clock or SystemClock()

    @property
    def gateway_port(self) -> int:
        return self._gateway.port

    async def _gateway_check(self) -> GatewayCheck:
        return await probe_gateway(
            self._lookup,
            self._gateway.host,
            self._gateway.port,
            timeout=self._health.probe_timeout,
            clock=self._clock,
        )

    async def check_liveness(self) -> HealthReport:
        """Run every probe and aggregate the results.

        Returns:
            The report; `healthy` follows the gateway probe alone.
        """
        timestamp = self._clock.now().to_iso8601_string()
        started = self._clock.monotonic()
        timeout = self._health.probe_timeout

        # Replaced by the storage task; the probe itself never raises
        storage = StorageCheck(status=StorageStatus.ERROR, latency_ms=0)
        resource: ResourceCheck | None = None

        async def run_storage() -> None:
            nonlocal storage
            storage = await probe_storage(self._storage_path, timeout=timeout, clock=self._clock)

        async def run_resource() -> None:
            nonlocal resource
            resource = await probe_resource(timeout=timeout, clock=self._clock)

        async with anyio.create_task_group() as tg:
            tg.start_soon(run_storage)
            if self._health.resource_probe:
                tg.start_soon(run_resource)
            gateway = await self._gateway_check()

        report = HealthReport(
            timestamp=timestamp,
            total_latency_ms=round((self._clock.monotonic() - started) * 1000),
            healthy=gateway.status == GatewayStatus.HEALTHY,
            checks=HealthChecks(gateway=gateway, storage=storage, resource=resource),
        )

        if not report.healthy:
            self._logger.warning(
                "health_check_failed",
                gateway=gateway.status.value,
                storage=storage.status.value,
                error=gateway.error,
            )
        return report

    async def check_status(self) -> StatusReport:
        """Check only the gateway process and port.

        Returns:
            A small status report for the status endpoint.
        """
        gateway = await self._gateway_check()
        if gateway.status == GatewayStatus.ERROR:
            self._logger.warning("gateway_status_error", error=gateway.error)
        return StatusReport(
            ok=gateway.status == GatewayStatus.HEALTHY,
            status=gateway.status,
            pid=gateway.pid,
            error=gateway.error,
        )
