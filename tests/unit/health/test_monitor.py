import time
from pathlib import Path

import pytest

from gatewarden.config import GatewayConfig, HealthConfig
from gatewarden.health import GatewayStatus, HealthMonitor, ProcessLookup, StorageStatus
from gatewarden.utils import FakeClock
from tests.conftest import LogCapture

pytestmark = pytest.mark.anyio


def make_monitor(
    port: int,
    storage_path: Path,
    lookup: ProcessLookup,
    log_capture: LogCapture,
    *,
    probe_timeout: float = 2,
) -> HealthMonitor:
    return HealthMonitor(
        HealthConfig(probe_timeout=probe_timeout, resource_probe=False),
        GatewayConfig(port=port),
        storage_path,
        lookup,
        log_capture.logger,
        clock=FakeClock(),
    )


class TestCheckLiveness:
    async def test_storage_result_outlives_a_fast_gateway_check(
        self, closed_port: int, tmp_path: Path, log_capture: LogCapture
    ) -> None:
        monitor = make_monitor(closed_port, tmp_path, lambda: None, log_capture)

        report = await monitor.check_liveness()

        assert report.checks.gateway.status == GatewayStatus.NOT_RUNNING
        assert report.checks.storage.status == StorageStatus.MOUNTED
        assert report.checks.resource is None

    async def test_slow_process_lookup_reports_timeout(
        self, closed_port: int, tmp_path: Path, log_capture: LogCapture
    ) -> None:
        def lookup() -> int | None:
            time.sleep(0.5)
            return 4242

        monitor = make_monitor(closed_port, tmp_path, lookup, log_capture, probe_timeout=0.05)

        report = await monitor.check_liveness()

        assert not report.healthy
        assert report.checks.gateway.status == GatewayStatus.ERROR
        assert report.checks.gateway.error == "timeout"
        assert log_capture.find("health_check_failed")["error"] == "timeout"
