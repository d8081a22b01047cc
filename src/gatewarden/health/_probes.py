"""Individual health probes.

Each probe has its own hard deadline and never raises: failures become a
status value. Blocking calls run in worker threads that are abandoned if
the deadline passes.
"""

from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

import anyio
import anyio.to_thread
import psutil

from gatewarden.utils import Clock, probe_tcp

from ._models import (
    RESOURCE_ERROR,
    GatewayCheck,
    GatewayStatus,
    ResourceCheck,
    StorageCheck,
    StorageStatus,
)

ProcessLookup: TypeAlias = Callable[[], int | None]


def _elapsed_ms(clock: Clock, started: float) -> int:
    return round((clock.monotonic() - started) * 1000)


def find_gateway_pid(executable: str) -> int | None:
    """Find a running gateway process by its command line.

    Used when the health check runs outside the supervising process.

    Args:
        executable: Gateway executable name, e.g. "openclaw".

    Returns:
        The PID of the first `<executable> gateway ...` process, or None.
    """
    name = Path(executable).name
    for proc in psutil.process_iter(["pid", "cmdline"]):
        cmdline: list[str] = proc.info.get("cmdline") or []
        if len(cmdline) >= 2 and Path(cmdline[0]).name == name and "gateway" in cmdline[1:3]:  # noqa: PLR2004
            return proc.info["pid"]
    return None


async def probe_gateway(
    lookup: ProcessLookup,
    host: str,
    port: int,
    *,
    timeout: float,
    clock: Clock,
) -> GatewayCheck:
    """Check that the gateway process exists and accepts TCP connections.

    Args:
        lookup: Returns the gateway PID, or None if it is not running.
        host: Host the gateway listens on.
        port: Port the gateway listens on.
        timeout: Deadline for the whole probe.
        clock: Time source for latency.

    Returns:
        The probe result.
    """
    started = clock.monotonic()
    pid: int | None = None
    looked_up = False
    status = GatewayStatus.NOT_RESPONDING
    error: str | None = None

    with anyio.move_on_after(timeout):
        try:
            pid = await anyio.to_thread.run_sync(lookup, abandon_on_cancel=True)
        except Exception as e:  # noqa: BLE001
            status = GatewayStatus.ERROR
            error = str(e) or type(e).__name__
        else:
            looked_up = True
            if pid is None:
                status = GatewayStatus.NOT_RUNNING
            elif await probe_tcp(host, port, timeout):
                status = GatewayStatus.HEALTHY

    if not looked_up and error is None:
        # The deadline passed before the process table answered
        status = GatewayStatus.ERROR
        error = "timeout"

    return GatewayCheck(
        status=status,
        latency_ms=_elapsed_ms(clock, started),
        pid=pid,
        error=error,
    )


async def probe_storage(path: Path, *, timeout: float, clock: Clock) -> StorageCheck:
    """Check that the durable mount directory is present.

    Args:
        path: Mount root to test.
        timeout: Deadline for the probe.
        clock: Time source for latency.

    Returns:
        The probe result. A hung mount reports ERROR.
    """
    started = clock.monotonic()
    status = StorageStatus.ERROR

    with anyio.move_on_after(timeout):
        try:
            mounted = await anyio.to_thread.run_sync(path.is_dir, abandon_on_cancel=True)
        except OSError:
            mounted = None
        if mounted is not None:
            status = StorageStatus.MOUNTED if mounted else StorageStatus.NOT_MOUNTED

    return StorageCheck(status=status, latency_ms=_elapsed_ms(clock, started))


def _format_bytes(size: float) -> str:
    for unit in ("B", "K", "M", "G", "T"):
        if abs(size) < 1024 or unit == "T":  # noqa: PLR2004
            return f"{size:.0f}{unit}" if unit == "B" else f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}T"


def _memory_usage() -> str:
    memory = psutil.virtual_memory()
    return f"{_format_bytes(memory.used)}/{_format_bytes(memory.total)}"


async def probe_resource(*, timeout: float, clock: Clock) -> ResourceCheck:
    """Sample memory usage as `used/total`.

    Args:
        timeout: Deadline for the probe.
        clock: Time source for latency.

    Returns:
        The probe result, with usage "error" if sampling failed.
    """
    started = clock.monotonic()
    usage = RESOURCE_ERROR

    with anyio.move_on_after(timeout):
        try:
            usage = await anyio.to_thread.run_sync(_memory_usage, abandon_on_cancel=True)
        except Exception:  # noqa: BLE001
            usage = RESOURCE_ERROR

    return ResourceCheck(usage=usage, latency_ms=_elapsed_ms(clock, started))
