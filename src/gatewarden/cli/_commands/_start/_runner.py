"""Async runner for the start command.

Restores durable state, prepares the gateway, then runs the supervisor,
periodic backups, job registration, the health server, and the signal
watcher together in one task group. Whatever ends the run, the final
backup push happens exactly once.
"""

import contextlib
import signal
from collections.abc import Generator
from typing import TYPE_CHECKING

import anyio
import uvicorn

from gatewarden.backup import BackupSynchronizer
from gatewarden.exceptions import RetriesExhaustedError
from gatewarden.gateway import prepare_gateway
from gatewarden.health import HealthMonitor
from gatewarden.schedule import CliJobScheduler, ScheduleRegistrar, default_jobs
from gatewarden.supervisor import (
    CleanupOnce,
    ConsoleOutputSink,
    ProcessSupervisor,
    SubprocessLauncher,
)
from gatewarden.utils import Clock, SystemClock, probe_tcp

from .._shared import ExitCode
from ._app import create_health_app

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from gatewarden.config import Config


class EmbeddedServer(uvicorn.Server):
    """A uvicorn server that leaves signal handling to its host."""

    @contextlib.contextmanager
    def capture_signals(self) -> Generator[None]:
        yield


async def watch_signals(
    scope: anyio.CancelScope,
    cleanup: CleanupOnce,
    logger: "FilteringBoundLogger",  # noqa: UP037
) -> None:
    """Run the final cleanup on SIGINT or SIGTERM, then cancel the run."""
    with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
        async for signum in signals:
            name = signal.Signals(signum).name
            logger.info("shutdown_signal_received", signal=name)
            _ = await cleanup.run(f"signal:{name}")
            scope.cancel()
            return


async def serve_health(server: uvicorn.Server, logger: "FilteringBoundLogger") -> None:  # noqa: UP037
    try:
        await server.serve()
    except SystemExit:
        # uvicorn exits the process when it cannot bind; keep the gateway up
        logger.error("health_server_failed", host=server.config.host, port=server.config.port)


async def run_start(
    config: "Config",  # noqa: UP037
    logger: "FilteringBoundLogger",  # noqa: UP037
    *,
    clock: Clock | None = None,
) -> ExitCode:
    """Run the gateway under supervision until it gives up or is signalled.

    Args:
        config: Full configuration.
        logger: Root logger.
        clock: Time source shared by all components.

    Returns:
        SUCCESS after a signal, FAILURE when the retry budget is spent.
    """
    clock = clock or SystemClock()
    gateway = config.gateway

    backup = BackupSynchronizer(config.backup, logger, clock=clock)
    final_push = CleanupOnce("final_push", backup.push, logger)

    _ = await backup.restore()
    _ = prepare_gateway(gateway, logger)

    sink = ConsoleOutputSink()
    launcher = SubprocessLauncher(
        sink,
        name="gateway",
        cwd=gateway.workspace_dir if gateway.workspace_dir.is_dir() else None,
        shutdown_timeout=gateway.shutdown_timeout,
    )
    supervisor = ProcessSupervisor(launcher, config.supervisor, logger, clock=clock, sink=sink)
    registrar = ScheduleRegistrar(
        config.schedule,
        CliJobScheduler(gateway.executable),
        logger,
        clock=clock,
    )
    monitor = HealthMonitor(
        config.health,
        gateway,
        config.backup.mount_root,
        lambda: supervisor.pid,
        logger,
        clock=clock,
    )

    async def gateway_ready() -> bool:
        return await probe_tcp(gateway.host, gateway.port, config.health.probe_timeout)

    exit_code = ExitCode.SUCCESS
    try:
        async with anyio.create_task_group() as tg:
            tg.start_soon(watch_signals, tg.cancel_scope, final_push, logger)
            tg.start_soon(backup.run_periodic)
            tg.start_soon(registrar.on_ready, gateway_ready, default_jobs(config.schedule))

            if config.health.enabled:
                server = EmbeddedServer(
                    uvicorn.Config(
                        app=create_health_app(monitor),
                        host=config.health.host,
                        port=config.health.port,
                        log_level="warning",
                        access_log=False,
                    )
                )
                tg.start_soon(serve_health, server, logger)

            await supervisor.run(gateway.command())
    except* RetriesExhaustedError:
        exit_code = ExitCode.FAILURE
    finally:
        _ = await final_push.run("exit")

    logger.info("gatewarden_stopped", exit_code=int(exit_code), reason=final_push.triggered_by)
    return exit_code
