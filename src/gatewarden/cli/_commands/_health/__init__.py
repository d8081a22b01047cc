# pyright: reportUnusedCallResult=false
"""gatewarden health command - one-off liveness check."""

from functools import partial

import anyio
from cyclopts import App

from gatewarden.cli._context import CLIContext
from gatewarden.health import HealthMonitor, find_gateway_pid

from .._shared import ExitCode, format_json

app = App(
    name="health",
    help="Check the gateway and print the liveness report",
    help_on_error=True,
)


@app.default
def health() -> None:
    """Print the liveness report as JSON; exit 1 if the gateway is unhealthy.

    Looks the gateway up among running processes, so it works from any
    shell inside the container.
    """
    ctx = CLIContext.get_current()
    config = ctx.config
    monitor = HealthMonitor(
        config.health,
        config.gateway,
        config.backup.mount_root,
        partial(find_gateway_pid, config.gateway.executable),
        ctx.logger.bind(command="health"),
    )

    report = anyio.run(monitor.check_liveness)
    print(format_json(report.model_dump(mode="json", by_alias=True, exclude_none=True)))  # noqa: T201
    if not report.healthy:
        raise SystemExit(ExitCode.FAILURE)
