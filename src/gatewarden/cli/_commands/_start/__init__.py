# pyright: reportUnusedCallResult=false
"""gatewarden start command - supervises the gateway."""

from typing import Annotated

import anyio
from cyclopts import App, Parameter

from gatewarden.cli._context import CLIContext

from .._shared import ExitCode

app = App(
    name="start",
    help="Restore state and keep the gateway running",
    help_on_error=True,
)


@app.default
def start(
    *,
    no_health: Annotated[
        bool,
        Parameter(help="Do not serve the health endpoints."),
    ] = False,
    health_port: Annotated[
        int | None,
        Parameter(help="Port for the health endpoints."),
    ] = None,
) -> None:
    """Restore durable state and supervise the gateway.

    Restores the durable snapshot if it is newer, writes the gateway
    config, then keeps the gateway running with bounded restarts while
    pushing backups every minute. Exits 1 when the retry budget is spent.
    """
    from ._runner import run_start

    ctx = CLIContext.get_current()
    config = ctx.config

    health_overrides: dict[str, object] = {}
    if no_health:
        health_overrides["enabled"] = False
    if health_port is not None:
        health_overrides["port"] = health_port
    if health_overrides:
        health = config.health.model_copy(update=health_overrides)
        config = config.model_copy(update={"health": health})

    exit_code = anyio.run(run_start, config, ctx.logger.bind(command="start"))
    if exit_code != ExitCode.SUCCESS:
        raise SystemExit(exit_code)
