# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
"""gatewarden backup commands - manual push and restore."""

import anyio
from cyclopts import App

from gatewarden.backup import BackupSynchronizer, SyncReason, SyncResult
from gatewarden.cli._context import CLIContext

from .._shared import ExitCode, get_error_console

app = App(
    name="backup",
    help="Synchronize the gateway state with the durable store",
    help_on_error=True,
)

# Outcomes that are not worth a non-zero exit
_BENIGN = frozenset({SyncReason.NO_BACKUP, SyncReason.LOCAL_UP_TO_DATE})


def _synchronizer() -> BackupSynchronizer:
    ctx = CLIContext.get_current()
    return BackupSynchronizer(ctx.config.backup, ctx.logger.bind(command="backup"))


def _report(result: SyncResult) -> None:
    console = get_error_console()
    console.print(f"{result.action.value}: {result.reason.value}", highlight=False)
    if result.timestamp:
        console.print(f"timestamp: {result.timestamp}", highlight=False)
    if result.detail:
        console.print(f"[red]{result.detail}[/red]", highlight=False)

    if not result.ok and result.reason not in _BENIGN:
        raise SystemExit(ExitCode.FAILURE)


@app.command(name="push")
def push() -> None:
    """Copy the local state directory to the durable store."""
    _report(anyio.run(_synchronizer().push))


@app.command(name="restore")
def restore() -> None:
    """Restore the durable snapshot if it is newer than local state."""
    _report(anyio.run(_synchronizer().restore))
