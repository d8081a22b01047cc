"""gatewarden CLI commands."""
# pyright: reportUnusedCallResult=false

from typing import TYPE_CHECKING

from ._backup import app as backup_app
from ._health import app as health_app
from ._shared import ExitCode, exit_with_error, format_json, get_error_console
from ._start import app as start_app
from ._study import app as study_app

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "ExitCode",
    "backup_app",
    "exit_with_error",
    "format_json",
    "get_error_console",
    "health_app",
    "register_commands",
    "start_app",
    "study_app",
]


def register_commands(app: "App") -> None:  # noqa: UP037
    app.command(backup_app)
    app.command(health_app)
    app.command(start_app)
    app.command(study_app)
