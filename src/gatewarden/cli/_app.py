"""The command-line interface for gatewarden."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from gatewarden.config import LogFormat, LogLevel, load_config
from gatewarden.exceptions import ConfigError
from gatewarden.utils import create_logger

from ._commands import register_commands
from ._commands._shared import ExitCode, exit_with_error
from ._context import CLIContext

HELP = "Keeps the gateway alive and its state durable inside an ephemeral container."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the CLI application with its global options.

    Args:
        console: Console for normal output.
        error_console: Console for errors.
        exit_on_error: Whether cyclopts exits on parse errors.

    Returns:
        The cyclopts application. Invoke `app.meta()` to run it.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="gatewarden",
        help=HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        log_level: Annotated[
            LogLevel | None, Parameter(name="--log-level", help="Log level threshold")
        ] = None,
        log_format: Annotated[
            LogFormat | None, Parameter(name="--log-format", help="Log output format")
        ] = None,
    ) -> None:
        """Launch gatewarden with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            config: Explicit path to config file.
            log_level: Override the configured log level.
            log_format: Override the configured log format.
        """
        logging_overrides: dict[str, object] = {}
        if log_level is not None:
            logging_overrides["level"] = log_level.value
        if log_format is not None:
            logging_overrides["format"] = log_format.value

        try:
            loaded_config = load_config(
                config_path=config,
                cli_overrides={"logging": logging_overrides} if logging_overrides else None,
            )
        except ConfigError as e:
            exit_with_error(str(e), ExitCode.CONFIG_ERROR, console=error_console)

        logger = create_logger(
            level=loaded_config.logging.level.value,
            log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
            log_file=loaded_config.logging.file,
        )

        CLIContext.set_current(CLIContext(config=loaded_config, logger=logger, config_path=config))
        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


def main() -> None:
    """Default entrypoint for the `gatewarden` CLI."""
    app = create_app()
    app.meta()


if __name__ == "__main__":
    main()
