# pyright: reportUnusedCallResult=false
"""CLI context for global state management.

The CLIContext is set once at CLI startup by the meta command and read by
every subcommand through a context variable.
"""

import contextvars
from dataclasses import dataclass, field
from pathlib import Path

from structlog.typing import FilteringBoundLogger

from gatewarden.config import Config
from gatewarden.utils import create_logger

_current_cli_context: contextvars.ContextVar["CLIContext | None"] = contextvars.ContextVar(
    "cli_context", default=None
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with configuration and logger.

    Attributes:
        config: Loaded configuration object.
        logger: Structured logger for the running command.
        config_path: Explicit config file passed with --config, if any.
    """

    config: Config = field(repr=False)
    logger: FilteringBoundLogger = field(repr=False)
    config_path: Path | None = None

    @classmethod
    def get_current(cls) -> "CLIContext":
        """Get the active CLIContext, or a default one if none is set.

        Returns:
            The active context, or one built from defaults.
        """
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx

        config = Config.from_dict({}, source="defaults")
        return cls(
            config=config,
            logger=create_logger(
                level=config.logging.level.value,
                log_format=config.logging.format.value,
            ),
        )

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to the default context, mainly for tests."""
        _current_cli_context.set(None)
