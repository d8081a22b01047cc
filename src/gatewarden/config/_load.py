"""Configuration discovery and layered loading."""

import os
from pathlib import Path

from gatewarden.exceptions import ConfigLoadError

from ._loader import deep_merge, parse_env_vars, read_toml_file
from ._models import Config

DEFAULT_CONFIG_FILENAME = "gatewarden.toml"


def find_config_file(explicit: Path | None = None) -> Path | None:
    """Locate the configuration file to load.

    Precedence: the explicit path, then $GATEWARDEN_CONFIG, then
    ./gatewarden.toml if it exists.

    Args:
        explicit: Path passed on the command line.

    Returns:
        The file to load, or None to use defaults and environment only.

    Raises:
        ConfigLoadError: If an explicitly requested file does not exist.
    """
    requested = explicit
    if requested is None and (env_path := os.environ.get("GATEWARDEN_CONFIG")):
        requested = Path(env_path)

    if requested is not None:
        if not requested.is_file():
            msg = f"Config file not found: {requested}"
            raise ConfigLoadError(msg, path=requested)
        return requested

    candidate = Path.cwd() / DEFAULT_CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(
    *,
    config_path: Path | None = None,
    include_env: bool = True,
    cli_overrides: dict[str, object] | None = None,
) -> Config:
    """Load configuration from all sources.

    Sources are merged in precedence order: CLI overrides, environment
    variables, the config file, then built-in defaults.

    Args:
        config_path: Explicit path to config file (--config flag).
        include_env: Whether to read GATEWARDEN_* environment variables.
        cli_overrides: Nested overrides from command-line flags.

    Returns:
        The validated configuration.

    Raises:
        ConfigLoadError: If the config file is missing or unparseable.
        ConfigValidationError: If the merged values are invalid.
    """
    path = find_config_file(config_path)
    data: dict[str, object] = {}
    source = "defaults"

    if path is not None:
        data = read_toml_file(path)
        source = str(path)

    if include_env:
        data = deep_merge(data, parse_env_vars())

    if cli_overrides:
        data = deep_merge(data, dict(cli_overrides))

    return Config.from_dict(data, source=source)
