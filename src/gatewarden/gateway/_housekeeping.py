"""Gateway bootstrap housekeeping.

Runs after the restore and before the first launch. The gateway config is
always rewritten so a restored copy in an older format never wins.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from gatewarden.config import GatewayConfig
from gatewarden.utils import write_json_atomic

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

GATEWAY_CONFIG_FILE = "openclaw.json"
ALLOWLIST_FILE = "credentials/telegram-allowFrom.json"
OWNER_ID_ENV = "TELEGRAM_OWNER_ID"


@dataclass(frozen=True, slots=True)
class HousekeepingReport:
    """What bootstrap housekeeping did.

    Attributes:
        config_written: Path of the gateway config, None if writing failed.
        allowlist_written: Path of the owner allowlist, None if not written.
        locks_removed: Number of stale lock files deleted.
    """

    config_written: Path | None
    allowlist_written: Path | None
    locks_removed: int


def build_gateway_config(config: GatewayConfig) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    return {
        "agents": {"defaults": {"workspace": str(config.workspace_dir)}},
        "gateway": {"port": config.port, "mode": "local"},
        "channels": {"telegram": {"dmPolicy": "allowlist"}},
    }


def write_gateway_config(config: GatewayConfig) -> Path:
    """Write the gateway's JSON config into its config directory.

    Raises:
        OSError: If the file cannot be written.
    """
    path = config.config_dir / GATEWAY_CONFIG_FILE
    write_json_atomic(path, build_gateway_config(config))
    return path


def write_owner_allowlist(config_dir: Path, owner_id: str) -> Path:
    """Allow direct messages from the owner's Telegram account.

    Args:
        config_dir: The gateway's config directory.
        owner_id: Telegram user ID of the owner.

    Returns:
        The path written.

    Raises:
        OSError: If the file cannot be written.
    """
    path = config_dir / ALLOWLIST_FILE
    write_json_atomic(path, {"version": 1, "allowFrom": [owner_id]})
    return path


def remove_stale_locks(config_dir: Path, pattern: str = "*.lock") -> int:
    """Delete lock files left behind by a previous gateway run.

    Args:
        config_dir: Directory searched recursively.
        pattern: Glob for lock files.

    Returns:
        Number of files deleted.
    """
    if not config_dir.is_dir():
        return 0

    removed = 0
    for lock in config_dir.rglob(pattern):
        if lock.is_file():
            lock.unlink(missing_ok=True)
            removed += 1
    return removed


def prepare_gateway(
    config: GatewayConfig,
    logger: "FilteringBoundLogger",  # noqa: UP037
    *,
    environ: Mapping[str, str] | None = None,
) -> HousekeepingReport:
    """Write config files and clear stale locks before launching the gateway.

    Failures are logged; the gateway is launched regardless.

    Args:
        config: Gateway settings.
        logger: Logger for housekeeping outcomes.
        environ: Environment holding the owner ID. Defaults to os.environ.

    Returns:
        What was done.
    """
    log = logger.bind(component="housekeeping")
    env = environ if environ is not None else os.environ

    config_path: Path | None = None
    try:
        config_path = write_gateway_config(config)
    except OSError as e:
        log.warning("gateway_config_write_failed", error=str(e))
    else:
        log.info("gateway_config_written", path=str(config_path))

    allowlist_path: Path | None = None
    if owner_id := env.get(OWNER_ID_ENV, "").strip():
        try:
            allowlist_path = write_owner_allowlist(config.config_dir, owner_id)
        except OSError as e:
            log.warning("owner_allowlist_write_failed", error=str(e))
        else:
            log.info("owner_allowlist_written", owner_id=owner_id)

    try:
        removed = remove_stale_locks(config.config_dir)
    except OSError as e:
        log.warning("stale_lock_cleanup_failed", error=str(e))
        removed = 0
    else:
        log.info("stale_locks_removed", count=removed)

    return HousekeepingReport(
        config_written=config_path,
        allowlist_written=allowlist_path,
        locks_removed=removed,
    )
