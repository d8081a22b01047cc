"""Gateway bootstrap housekeeping."""

from ._housekeeping import (
    ALLOWLIST_FILE,
    GATEWAY_CONFIG_FILE,
    OWNER_ID_ENV,
    HousekeepingReport,
    build_gateway_config,
    prepare_gateway,
    remove_stale_locks,
    write_gateway_config,
    write_owner_allowlist,
)

__all__ = [
    "ALLOWLIST_FILE",
    "GATEWAY_CONFIG_FILE",
    "OWNER_ID_ENV",
    "HousekeepingReport",
    "build_gateway_config",
    "prepare_gateway",
    "remove_stale_locks",
    "write_gateway_config",
    "write_owner_allowlist",
]
