"""Health probes, reports, and the HTTP endpoints that expose them."""

from ._api import create_health_router
from ._models import (
    GatewayCheck,
    GatewayStatus,
    HealthChecks,
    HealthReport,
    ResourceCheck,
    StatusReport,
    StorageCheck,
    StorageStatus,
)
from ._monitor import HealthMonitor
from ._probes import (
    ProcessLookup,
    find_gateway_pid,
    probe_gateway,
    probe_resource,
    probe_storage,
)

__all__ = [
    "GatewayCheck",
    "GatewayStatus",
    "HealthChecks",
    "HealthMonitor",
    "HealthReport",
    "ProcessLookup",
    "ResourceCheck",
    "StatusReport",
    "StorageCheck",
    "StorageStatus",
    "create_health_router",
    "find_gateway_pid",
    "probe_gateway",
    "probe_resource",
    "probe_storage",
]
