"""Health report models.

Reports serialize with camelCase keys (`totalLatencyMs`, `latencyMs`) so
load balancers and dashboards built against the gateway's own JSON keep
working.
"""

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class GatewayStatus(StrEnum):
    """Result of the gateway probe. Only HEALTHY counts as healthy."""

    HEALTHY = "healthy"
    NOT_RESPONDING = "not_responding"
    NOT_RUNNING = "not_running"
    ERROR = "error"


class StorageStatus(StrEnum):
    """Result of the durable mount probe."""

    MOUNTED = "mounted"
    NOT_MOUNTED = "not_mounted"
    ERROR = "error"


RESOURCE_ERROR = "error"


class _ReportModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class GatewayCheck(_ReportModel):
    status: GatewayStatus
    latency_ms: int
    pid: int | None = None
    error: str | None = None


class StorageCheck(_ReportModel):
    status: StorageStatus
    latency_ms: int


class ResourceCheck(_ReportModel):
    usage: str
    latency_ms: int


class HealthChecks(_ReportModel):
    gateway: GatewayCheck
    storage: StorageCheck
    resource: ResourceCheck | None = None


class HealthReport(_ReportModel):
    """Aggregated result of one liveness check.

    Attributes:
        timestamp: When the check started (ISO 8601).
        total_latency_ms: Wall-clock duration of the whole check.
        healthy: True iff the gateway probe reported HEALTHY.
        checks: Individual probe results.
    """

    timestamp: str
    total_latency_ms: int
    healthy: bool
    checks: HealthChecks


class StatusReport(_ReportModel):
    """Result of the cheap gateway status check."""

    ok: bool
    status: GatewayStatus
    pid: int | None = None
    error: str | None = None
