"""Data models for the supervisor.

This module defines the core data types for keeping the gateway alive:
- GatewayEventType: Types of lifecycle events
- GatewayEvent: Immutable event records for the console sink
- ProcessRunRecord: Outcome of one launch
- SupervisorState: Mutable restart bookkeeping
"""

from dataclasses import dataclass
from enum import StrEnum


class GatewayEventType(StrEnum):
    """Types of gateway lifecycle events.

    - STARTED: The gateway process has been spawned
    - EXITED: The gateway exited with code 0
    - CRASHED: The gateway exited with a non-zero code or failed to spawn
    - RESTARTING: The supervisor is waiting before the next launch
    - STOPPED: The gateway was terminated by the supervisor
    - GAVE_UP: The retry budget is exhausted
    """

    STARTED = "started"
    EXITED = "exited"
    CRASHED = "crashed"
    RESTARTING = "restarting"
    STOPPED = "stopped"
    GAVE_UP = "gave_up"


@dataclass(frozen=True, slots=True)
class GatewayEvent:
    """Immutable gateway lifecycle event.

    Attributes:
        name: Name of the managed process.
        event_type: Type of lifecycle event.
        timestamp: ISO 8601 formatted timestamp.
        pid: Process ID if applicable.
        exit_code: Exit code if the process terminated.
        message: Optional human-readable message.
    """

    name: str
    event_type: GatewayEventType
    timestamp: str
    pid: int | None = None
    exit_code: int | None = None
    message: str | None = None


@dataclass(frozen=True, slots=True)
class ProcessRunRecord:
    """Outcome of a single gateway launch.

    Created each time the gateway is launched and consumed immediately to
    decide the backoff. Never persisted.

    Attributes:
        started_at: ISO 8601 timestamp of the launch.
        exit_code: Exit code, or None if the process could not be spawned.
        runtime_seconds: Whole seconds between launch and exit.
    """

    started_at: str
    exit_code: int | None
    runtime_seconds: int


@dataclass(slots=True)
class SupervisorState:
    """Restart bookkeeping owned by the supervisor loop.

    Attributes:
        retry_count: Short runs since the last stable run.
        backoff_seconds: Delay before the next launch.
        consecutive_failure_streak: Whether the last run was a short run.
    """

    retry_count: int
    backoff_seconds: int
    consecutive_failure_streak: bool = False

    def reset(self, initial_backoff: int) -> None:
        """Return to baseline after a stable run."""
        self.retry_count = 0
        self.backoff_seconds = initial_backoff
        self.consecutive_failure_streak = False
