"""Supervisor package for keeping the gateway process alive.

Key Components:
    - ProcessSupervisor: Restart loop with bounded retries and backoff
    - ExponentialBackoff: Doubling delay calculator
    - SubprocessLauncher: Spawns the gateway and streams its output
    - ConsoleOutputSink: Rich console rendering of output and events
    - CleanupOnce: Idempotent shutdown action
    - ProcessRunRecord / SupervisorState: Restart bookkeeping

Example:
    >>> from gatewarden.supervisor import (
    ...     ConsoleOutputSink, ProcessSupervisor, SubprocessLauncher
    ... )
    >>> sink = ConsoleOutputSink()
    >>> launcher = SubprocessLauncher(sink)
    >>> supervisor = ProcessSupervisor(launcher, config.supervisor, logger, sink=sink)
    >>> await supervisor.run(config.gateway.command())  # Blocks
"""

from ._backoff import ExponentialBackoff
from ._cleanup import CleanupOnce
from ._launcher import SubprocessLauncher
from ._models import (
    GatewayEvent,
    GatewayEventType,
    ProcessRunRecord,
    SupervisorState,
)
from ._output import ConsoleOutputSink, render_event, render_line
from ._protocol import OutputSink, ProcessLauncher
from ._supervisor import ProcessSupervisor

__all__ = [
    "CleanupOnce",
    "ConsoleOutputSink",
    "ExponentialBackoff",
    "GatewayEvent",
    "GatewayEventType",
    "OutputSink",
    "ProcessLauncher",
    "ProcessRunRecord",
    "ProcessSupervisor",
    "SubprocessLauncher",
    "SupervisorState",
    "render_event",
    "render_line",
]
