"""Protocol definitions for the supervisor.

This module defines the interfaces that decouple the restart loop from
process spawning and console output:
- OutputSink: Protocol for consuming gateway output and events
- ProcessLauncher: Protocol for running the gateway to completion
"""

from collections.abc import Sequence
from typing import Literal, Protocol, runtime_checkable

from ._models import GatewayEvent


@runtime_checkable
class OutputSink(Protocol):
    """Protocol for consuming gateway output lines and lifecycle events."""

    async def write_line(
        self,
        name: str,
        pid: int,
        stream: Literal["stdout", "stderr"],
        line: str,
    ) -> None:
        """Write a line of process output.

        Args:
            name: Name of the process that produced the output.
            pid: Process ID.
            stream: Which output stream the line came from.
            line: The output line (without trailing newline).
        """
        ...

    async def write_event(self, event: GatewayEvent) -> None:
        """Write a lifecycle event.

        Args:
            event: The lifecycle event to record.
        """
        ...


@runtime_checkable
class ProcessLauncher(Protocol):
    """Protocol for launching the managed process.

    run() blocks until the process exits. If the calling task is
    cancelled, the launcher terminates the process before re-raising.
    """

    @property
    def pid(self) -> int | None:
        """Return the process ID while running, None otherwise."""
        ...

    async def run(self, command: Sequence[str]) -> int:
        """Launch the command and wait for it to exit.

        Args:
            command: Executable and arguments.

        Returns:
            The process exit code.

        Raises:
            ProcessStartError: If the process cannot be spawned.
        """
        ...
