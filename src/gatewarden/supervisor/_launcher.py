"""Subprocess launcher for the managed gateway.

This module provides the SubprocessLauncher class that spawns the gateway,
streams its output, waits for it to exit, and terminates it gracefully
when the supervising task is cancelled.
"""

import os
import signal
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Literal, final

import anyio
import anyio.abc
import pendulum
from anyio.streams.text import TextReceiveStream

from gatewarden.exceptions import ProcessStartError

from ._models import GatewayEvent, GatewayEventType
from ._protocol import OutputSink


def _get_timestamp() -> str:
    """Get current timestamp in ISO 8601 format."""
    return pendulum.now("UTC").to_iso8601_string()


@final
class SubprocessLauncher:
    """Runs the gateway as a child process.

    Attributes:
        name: Label used for output prefixes and events.
    """

    __slots__ = (
        "_cwd",
        "_env",
        "_output_sink",
        "_process",
        "_shutdown_timeout",
        "name",
    )

    def __init__(
        self,
        output_sink: OutputSink,
        *,
        name: str = "gateway",
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
        shutdown_timeout: float = 10.0,
    ) -> None:
        """Initialize the launcher.

        Args:
            output_sink: Sink for process output and events.
            name: Label used for output prefixes and events.
            cwd: Working directory for the process.
            env: Additional environment variables.
            shutdown_timeout: Seconds between SIGTERM and SIGKILL.
        """
        self.name = name
        self._output_sink = output_sink
        self._cwd = cwd
        self._env = env or {}
        self._shutdown_timeout = shutdown_timeout
        self._process: anyio.abc.Process | None = None

    @property
    def pid(self) -> int | None:
        """Return the process ID if running, None otherwise."""
        return self._process.pid if self._process is not None else None

    async def emit_event(
        self,
        event_type: GatewayEventType,
        *,
        pid: int | None = None,
        message: str | None = None,
        exit_code: int | None = None,
    ) -> None:
        """Emit a lifecycle event to the output sink.

        Args:
            event_type: Type of event to emit.
            pid: Process ID, if any.
            message: Optional message for the event.
            exit_code: Exit code if the process terminated.
        """
        event = GatewayEvent(
            name=self.name,
            event_type=event_type,
            timestamp=_get_timestamp(),
            pid=pid,
            exit_code=exit_code,
            message=message,
        )
        try:  # noqa: SIM105
            await self._output_sink.write_event(event)
        except Exception:  # noqa: BLE001, S110
            # Output sink errors should not crash the gateway
            pass

    async def _stream_output(
        self,
        stream: TextReceiveStream,
        stream_name: Literal["stdout", "stderr"],
        pid: int,
    ) -> None:
        try:
            async for chunk in stream:
                for line in chunk.splitlines():
                    try:  # noqa: SIM105
                        await self._output_sink.write_line(self.name, pid, stream_name, line)
                    except Exception:  # noqa: BLE001, S110
                        pass
        except (anyio.ClosedResourceError, anyio.BrokenResourceError):
            # Expected on process exit
            pass

    async def run(self, command: Sequence[str]) -> int:
        """Launch the command and wait for it to exit.

        Args:
            command: Executable and arguments.

        Returns:
            The process exit code.

        Raises:
            ProcessStartError: If the process cannot be spawned.
        """
        env = {**os.environ, **self._env} if self._env else None
        try:
            process = await anyio.open_process(
                list(command),
                cwd=self._cwd,
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            await self.emit_event(GatewayEventType.CRASHED, message=f"Failed to start: {e}")
            msg = f"Failed to start {self.name}: {e}"
            raise ProcessStartError(msg, command=tuple(command), cause=e) from e

        self._process = process
        pid = process.pid
        await self.emit_event(
            GatewayEventType.STARTED,
            pid=pid,
            message=f"Started with command: {' '.join(command)}",
        )

        try:
            async with anyio.create_task_group() as tg:
                if process.stdout is not None:
                    tg.start_soon(
                        self._stream_output, TextReceiveStream(process.stdout), "stdout", pid
                    )
                if process.stderr is not None:
                    tg.start_soon(
                        self._stream_output, TextReceiveStream(process.stderr), "stderr", pid
                    )
                exit_code = await process.wait()
        except anyio.get_cancelled_exc_class():
            with anyio.CancelScope(shield=True):
                await self._terminate(process)
            raise
        finally:
            self._process = None

        event_type = GatewayEventType.EXITED if exit_code == 0 else GatewayEventType.CRASHED
        await self.emit_event(
            event_type,
            pid=pid,
            exit_code=exit_code,
            message=f"Exited with code {exit_code}",
        )
        return exit_code

    async def _terminate(self, process: anyio.abc.Process) -> None:
        """Send SIGTERM, then SIGKILL if the process outlives the timeout."""
        try:
            process.send_signal(signal.SIGTERM)

            with anyio.move_on_after(self._shutdown_timeout):
                _ = await process.wait()

            if process.returncode is None:
                process.kill()
                _ = await process.wait()
        except ProcessLookupError:
            # Already gone
            pass

        await self.emit_event(
            GatewayEventType.STOPPED,
            pid=process.pid,
            exit_code=process.returncode,
            message="Stopped by supervisor",
        )
