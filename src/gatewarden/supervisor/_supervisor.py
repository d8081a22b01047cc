"""Restart loop that keeps the gateway running.

This module provides the ProcessSupervisor class. It launches the gateway,
classifies each run as stable or short by its runtime, and restarts it
with exponential backoff until the retry budget is exhausted.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Never, final

from gatewarden.config import SupervisorConfig
from gatewarden.exceptions import ProcessStartError, RetriesExhaustedError
from gatewarden.utils import Clock, SystemClock

from ._backoff import ExponentialBackoff
from ._models import GatewayEvent, GatewayEventType, ProcessRunRecord, SupervisorState
from ._protocol import OutputSink, ProcessLauncher

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


@final
class ProcessSupervisor:
    """Keeps a single managed process alive.

    A run that lasts at least `success_threshold_seconds` counts as stable
    regardless of its exit code and resets the retry counter and backoff.
    Shorter runs consume the retry budget; once `max_retries` short runs
    happen in a row the loop stops for good.

    The loop is single-owner: only run() mutates the state. Other tasks
    may read `state`, `pid`, and `runs` at any time.
    """

    __slots__ = (
        "_backoff",
        "_clock",
        "_config",
        "_launcher",
        "_logger",
        "_runs",
        "_sink",
        "_state",
    )

    def __init__(
        self,
        launcher: ProcessLauncher,
        config: SupervisorConfig,
        logger: "FilteringBoundLogger",  # noqa: UP037
        *,
        clock: Clock | None = None,
        sink: OutputSink | None = None,
    ) -> None:
        """Initialize the supervisor.

        Args:
            launcher: Runs the managed process to completion.
            config: Restart policy.
            logger: Logger for lifecycle transitions.
            clock: Time source. Uses the system clock if None.
            sink: Receives RESTARTING and GAVE_UP events, if given.
        """
        self._launcher = launcher
        self._config = config
        self._logger = logger.bind(component="supervisor")
        self._clock: Clock = clock or SystemClock()
        self._backoff = ExponentialBackoff(
            base=config.initial_backoff_seconds,
            max_delay=config.max_backoff_seconds,
        )
        self._state = SupervisorState(
            retry_count=0,
            backoff_seconds=config.initial_backoff_seconds,
        )
        self._runs: list[ProcessRunRecord] = []
        self._sink = sink

    @property
    def state(self) -> SupervisorState:
        """Return a snapshot of the restart bookkeeping."""
        return SupervisorState(
            retry_count=self._state.retry_count,
            backoff_seconds=self._state.backoff_seconds,
            consecutive_failure_streak=self._state.consecutive_failure_streak,
        )

    @property
    def pid(self) -> int | None:
        """Return the managed process ID while it is running."""
        return self._launcher.pid

    @property
    def runs(self) -> tuple[ProcessRunRecord, ...]:
        """Return the records of every completed launch."""
        return tuple(self._runs)

    async def _emit(self, event_type: GatewayEventType, message: str) -> None:
        if self._sink is None:
            return
        event = GatewayEvent(
            name="gateway",
            event_type=event_type,
            timestamp=self._clock.now().to_iso8601_string(),
            message=message,
        )
        try:
            await self._sink.write_event(event)
        except Exception as e:  # noqa: BLE001
            self._logger.debug("supervisor_event_dropped", error=str(e))

    async def _launch_once(self, command: Sequence[str]) -> ProcessRunRecord:
        started_at = self._clock.now().to_iso8601_string()
        started = self._clock.monotonic()

        self._logger.info(
            "gateway_starting",
            attempt=self._state.retry_count + 1,
            max_retries=self._config.max_retries,
        )

        exit_code: int | None
        try:
            exit_code = await self._launcher.run(command)
        except ProcessStartError as e:
            self._logger.error("gateway_start_failed", error=str(e))
            exit_code = None

        runtime = int(self._clock.monotonic() - started)
        self._logger.info("gateway_exited", exit_code=exit_code, runtime_seconds=runtime)
        return ProcessRunRecord(
            started_at=started_at,
            exit_code=exit_code,
            runtime_seconds=runtime,
        )

    def record_run(self, record: ProcessRunRecord) -> bool:
        """Apply a completed run to the restart state.

        Args:
            record: The run that just ended.

        Returns:
            True if the loop should restart the process, False if the
            retry budget is exhausted.
        """
        self._runs.append(record)

        if record.runtime_seconds >= self._config.success_threshold_seconds:
            self._logger.info(
                "gateway_run_stable",
                runtime_seconds=record.runtime_seconds,
                threshold_seconds=self._config.success_threshold_seconds,
            )
            self._state.reset(self._config.initial_backoff_seconds)
            return True

        self._state.retry_count += 1
        self._state.consecutive_failure_streak = True
        return self._state.retry_count < self._config.max_retries

    async def run(self, command: Sequence[str]) -> Never:
        """Run the restart loop.

        Blocks for as long as the process keeps being restarted. Cancel the
        calling task to stop; the launcher terminates the running process.

        Args:
            command: Executable and arguments of the managed process.

        Raises:
            RetriesExhaustedError: When `max_retries` short runs happen in a row.
        """
        while True:
            record = await self._launch_once(command)

            if not self.record_run(record):
                self._logger.error(
                    "gateway_retries_exhausted",
                    max_retries=self._config.max_retries,
                    last_exit_code=record.exit_code,
                )
                msg = f"Gateway failed {self._state.retry_count} times in a row, giving up"
                await self._emit(GatewayEventType.GAVE_UP, msg)
                raise RetriesExhaustedError(
                    msg,
                    attempts=len(self._runs),
                    last_exit_code=record.exit_code,
                )

            delay = self._state.backoff_seconds
            self._logger.info(
                "gateway_restarting",
                delay_seconds=delay,
                retry_count=self._state.retry_count,
                max_retries=self._config.max_retries,
            )
            await self._emit(
                GatewayEventType.RESTARTING,
                f"in {delay}s (retry {self._state.retry_count}/{self._config.max_retries})",
            )
            await self._clock.sleep(delay)
            self._state.backoff_seconds = self._backoff.advance(delay)
