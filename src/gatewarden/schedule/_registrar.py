"""One-shot job registration once the gateway accepts connections."""

import os
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import TYPE_CHECKING, TypeAlias, final

import anyio

from gatewarden.config import ScheduleConfig
from gatewarden.utils import Clock, SystemClock

from ._models import JobDefinition, JobOutcome, JobStatus, RegistrationReport
from ._scheduler import JobScheduler

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

ReadinessProbe: TypeAlias = Callable[[], Awaitable[bool]]
RestoreAction: TypeAlias = Callable[[], Awaitable[bool]]

STUDY_COMMAND = "gatewarden study"
SEARCH_KEY_ENV = "SERPER_API_KEY"


def default_jobs(config: ScheduleConfig) -> list[JobDefinition]:
    """Jobs registered on every boot.

    Args:
        config: Schedule settings.

    Returns:
        The rotating study job, gated on the search API key.
    """
    return [
        JobDefinition(
            name=config.study_job_name,
            schedule=config.study_cron,
            command=STUDY_COMMAND,
            requires_env=SEARCH_KEY_ENV,
        )
    ]


@final
class ScheduleRegistrar:
    """Waits for the gateway to come up, then restores and registers jobs.

    Nothing here is fatal: an exhausted readiness wait or a failed
    registration is logged and reported, and the gateway keeps running.
    """

    __slots__ = (
        "_clock",
        "_config",
        "_environ",
        "_logger",
        "_restore_action",
        "_scheduler",
    )

    def __init__(  # noqa: PLR0913
        self,
        config: ScheduleConfig,
        scheduler: JobScheduler,
        logger: "FilteringBoundLogger",  # noqa: UP037
        *,
        clock: Clock | None = None,
        restore_action: RestoreAction | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the registrar.

        Args:
            config: Readiness polling and restore script settings.
            scheduler: Where jobs get registered.
            logger: Logger for registration outcomes.
            clock: Time source for polling sleeps.
            restore_action: Re-creates persisted jobs. Defaults to running
                the configured restore script with node when it exists.
            environ: Environment used to gate jobs. Defaults to os.environ.
        """
        self._config = config
        self._scheduler = scheduler
        self._logger = logger.bind(component="schedule")
        self._clock: Clock = clock or SystemClock()
        self._restore_action: RestoreAction | None = restore_action
        self._environ: Mapping[str, str] = environ if environ is not None else os.environ

    async def wait_until_ready(self, probe: ReadinessProbe) -> int | None:
        """Poll the probe until it succeeds, sleeping before each attempt.

        Args:
            probe: Returns True once the gateway is ready.

        Returns:
            The attempt number that succeeded, or None if all failed.
        """
        for attempt in range(1, self._config.readiness_attempts + 1):
            await self._clock.sleep(self._config.readiness_interval)
            if await probe():
                return attempt
        return None

    async def _run_restore_script(self) -> bool:
        script = self._config.restore_script
        if not script.is_file():
            return False

        self._logger.info("jobs_restore_started", script=str(script))
        result = None
        with anyio.move_on_after(self._config.restore_timeout):
            try:
                result = await anyio.run_process(["node", str(script)], check=False)
            except OSError as e:
                self._logger.warning("jobs_restore_failed", error=str(e))
                return False

        if result is None:
            self._logger.warning(
                "jobs_restore_failed",
                error=f"restore exceeded {self._config.restore_timeout:g}s",
            )
            return False
        if result.returncode != 0:
            self._logger.warning(
                "jobs_restore_failed",
                exit_code=result.returncode,
                stderr=result.stderr.decode(errors="replace").strip(),
            )
            return False
        return True

    async def restore_jobs(self) -> bool:
        """Run the restore action.

        Returns:
            True if persisted jobs were restored.
        """
        action = self._restore_action or self._run_restore_script
        restored = await action()
        if restored:
            self._logger.info("jobs_restored")
        return restored

    async def register_jobs(self, jobs: Sequence[JobDefinition]) -> tuple[JobOutcome, ...]:
        """Register each job whose environment gate is satisfied.

        Args:
            jobs: Jobs to register.

        Returns:
            One outcome per job.
        """
        outcomes: list[JobOutcome] = []
        for job in jobs:
            if job.requires_env and not self._environ.get(job.requires_env):
                outcome = JobOutcome(
                    job=job.name,
                    status=JobStatus.SKIPPED,
                    detail=f"{job.requires_env} not set",
                )
            else:
                outcome = await self._scheduler.register(job)

            if outcome.status == JobStatus.FAILED:
                self._logger.warning("job_registration_failed", job=job.name, detail=outcome.detail)
            else:
                self._logger.info("job_registration", job=job.name, status=outcome.status.value)
            outcomes.append(outcome)
        return tuple(outcomes)

    async def on_ready(
        self, probe: ReadinessProbe, jobs: Sequence[JobDefinition]
    ) -> RegistrationReport:
        """Wait for readiness, then restore persisted jobs and register new ones.

        Args:
            probe: Gateway readiness probe.
            jobs: Jobs to register.

        Returns:
            What happened. Cancellation (e.g. shutdown) propagates.
        """
        attempt = await self.wait_until_ready(probe)
        if attempt is None:
            self._logger.warning("gateway_not_ready", attempts=self._config.readiness_attempts)
            return RegistrationReport(ready=False, attempts=self._config.readiness_attempts)

        self._logger.info("gateway_ready", attempts=attempt)
        restored = await self.restore_jobs()
        outcomes = await self.register_jobs(jobs)
        return RegistrationReport(
            ready=True, attempts=attempt, restored=restored, outcomes=outcomes
        )
