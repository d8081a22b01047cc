"""Job registration through the gateway's command line."""

import subprocess
from collections.abc import Mapping
from typing import Protocol, final

import anyio

from ._models import JobDefinition, JobOutcome, JobStatus

_ALREADY_EXISTS_MARKERS = ("already exists", "already registered")


class JobScheduler(Protocol):
    """Registers recurring jobs with the gateway."""

    async def register(self, job: JobDefinition) -> JobOutcome:
        """Register a job. Must not raise for scheduler-side failures."""
        ...


@final
class CliJobScheduler:
    """Registers jobs by running `<executable> cron add NAME SCHEDULE COMMAND`."""

    __slots__ = ("_env", "_executable", "_timeout")

    def __init__(
        self,
        executable: str,
        *,
        timeout: float = 30.0,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._executable = executable
        self._timeout = timeout
        self._env = dict(env) if env is not None else None

    def command(self, job: JobDefinition) -> list[str]:
        return [self._executable, "cron", "add", job.name, job.schedule, job.command]

    async def register(self, job: JobDefinition) -> JobOutcome:
        """Run the registration command and classify its result.

        Args:
            job: The job to register.

        Returns:
            REGISTERED on exit 0, ALREADY_EXISTS when the scheduler reports
            a duplicate, FAILED otherwise.
        """
        result: subprocess.CompletedProcess[bytes] | None = None
        with anyio.move_on_after(self._timeout):
            try:
                result = await anyio.run_process(self.command(job), check=False, env=self._env)
            except OSError as e:
                return JobOutcome(job=job.name, status=JobStatus.FAILED, detail=str(e))

        if result is None:
            return JobOutcome(
                job=job.name,
                status=JobStatus.FAILED,
                detail=f"registration exceeded {self._timeout:g}s",
            )

        output = (result.stdout + result.stderr).decode(errors="replace").strip()
        if result.returncode == 0:
            return JobOutcome(job=job.name, status=JobStatus.REGISTERED)
        if any(marker in output.lower() for marker in _ALREADY_EXISTS_MARKERS):
            return JobOutcome(job=job.name, status=JobStatus.ALREADY_EXISTS)
        return JobOutcome(
            job=job.name,
            status=JobStatus.FAILED,
            detail=output or f"exit code {result.returncode}",
        )
