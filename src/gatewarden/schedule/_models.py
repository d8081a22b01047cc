"""Recurring job definitions and registration outcomes."""

from dataclasses import dataclass, field
from enum import StrEnum


@dataclass(frozen=True, slots=True)
class JobDefinition:
    """A recurring job to register with the gateway's scheduler.

    Attributes:
        name: Unique job name.
        schedule: Cron expression.
        command: Shell command the gateway runs on schedule.
        requires_env: Environment variable that must be set for the job
            to be registered, if any.
    """

    name: str
    schedule: str
    command: str
    requires_env: str | None = None


class JobStatus(StrEnum):
    """How a single job registration ended."""

    REGISTERED = "registered"
    ALREADY_EXISTS = "already_exists"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class JobOutcome:
    """Result of registering one job."""

    job: str
    status: JobStatus
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.status in {JobStatus.REGISTERED, JobStatus.ALREADY_EXISTS}


@dataclass(frozen=True, slots=True)
class RegistrationReport:
    """Result of one readiness wait and registration pass.

    Attributes:
        ready: Whether the readiness probe ever succeeded.
        attempts: Probes made before success or exhaustion.
        restored: Whether the persisted-job restore action ran successfully.
        outcomes: One entry per job, in the order given.
    """

    ready: bool
    attempts: int
    restored: bool = False
    outcomes: tuple[JobOutcome, ...] = field(default_factory=tuple)
