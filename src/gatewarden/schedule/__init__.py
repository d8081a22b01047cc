"""Registration of recurring jobs with the gateway's scheduler."""

from ._models import JobDefinition, JobOutcome, JobStatus, RegistrationReport
from ._registrar import (
    SEARCH_KEY_ENV,
    STUDY_COMMAND,
    ReadinessProbe,
    RestoreAction,
    ScheduleRegistrar,
    default_jobs,
)
from ._scheduler import CliJobScheduler, JobScheduler

__all__ = [
    "SEARCH_KEY_ENV",
    "STUDY_COMMAND",
    "CliJobScheduler",
    "JobDefinition",
    "JobOutcome",
    "JobScheduler",
    "JobStatus",
    "ReadinessProbe",
    "RegistrationReport",
    "RestoreAction",
    "ScheduleRegistrar",
    "default_jobs",
]
