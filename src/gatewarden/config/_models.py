# pyright: reportExplicitAny=false, reportAny=false
"""Configuration models.

Each section of the configuration file maps to one frozen Pydantic model.
The Config container validates the merged dictionary produced by the
loader and is passed explicitly into every component.
"""

from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from gatewarden.config._defaults import DEFAULT_CONFIG
from gatewarden.config._loader import deep_merge
from gatewarden.exceptions import ConfigValidationError


class LogLevel(StrEnum):
    """Log level threshold values."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class _Section(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


class LoggingConfig(_Section):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""


class GatewayConfig(_Section):
    """How to launch and reach the managed gateway process.

    Attributes:
        executable: Gateway executable name or path.
        host: Host used for readiness and health probes.
        port: TCP port the gateway listens on.
        bind: Bind mode passed to the gateway.
        token: Optional auth token passed to the gateway.
        config_dir: The gateway's persistent state directory.
        workspace_dir: Agent workspace directory written into the gateway config.
        shutdown_timeout: Seconds between SIGTERM and SIGKILL on shutdown.
        extra_args: Additional fixed arguments.
    """

    executable: str = "openclaw"
    host: str = "127.0.0.1"
    port: int = Field(default=18789, ge=1, le=65535)
    bind: str = "lan"
    token: str = ""
    config_dir: Path = Path("/root/.openclaw")
    workspace_dir: Path = Path("/root/clawd")
    shutdown_timeout: float = Field(default=10.0, gt=0)
    extra_args: tuple[str, ...] = ("--verbose", "--allow-unconfigured")

    def command(self) -> tuple[str, ...]:
        """Build the gateway invocation."""
        command = (
            self.executable,
            "gateway",
            "--port",
            str(self.port),
            *self.extra_args,
            "--bind",
            self.bind,
        )
        if self.token:
            command += ("--token", self.token)
        return command


class SupervisorConfig(_Section):
    """Restart policy for the managed process.

    Attributes:
        max_retries: Consecutive short runs tolerated before giving up.
        initial_backoff_seconds: First delay, and the value restored after a stable run.
        max_backoff_seconds: Upper bound for the doubling delay.
        success_threshold_seconds: Runtime at which a run counts as stable.
    """

    max_retries: int = Field(default=10, ge=1)
    initial_backoff_seconds: int = Field(default=5, ge=0)
    max_backoff_seconds: int = Field(default=120, ge=0)
    success_threshold_seconds: int = Field(default=60, ge=0)

    @model_validator(mode="after")
    def _check_backoff_bounds(self) -> Self:
        if self.max_backoff_seconds < self.initial_backoff_seconds:
            msg = "max_backoff_seconds must be >= initial_backoff_seconds"
            raise ValueError(msg)
        return self


class BackupConfig(_Section):
    """Durable store synchronization settings.

    Attributes:
        local_dir: Local persistent directory to back up.
        mount_root: Root of the durable mount; pushes are skipped without it.
        remote_dir: Snapshot directory inside the durable mount.
        timestamp_file: Name of the sync timestamp file on both sides.
        interval: Seconds between periodic pushes.
        push_timeout: Wall-clock budget for one push.
        restore_timeout: Wall-clock budget for the boot restore.
        exclude: Glob patterns never copied in either direction.
    """

    local_dir: Path = Path("/root/.openclaw")
    mount_root: Path = Path("/data/moltbot")
    remote_dir: Path = Path("/data/moltbot/openclaw-backup")
    timestamp_file: str = ".last-sync"
    interval: float = Field(default=60.0, gt=0)
    push_timeout: float = Field(default=60.0, gt=0)
    restore_timeout: float = Field(default=30.0, gt=0)
    exclude: tuple[str, ...] = ("*.lock",)


class HealthConfig(_Section):
    """Health endpoint settings.

    Attributes:
        enabled: Serve the health endpoints alongside the supervisor.
        host: Bind address for the health server.
        port: Port for the health server.
        probe_timeout: Hard deadline for each individual probe.
        resource_probe: Include the memory usage probe.
    """

    enabled: bool = True
    host: str = "0.0.0.0"  # noqa: S104
    port: int = Field(default=8080, ge=1, le=65535)
    probe_timeout: float = Field(default=5.0, gt=0)
    resource_probe: bool = True


class ScheduleConfig(_Section):
    """Job registration settings.

    Attributes:
        readiness_attempts: Readiness probes before giving up.
        readiness_interval: Seconds between readiness probes.
        restore_script: Script that re-creates persisted jobs, if present.
        restore_timeout: Seconds the restore script may run before it is
            abandoned.
        study_job_name: Name of the recurring study job.
        study_cron: Cron expression for the study job.
    """

    readiness_attempts: int = Field(default=30, ge=1)
    readiness_interval: float = Field(default=2.0, ge=0)
    restore_script: Path = Path("/root/clawd/clawd-memory/scripts/restore-crons.js")
    restore_timeout: float = Field(default=60.0, gt=0)
    study_job_name: str = "auto-study"
    study_cron: str = "0 */6 * * *"


class StudyConfig(_Section):
    """Study session settings.

    Attributes:
        topics_file: Synchronized topics file; overrides the packaged default.
        state_file: Local rotation state file.
        results_per_query: Search results requested per query.
        fetch_content: Fetch page text for the top results.
        fetch_limit: How many results per query get their page fetched.
        max_content_chars: Truncation limit for fetched page text.
        query_timeout: Wall-clock budget for one query including fetches.
        report_timezone: Timezone for the study report header.
    """

    topics_file: Path = Path("/root/clawd/clawd-memory/study-topics.json")
    state_file: Path = Path("/root/clawd/.study-state.json")
    results_per_query: int = Field(default=5, ge=1)
    fetch_content: bool = True
    fetch_limit: int = Field(default=3, ge=0)
    max_content_chars: int = Field(default=2000, ge=0)
    query_timeout: float = Field(default=30.0, gt=0)
    report_timezone: str = "Asia/Seoul"


class Config(_Section):
    """Validated gatewarden configuration."""

    logging: LoggingConfig = LoggingConfig()
    gateway: GatewayConfig = GatewayConfig()
    supervisor: SupervisorConfig = SupervisorConfig()
    backup: BackupConfig = BackupConfig()
    health: HealthConfig = HealthConfig()
    schedule: ScheduleConfig = ScheduleConfig()
    study: StudyConfig = StudyConfig()

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        *,
        source: str | None = None,
    ) -> Self:
        """Validate a configuration dictionary layered over the defaults.

        Args:
            data: Raw configuration values (partial is fine).
            source: Where the values came from, for error messages.

        Returns:
            The validated configuration.

        Raises:
            ConfigValidationError: If any value fails validation.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            first = e.errors()[0]
            key = ".".join(str(part) for part in first["loc"])
            msg = f"Invalid configuration value for '{key}': {first['msg']}"
            raise ConfigValidationError(
                msg,
                key=key,
                value=first.get("input"),
                expected=first["type"],
                source=source,
            ) from e
