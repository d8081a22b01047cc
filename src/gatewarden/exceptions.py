"""gatewarden exceptions."""

from pathlib import Path
from typing import Any


class GatewardenError(Exception):
    """Base exception for gatewarden errors."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(GatewardenError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


class TopicsNotConfiguredError(ConfigError):
    """Raised when no usable topic list is available.

    Attributes:
        path: The topics file that was missing, empty, or malformed.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and topics file context.

        Args:
            message: Human-readable error message.
            path: The topics file that was consulted, if any.
        """
        super().__init__(message)
        self.path: Path | None = path


class TopicNotFoundError(ConfigError, KeyError):
    """Raised when an explicitly requested topic is not configured.

    Attributes:
        topic_name: The name that was requested.
        available: Names of the configured topics.
    """

    def __init__(
        self,
        message: str,
        *,
        topic_name: str,
        available: tuple[str, ...] = (),
    ) -> None:
        """Initialize with error message and topic context.

        Args:
            message: Human-readable error message.
            topic_name: The name that was requested.
            available: Names of the configured topics.
        """
        super().__init__(message)
        self.topic_name: str = topic_name
        self.available: tuple[str, ...] = available

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0]) if self.args else ""


# =============================================================================
# Supervisor Exceptions
# =============================================================================


class SupervisorError(GatewardenError):
    """Base exception for supervisor errors."""


class ProcessStartError(SupervisorError):
    """Raised when the managed process cannot be spawned.

    Attributes:
        command: The command that failed to start.
        cause: The underlying exception.
    """

    def __init__(
        self,
        message: str,
        *,
        command: tuple[str, ...] = (),
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and launch context.

        Args:
            message: Human-readable error message.
            command: The command that failed to start.
            cause: The underlying exception.
        """
        super().__init__(message)
        self.command: tuple[str, ...] = command
        self.cause: Exception | None = cause


class RetriesExhaustedError(SupervisorError):
    """Raised when the restart budget is spent.

    The container is expected to exit and be restarted by its own
    outer orchestrator.

    Attributes:
        attempts: Number of launches performed.
        last_exit_code: Exit code of the final run.
    """

    def __init__(
        self,
        message: str,
        *,
        attempts: int,
        last_exit_code: int | None = None,
    ) -> None:
        """Initialize with error message and retry context.

        Args:
            message: Human-readable error message.
            attempts: Number of launches performed.
            last_exit_code: Exit code of the final run.
        """
        super().__init__(message)
        self.attempts: int = attempts
        self.last_exit_code: int | None = last_exit_code


# =============================================================================
# Synchronization Exceptions
# =============================================================================


class SyncError(GatewardenError):
    """Raised inside a copy operation; converted to a SyncResult by callers.

    Attributes:
        operation: "push" or "restore".
        cause: The underlying exception.
    """

    def __init__(
        self,
        message: str,
        *,
        operation: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and sync context.

        Args:
            message: Human-readable error message.
            operation: "push" or "restore".
            cause: The underlying exception.
        """
        super().__init__(message)
        self.operation: str = operation
        self.cause: Exception | None = cause


# =============================================================================
# Research Exceptions
# =============================================================================


class SearchError(GatewardenError):
    """Raised by the search client; converted to an empty slot by the study session.

    Attributes:
        query: The query that failed.
        status_code: HTTP status returned by the search API, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        query: str,
        status_code: int | None = None,
    ) -> None:
        """Initialize with error message and search context.

        Args:
            message: Human-readable error message.
            query: The query that failed.
            status_code: HTTP status returned by the search API, if any.
        """
        super().__init__(message)
        self.query: str = query
        self.status_code: int | None = status_code
