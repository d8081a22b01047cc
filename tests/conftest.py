"""Shared test fixtures for gatewarden tests."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import structlog
from rich.console import Console
from structlog.testing import CapturingLogger
from structlog.typing import FilteringBoundLogger

from gatewarden.config import BackupConfig
from gatewarden.utils import FakeClock


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@dataclass(frozen=True, slots=True)
class LogCapture:
    """A real FilteringBoundLogger whose output is recorded in memory."""

    logger: FilteringBoundLogger
    capture: CapturingLogger

    def events(self, level: str | None = None) -> list[str]:
        return [
            str(call.kwargs["event"])
            for call in self.capture.calls
            if level is None or call.method_name == level
        ]

    def find(self, event: str) -> dict[str, Any]:
        for call in self.capture.calls:
            if call.kwargs.get("event") == event:
                return dict(call.kwargs)
        msg = f"No log event {event!r}; got {self.events()}"
        raise AssertionError(msg)


@pytest.fixture
def log_capture() -> LogCapture:
    capture = CapturingLogger()
    logger: FilteringBoundLogger = structlog.wrap_logger(
        capture,
        processors=[],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
    )
    return LogCapture(logger=logger, capture=capture)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@dataclass(frozen=True, slots=True)
class BackupDirs:
    """Local state and durable mount directories under tmp_path."""

    local: Path
    mount: Path
    remote: Path

    def config(self, **overrides: object) -> BackupConfig:
        values: dict[str, object] = {
            "local_dir": self.local,
            "mount_root": self.mount,
            "remote_dir": self.remote,
        }
        values.update(overrides)
        return BackupConfig.model_validate(values)


@pytest.fixture
def backup_dirs(tmp_path: Path) -> BackupDirs:
    local = tmp_path / "local"
    mount = tmp_path / "mount"
    local.mkdir()
    mount.mkdir()
    return BackupDirs(local=local, mount=mount, remote=mount / "backup")


@pytest.fixture
def console() -> Console:
    return Console(
        width=100,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
