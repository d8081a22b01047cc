"""Unit tests for logging utilities."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem


class TestCreateLoggerInternal:
    def test_creates_log_directory_if_missing(self, fs: FakeFilesystem) -> None:
        from gatewarden.utils._logging import _create_logger

        log_path = Path("/logs/gatewarden.log")
        assert not log_path.parent.exists()

        _ = _create_logger(str(log_path))

        assert log_path.parent.exists()

    def test_default_format_is_json(self, fs: FakeFilesystem) -> None:
        from gatewarden.utils._logging import _create_logger

        logger = _create_logger("/logs/gatewarden.log")

        logger.info("gateway_starting", attempt=1)

        log_content = Path("/logs/gatewarden.log").read_text()
        assert '"event": "gateway_starting"' in log_content
        assert '"attempt": 1' in log_content
        assert '"level": "info"' in log_content

    def test_text_format(self, fs: FakeFilesystem) -> None:
        from gatewarden.utils._logging import _create_logger

        logger = _create_logger("/logs/gatewarden.log", log_format="text")

        logger.info("backup_pushed", timestamp="t")

        log_content = Path("/logs/gatewarden.log").read_text()
        assert "backup_pushed" in log_content
        assert "timestamp=t" in log_content

    def test_level_filters_lower_events(self, fs: FakeFilesystem) -> None:
        from gatewarden.utils._logging import _create_logger

        logger = _create_logger("/logs/gatewarden.log", log_level=logging.WARNING)

        logger.info("quiet")
        logger.warning("loud")

        log_content = Path("/logs/gatewarden.log").read_text()
        assert "quiet" not in log_content
        assert "loud" in log_content

    def test_rotation_uses_rotating_handler(self, fs: FakeFilesystem) -> None:
        from gatewarden.utils._logging import _create_logger

        logger = _create_logger("/logs/rotating.log", max_bytes=1024, backup_count=2)

        raw = logger._logger  # pyright: ignore[reportAttributeAccessIssue, reportUnknownMemberType]
        assert isinstance(raw, logging.Logger)
        assert any(isinstance(h, RotatingFileHandler) for h in raw.handlers)


class TestLogLevelFromString:
    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
            ("nonsense", logging.INFO),
        ],
    )
    def test_maps_names(
        self, level: str, expected: int, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from gatewarden.utils._logging import _log_level_from_string

        monkeypatch.delenv("GATEWARDEN_DEBUG", raising=False)

        assert _log_level_from_string(level) == expected

    def test_debug_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from gatewarden.utils._logging import _log_level_from_string

        monkeypatch.setenv("GATEWARDEN_DEBUG", "1")

        assert _log_level_from_string("error") == logging.DEBUG
        assert _log_level_from_string("error", respect_env=False) == logging.ERROR


class TestCreateLogger:
    def test_binds_command(self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch) -> None:
        from gatewarden.utils import create_logger

        monkeypatch.delenv("GATEWARDEN_DEBUG", raising=False)
        logger = create_logger(log_file="/logs/cmd.log", command="start")

        logger.info("gatewarden_started")

        log_content = Path("/logs/cmd.log").read_text()
        assert '"command": "start"' in log_content

    def test_stderr_by_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        from gatewarden.utils import create_logger

        logger = create_logger(level="info")

        logger.info("health_check_failed", gateway="not_running")

        captured = capsys.readouterr()
        assert "health_check_failed" in captured.err
        assert captured.out == ""
