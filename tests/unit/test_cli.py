from pathlib import Path
from typing import cast

import orjson
import pytest
from cyclopts import App
from pytest_mock import MockerFixture
from rich.console import Console

from gatewarden.cli import CLIContext, create_app
from gatewarden.cli._commands import register_commands


def write_config(tmp_path: Path, *, mounted: bool = True) -> Path:
    local = tmp_path / "local"
    local.mkdir()
    (local / "openclaw.json").write_text("{}")
    mount = tmp_path / "mount"
    if mounted:
        mount.mkdir()

    path = tmp_path / "gatewarden.toml"
    path.write_text(
        f"""
[backup]
local_dir = "{local}"
mount_root = "{mount}"
remote_dir = "{mount / "backup"}"

[health]
probe_timeout = 1
resource_probe = false

[study]
topics_file = "{tmp_path / "missing-topics.json"}"
state_file = "{tmp_path / "state.json"}"
"""
    )
    return path


def run_cli(console: Console, *tokens: str) -> None:
    app = create_app(console=console, error_console=console, exit_on_error=False)
    app.meta(list(tokens))


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GATEWARDEN_CONFIG", raising=False)
    monkeypatch.delenv("GATEWARDEN_DEBUG", raising=False)


class TestCommandRegistration:
    def test_register_commands_registers_subcommands(self, mocker: MockerFixture) -> None:
        mock_app = mocker.MagicMock(spec=App)
        register_commands(mock_app)

        assert cast("int", mock_app.command.call_count) == 4  # pyright: ignore[reportAny]


class TestGlobalOptions:
    def test_missing_config_file_exits_with_config_error(
        self, tmp_path: Path, console: Console
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run_cli(console, "--config", str(tmp_path / "nope.toml"), "backup", "push")

        assert exc_info.value.code == 2

    def test_context_is_reset_after_command(self, tmp_path: Path, console: Console) -> None:
        run_cli(console, "--config", str(write_config(tmp_path)), "backup", "restore")

        assert CLIContext.get_current().config_path is None


class TestBackupCommands:
    def test_push(
        self, tmp_path: Path, console: Console, capsys: pytest.CaptureFixture[str]
    ) -> None:
        run_cli(console, "--config", str(write_config(tmp_path)), "backup", "push")

        assert "push: pushed" in capsys.readouterr().err
        assert (tmp_path / "mount" / "backup" / "openclaw.json").exists()

    def test_push_without_mount_fails(self, tmp_path: Path, console: Console) -> None:
        with pytest.raises(SystemExit) as exc_info:
            run_cli(
                console, "--config", str(write_config(tmp_path, mounted=False)), "backup", "push"
            )

        assert exc_info.value.code == 1

    def test_restore_without_backup_is_not_an_error(
        self, tmp_path: Path, console: Console, capsys: pytest.CaptureFixture[str]
    ) -> None:
        run_cli(console, "--config", str(write_config(tmp_path)), "backup", "restore")

        assert "restore: no_backup" in capsys.readouterr().err


class TestStudyCommand:
    def test_requires_search_key(
        self, tmp_path: Path, console: Console, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("SERPER_API_KEY", raising=False)

        with pytest.raises(SystemExit) as exc_info:
            run_cli(console, "--config", str(write_config(tmp_path)), "study")

        assert exc_info.value.code == 2

    def test_unknown_topic_exits_not_found(
        self,
        tmp_path: Path,
        console: Console,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("SERPER_API_KEY", "test-key")

        with pytest.raises(SystemExit) as exc_info:
            config_path = str(write_config(tmp_path))
            run_cli(console, "--config", config_path, "study", "--topic", "gardening")

        assert exc_info.value.code == 3
        assert "gardening" in capsys.readouterr().err
        assert not (tmp_path / "state.json").exists()


class TestHealthCommand:
    def test_no_gateway_prints_report_and_fails(
        self,
        tmp_path: Path,
        console: Console,
        mocker: MockerFixture,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        _ = mocker.patch("gatewarden.cli._commands._health.find_gateway_pid", return_value=None)

        with pytest.raises(SystemExit) as exc_info:
            run_cli(console, "--config", str(write_config(tmp_path)), "health")

        assert exc_info.value.code == 1
        report = orjson.loads(capsys.readouterr().out)
        assert report["healthy"] is False
        assert report["checks"]["gateway"]["status"] == "not_running"
        assert report["checks"]["storage"]["status"] == "mounted"
