# pyright: reportExplicitAny=false
"""Unit tests for the shared CLI utilities module."""

from io import StringIO
from typing import Any

import pytest
from rich.console import Console

from gatewarden.cli._commands._shared import (
    ExitCode,
    exit_with_error,
    format_json,
    get_error_console,
)


class TestExitCode:
    def test_exit_code_values_are_unique(self) -> None:
        values = [code.value for code in ExitCode]
        assert len(values) == len(set(values))

    def test_exit_code_is_int_subclass(self) -> None:
        assert issubclass(ExitCode, int)
        assert ExitCode.SUCCESS == 0
        assert ExitCode.FAILURE == 1
        assert ExitCode.CONFIG_ERROR == 2
        assert ExitCode.NOT_FOUND == 3

    def test_exit_code_usable_with_system_exit(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            raise SystemExit(ExitCode.NOT_FOUND)
        assert exc_info.value.code == 3


class TestFormatJson:
    def test_format_empty_dict(self) -> None:
        assert format_json({}) == "{}"

    def test_format_nested_dict_is_indented(self) -> None:
        data: dict[str, Any] = {"checks": {"gateway": {"status": "healthy", "latencyMs": 3}}}
        result = format_json(data)
        assert '"status": "healthy"' in result
        assert '"latencyMs": 3' in result
        assert "\n" in result

    def test_format_with_unicode(self) -> None:
        result = format_json({"topic": "한국어 뉴스"})
        assert "한국어 뉴스" in result

    def test_format_without_indent(self) -> None:
        result = format_json({"ok": False, "status": "not_running"}, indent=False)
        assert result == '{"ok":false,"status":"not_running"}'


class TestGetErrorConsole:
    def test_returns_console_with_stderr(self) -> None:
        console = get_error_console()
        assert isinstance(console, Console)
        assert console.stderr is True


class TestExitWithError:
    def test_prints_error_message(self) -> None:
        string_io = StringIO()
        console = Console(file=string_io, force_terminal=False)

        with pytest.raises(SystemExit):
            exit_with_error("SERPER_API_KEY is not set", console=console)

        output = string_io.getvalue()
        assert "Error:" in output
        assert "SERPER_API_KEY is not set" in output

    def test_raises_system_exit_with_code(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            exit_with_error("Topic not found", ExitCode.NOT_FOUND, console=Console(file=StringIO()))
        assert exc_info.value.code == ExitCode.NOT_FOUND

    def test_defaults_to_failure(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            exit_with_error("Generic error", console=Console(file=StringIO()))
        assert exc_info.value.code == ExitCode.FAILURE
