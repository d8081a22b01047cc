import pytest
from rich.console import Console

from gatewarden.supervisor import (
    ConsoleOutputSink,
    GatewayEvent,
    GatewayEventType,
    OutputSink,
    render_event,
    render_line,
)


class TestRendering:
    def test_line_has_name_and_pid_prefix(self) -> None:
        text = render_line("gateway", 4242, "stdout", "listening on 18789")

        assert text.plain == "[gateway:4242] listening on 18789"

    def test_event_includes_optional_details(self) -> None:
        event = GatewayEvent(
            name="gateway",
            event_type=GatewayEventType.CRASHED,
            timestamp="2026-01-01T00:00:00Z",
            pid=4242,
            exit_code=1,
            message="boom",
        )

        assert render_event(event).plain == "[gateway] CRASHED pid=4242 exit=1: boom"

    def test_bare_event(self) -> None:
        event = GatewayEvent(
            name="gateway",
            event_type=GatewayEventType.GAVE_UP,
            timestamp="2026-01-01T00:00:00Z",
        )

        assert render_event(event).plain == "[gateway] GAVE_UP"

    def test_every_event_type_has_a_style(self) -> None:
        for event_type in GatewayEventType:
            event = GatewayEvent(name="gw", event_type=event_type, timestamp="t")
            assert render_event(event).plain.startswith("[gw] ")


@pytest.mark.anyio
class TestConsoleOutputSink:
    async def test_prints_lines_and_events(
        self, console: Console, capsys: pytest.CaptureFixture[str]
    ) -> None:
        sink = ConsoleOutputSink(console)

        await sink.write_line("gateway", 7, "stderr", "warning: slow")
        await sink.write_event(
            GatewayEvent(
                name="gateway",
                event_type=GatewayEventType.RESTARTING,
                timestamp="t",
                message="in 5s (retry 1/10)",
            )
        )

        output = capsys.readouterr().out
        assert "[gateway:7] warning: slow" in output
        assert "[gateway] RESTARTING: in 5s (retry 1/10)" in output


def test_console_sink_satisfies_protocol() -> None:
    assert isinstance(ConsoleOutputSink(), OutputSink)
