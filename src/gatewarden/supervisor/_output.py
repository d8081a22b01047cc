"""Console rendering of gateway output and lifecycle events.

Gateway lines print as `[gateway:4242] listening on 18789` and supervisor
transitions as `[gateway] RESTARTING: in 10s (retry 2/10)`.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Literal, final

from rich.console import Console
from rich.style import Style
from rich.text import Text

from ._models import GatewayEvent, GatewayEventType

_LABEL = Style(color="blue", bold=True)
_DETAIL = Style(dim=True)

STREAM_STYLES: Mapping[str, Style] = MappingProxyType(
    {"stdout": Style(), "stderr": Style(color="red", dim=True)}
)

EVENT_STYLES: Mapping[GatewayEventType, Style] = MappingProxyType(
    {
        GatewayEventType.STARTED: Style(color="green", bold=True),
        GatewayEventType.EXITED: Style(color="yellow"),
        GatewayEventType.CRASHED: Style(color="red", bold=True),
        GatewayEventType.RESTARTING: Style(color="cyan"),
        GatewayEventType.STOPPED: Style(color="yellow"),
        GatewayEventType.GAVE_UP: Style(color="magenta", bold=True),
    }
)


def render_line(name: str, pid: int, stream: Literal["stdout", "stderr"], line: str) -> Text:
    return Text.assemble((f"[{name}:{pid}]", _LABEL), " ", (line, STREAM_STYLES[stream]))


def render_event(event: GatewayEvent) -> Text:
    """Render a lifecycle event as one console line.

    Args:
        event: The event to render.

    Returns:
        Label, upper-cased event type, then pid, exit code, and message
        when present.
    """
    style = EVENT_STYLES[event.event_type]
    parts: list[str | tuple[str, Style]] = [
        (f"[{event.name}]", _LABEL),
        " ",
        (event.event_type.value.upper(), style),
    ]
    if event.pid is not None:
        parts.append((f" pid={event.pid}", _DETAIL))
    if event.exit_code is not None:
        parts.append((f" exit={event.exit_code}", _DETAIL))
    if event.message:
        parts.append((f": {event.message}", style))
    return Text.assemble(*parts)


@final
class ConsoleOutputSink:
    """Prints gateway output and supervisor events to a rich console."""

    __slots__ = ("_console",)

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(highlight=False)

    async def write_line(
        self,
        name: str,
        pid: int,
        stream: Literal["stdout", "stderr"],
        line: str,
    ) -> None:
        self._console.print(render_line(name, pid, stream, line))

    async def write_event(self, event: GatewayEvent) -> None:
        self._console.print(render_event(event))
