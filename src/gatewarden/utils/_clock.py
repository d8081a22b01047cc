"""Injectable clocks for timed waits.

Every sleep and elapsed-time measurement in gatewarden goes through a
Clock, so tests can simulate restart backoff, readiness polling, and
periodic pushes without real delays.
"""

import time
from typing import Protocol, final, runtime_checkable

import anyio
import anyio.lowlevel
import pendulum


@runtime_checkable
class Clock(Protocol):
    """Protocol for time sources used by long-running loops."""

    def monotonic(self) -> float:
        """Return a monotonic reading in seconds."""
        ...

    def now(self) -> pendulum.DateTime:
        """Return the current wall-clock time in UTC."""
        ...

    async def sleep(self, seconds: float) -> None:
        """Suspend for the given number of seconds.

        Must be cancellable by the surrounding cancel scope.
        """
        ...


@final
class SystemClock:
    """Clock backed by the real time and anyio.sleep."""

    __slots__ = ()

    def monotonic(self) -> float:
        return time.monotonic()

    def now(self) -> pendulum.DateTime:
        return pendulum.now("UTC")

    async def sleep(self, seconds: float) -> None:
        await anyio.sleep(seconds)


@final
class FakeClock:
    """Deterministic clock for tests.

    Sleeping advances the clock instantly and records the requested
    duration. advance() moves time forward without recording a sleep,
    which is how fake processes simulate their runtime.

    Attributes:
        sleeps: Every duration passed to sleep(), in order.
    """

    __slots__ = ("_elapsed", "_start", "sleeps")

    def __init__(self, start: pendulum.DateTime | None = None) -> None:
        self._start: pendulum.DateTime = start or pendulum.datetime(2026, 1, 1, tz="UTC")
        self._elapsed: float = 0.0
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self._elapsed

    def now(self) -> pendulum.DateTime:
        return self._start.add(microseconds=round(self._elapsed * 1_000_000))

    def advance(self, seconds: float) -> None:
        self._elapsed += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self._elapsed += seconds
        # Yield so cancellation and other tasks still get a chance to run
        await anyio.lowlevel.checkpoint()
