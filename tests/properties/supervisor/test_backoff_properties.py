import logging

import anyio
import pytest
import structlog
from hypothesis import given, strategies as st

from gatewarden.config import SupervisorConfig
from gatewarden.exceptions import RetriesExhaustedError
from gatewarden.supervisor import ExponentialBackoff, ProcessSupervisor
from gatewarden.utils import FakeClock

QUIET_LOGGER = structlog.wrap_logger(
    structlog.ReturnLogger(),
    wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
)

bounds = st.integers(min_value=0, max_value=600).flatmap(
    lambda base: st.tuples(st.just(base), st.integers(min_value=base, max_value=3600))
)


@given(bounds=bounds, steps=st.integers(min_value=0, max_value=64))
def test_advance_is_capped_and_monotone(bounds: tuple[int, int], steps: int) -> None:
    base, cap = bounds
    backoff = ExponentialBackoff(base=base, max_delay=cap)
    current = base

    for _ in range(steps):
        following = backoff.advance(current)
        assert current <= following <= cap
        current = following


@given(bounds=bounds, steps=st.integers(min_value=0, max_value=64))
def test_advance_matches_closed_form(bounds: tuple[int, int], steps: int) -> None:
    base, cap = bounds
    backoff = ExponentialBackoff(base=base, max_delay=cap)
    current = base

    for _ in range(steps):
        current = backoff.advance(current)

    assert current == min(base * 2**steps, cap)


class _Launcher:
    def __init__(self, clock: FakeClock, runtimes: list[int]) -> None:
        self._clock = clock
        self._runtimes = runtimes

    @property
    def pid(self) -> int | None:
        return None

    async def run(self, command: object) -> int:
        self._clock.advance(self._runtimes.pop(0))
        return 1


@given(
    max_retries=st.integers(min_value=1, max_value=6),
    runtimes=st.lists(st.sampled_from([0, 5, 59, 60, 300]), max_size=30),
)
def test_gives_up_after_exactly_max_retries_short_runs(
    max_retries: int, runtimes: list[int]
) -> None:
    config = SupervisorConfig(max_retries=max_retries)
    # Pad with short runs so the loop always ends
    script = [*runtimes, *([1] * max_retries)]
    clock = FakeClock()
    supervisor = ProcessSupervisor(_Launcher(clock, script), config, QUIET_LOGGER, clock=clock)

    async def main() -> None:
        with pytest.raises(RetriesExhaustedError):
            await supervisor.run(("gw",))

    anyio.run(main)

    runs = supervisor.runs
    trailing_short = 0
    for run in reversed(runs):
        if run.runtime_seconds >= config.success_threshold_seconds:
            break
        trailing_short += 1
    assert trailing_short == max_retries
    assert all(delay <= config.max_backoff_seconds for delay in clock.sleeps)
    assert len(clock.sleeps) == len(runs) - 1
