"""Run-once shutdown cleanup."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, final

import anyio

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


@final
class CleanupOnce:
    """Runs an async cleanup action at most once per process.

    Every exit path (normal loop exit, retry exhaustion, termination
    signal) calls run(); only the first call executes the action. The
    action is shielded from cancellation so a second signal cannot
    interrupt it halfway.
    """

    __slots__ = ("_action", "_logger", "_name", "_reason")

    def __init__(
        self,
        name: str,
        action: Callable[[], Awaitable[object]],
        logger: "FilteringBoundLogger",  # noqa: UP037
    ) -> None:
        self._name = name
        self._action = action
        self._logger = logger
        self._reason: str | None = None

    @property
    def triggered_by(self) -> str | None:
        """Return the reason passed to the call that ran the action."""
        return self._reason

    async def run(self, reason: str) -> bool:
        """Execute the action if it has not run yet.

        Args:
            reason: What triggered the cleanup (logged).

        Returns:
            True if this call ran the action.
        """
        if self._reason is not None:
            self._logger.debug("cleanup_already_ran", cleanup=self._name, reason=reason)
            return False

        self._reason = reason
        self._logger.info("cleanup_running", cleanup=self._name, reason=reason)
        with anyio.CancelScope(shield=True):
            await self._action()
        return True
