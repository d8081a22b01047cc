"""Exponential backoff calculator for gateway restarts.

Delays are whole seconds and deterministic: the supervisor is the only
process restarting the gateway, so there is no herd to spread with jitter.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ExponentialBackoff:
    """Doubling backoff with an upper bound.

    Starting from `base`, each wait is followed by
        next = min(current * multiplier, max_delay)
    which gives 5, 10, 20, 40, 80, 120, 120, ... with the defaults.

    Attributes:
        base: Delay in seconds before the first retry.
        max_delay: Maximum delay in seconds.
        multiplier: Factor applied after each wait.
    """

    base: int = 5
    max_delay: int = 120
    multiplier: int = 2

    def advance(self, current: int) -> int:
        """Return the delay that follows `current`.

        Args:
            current: The delay that was just waited.

        Returns:
            The next delay, capped at max_delay.
        """
        return min(current * self.multiplier, self.max_delay)
