"""Backoff policy for the connection watchdog.

The watchdog sleeps ``interval(consecutive_failures)`` between polls, so
the polling rate slows down while a drop episode drags on and returns to
the base rate as soon as the connection is healthy again.
"""

from dataclasses import dataclass

from ...const import DEFAULT_BASE_INTERVAL, DEFAULT_MAX_INTERVAL


def backoff_interval(
    failures: int,
    base: float = DEFAULT_BASE_INTERVAL,
    cap: float = DEFAULT_MAX_INTERVAL,
) -> float:
    """Return the wait before the next watchdog poll.

    ``min(base * 2**failures, cap)``

    Args:
        failures: Consecutive failed recovery attempts (>= 0)
        base: Interval with no failures
        cap: Upper bound of the interval

    Returns:
        Interval in seconds

    Raises:
        ValueError: If failures is negative

    Example:
        >>> backoff_interval(0)
        10.0
        >>> backoff_interval(3)
        80.0
        >>> backoff_interval(5)
        180.0
    """
    if failures < 0:
        raise ValueError(f"Failure count cannot be negative: {failures}")

    try:
        interval = base * (2**failures)
    except OverflowError:
        return float(cap)
    return float(min(interval, cap))


@dataclass(frozen=True)
class BackoffPolicy:
    """Backoff parameters bundled for injection into the supervisor.

    Attributes:
        base: Interval with no failures (seconds)
        cap: Maximum interval (seconds)
    """

    base: float = DEFAULT_BASE_INTERVAL
    cap: float = DEFAULT_MAX_INTERVAL

    def __post_init__(self) -> None:
        if self.base <= 0:
            raise ValueError(f"Base interval must be positive: {self.base}")
        if self.cap < self.base:
            raise ValueError(
                f"Interval cap ({self.cap}) must not be below base ({self.base})"
            )

    def interval(self, failures: int) -> float:
        """Interval for the given failure count."""
        return backoff_interval(failures, self.base, self.cap)
