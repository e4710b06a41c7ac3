"""Domain services (pure logic, no infrastructure dependencies)."""

from .backoff_policy import BackoffPolicy, backoff_interval

__all__ = [
    "BackoffPolicy",
    "backoff_interval",
]
