"""ReconnectionState value object.

Represents the automatic recovery state published to the observer.
"""

from dataclasses import dataclass
from enum import Enum


class ReconnectionStatus(Enum):
    """Recovery status of the supervisor.

    State Transitions:
        IDLE → RETRYING(1) → RETRYING(2) ... → RETRYING(max)
        RETRYING(n) → IDLE (reconnected or recovered on its own)
        RETRYING(max) → FAILED (gave up, needs a manual retry)
        FAILED → IDLE (manual retry)
    """

    IDLE = "idle"
    RETRYING = "retrying"
    FAILED = "failed"


@dataclass(frozen=True)
class ReconnectionState:
    """Immutable snapshot of the recovery state.

    ``attempt`` is only meaningful while retrying; it is 0 otherwise.

    Example:
        >>> ReconnectionState.retrying(2)
        ReconnectionState(status=<ReconnectionStatus.RETRYING: 'retrying'>, attempt=2)
        >>> str(ReconnectionState.retrying(2))
        'retrying(2)'
    """

    status: ReconnectionStatus = ReconnectionStatus.IDLE
    attempt: int = 0

    def __post_init__(self) -> None:
        """Validate the attempt number against the status."""
        if self.status is ReconnectionStatus.RETRYING:
            if self.attempt < 1:
                raise ValueError(
                    f"Retrying state requires attempt >= 1, got {self.attempt}"
                )
        elif self.attempt != 0:
            raise ValueError(
                f"Attempt number only valid while retrying, got {self.attempt}"
            )

    @classmethod
    def idle(cls) -> "ReconnectionState":
        return cls(ReconnectionStatus.IDLE)

    @classmethod
    def retrying(cls, attempt: int) -> "ReconnectionState":
        return cls(ReconnectionStatus.RETRYING, attempt)

    @classmethod
    def failed(cls) -> "ReconnectionState":
        return cls(ReconnectionStatus.FAILED)

    @property
    def is_idle(self) -> bool:
        return self.status is ReconnectionStatus.IDLE

    @property
    def is_retrying(self) -> bool:
        return self.status is ReconnectionStatus.RETRYING

    @property
    def is_failed(self) -> bool:
        return self.status is ReconnectionStatus.FAILED

    def __str__(self) -> str:
        if self.is_retrying:
            return f"{self.status.value}({self.attempt})"
        return self.status.value
