"""Reconnection state machine for explicit recovery state management."""

import asyncio
import logging
from enum import Enum, auto
from typing import Callable, Optional

from ...domain.interfaces import StateListener
from ...domain.value_objects import ReconnectionState, ReconnectionStatus

_LOGGER = logging.getLogger(__name__)


class ReconnectionEvent(Enum):
    """Events that trigger reconnection state transitions."""

    DROP_DETECTED = auto()
    RETRY = auto()
    RECONNECTED = auto()
    RECOVERED = auto()
    GAVE_UP = auto()
    MANUAL_RETRY = auto()
    RESET = auto()


class ReconnectionStateMachine:
    """State machine for the automatic recovery lifecycle.

    Valid transitions:
        IDLE -> RETRYING(1) (on DROP_DETECTED)
        RETRYING(n) -> RETRYING(n+1) (on RETRY)
        RETRYING -> IDLE (on RECONNECTED)
        RETRYING -> IDLE (on RECOVERED)
        IDLE -> IDLE (on RECOVERED)
        RETRYING -> FAILED (on GAVE_UP)
        FAILED -> IDLE (on MANUAL_RETRY)
        any -> IDLE (on RESET)

    Every accepted transition is delivered to the single listener, in
    order, including IDLE -> IDLE re-publications.

    Example:
        >>> sm = ReconnectionStateMachine(max_attempts=5)
        >>> sm.transition(ReconnectionEvent.DROP_DETECTED)
        True
        >>> str(sm.state)
        'retrying(1)'
        >>> sm.transition(ReconnectionEvent.MANUAL_RETRY)
        False
    """

    def __init__(
        self,
        max_attempts: int,
        callback_loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        """Initialize state machine in IDLE state.

        Args:
            max_attempts: Highest attempt number RETRYING may reach
            callback_loop: Loop the listener must run on. When omitted the
                listener is called directly by whoever triggers the
                transition.
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

        self._max_attempts = max_attempts
        self._callback_loop = callback_loop
        self._state = ReconnectionState.idle()
        self._previous_state: Optional[ReconnectionState] = None
        self._listener: Optional[StateListener] = None

        # (current_status, event) -> new_status
        self._transitions = {
            (
                ReconnectionStatus.IDLE,
                ReconnectionEvent.DROP_DETECTED,
            ): ReconnectionStatus.RETRYING,
            (
                ReconnectionStatus.RETRYING,
                ReconnectionEvent.RETRY,
            ): ReconnectionStatus.RETRYING,
            (
                ReconnectionStatus.RETRYING,
                ReconnectionEvent.RECONNECTED,
            ): ReconnectionStatus.IDLE,
            (
                ReconnectionStatus.RETRYING,
                ReconnectionEvent.RECOVERED,
            ): ReconnectionStatus.IDLE,
            (
                ReconnectionStatus.IDLE,
                ReconnectionEvent.RECOVERED,
            ): ReconnectionStatus.IDLE,
            (
                ReconnectionStatus.RETRYING,
                ReconnectionEvent.GAVE_UP,
            ): ReconnectionStatus.FAILED,
            (
                ReconnectionStatus.FAILED,
                ReconnectionEvent.MANUAL_RETRY,
            ): ReconnectionStatus.IDLE,
        }

    @property
    def state(self) -> ReconnectionState:
        """Get current state."""
        return self._state

    @property
    def previous_state(self) -> Optional[ReconnectionState]:
        """Get the state before the last transition."""
        return self._previous_state

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def transition(self, event: ReconnectionEvent) -> bool:
        """Attempt state transition.

        Args:
            event: Event triggering transition

        Returns:
            True if transition valid and executed, False otherwise
        """
        if event is ReconnectionEvent.RESET:
            self._change_state(ReconnectionState.idle(), event)
            return True

        key = (self._state.status, event)
        if key not in self._transitions:
            _LOGGER.debug(
                "Invalid transition: %s + %s",
                self._state,
                event.name,
            )
            return False

        new_status = self._transitions[key]
        if new_status is ReconnectionStatus.RETRYING:
            attempt = (
                self._state.attempt + 1 if self._state.is_retrying else 1
            )
            if attempt > self._max_attempts:
                _LOGGER.debug(
                    "Invalid transition: %s + %s exceeds %d attempts",
                    self._state,
                    event.name,
                    self._max_attempts,
                )
                return False
            new_state = ReconnectionState.retrying(attempt)
        elif new_status is ReconnectionStatus.FAILED:
            new_state = ReconnectionState.failed()
        else:
            new_state = ReconnectionState.idle()

        self._change_state(new_state, event)
        return True

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register the state listener, replacing any previous one.

        Args:
            listener: Called with the new ReconnectionState on every
                transition

        Returns:
            Callable that removes this listener (no-op if it was replaced)
        """
        self._listener = listener

        def _unsubscribe() -> None:
            if self._listener is listener:
                self._listener = None

        return _unsubscribe

    def reset(self) -> None:
        """Reset to IDLE without notifying the listener."""
        self._state = ReconnectionState.idle()
        self._previous_state = None

    def _change_state(self, new_state: ReconnectionState, event: ReconnectionEvent):
        """Change to new state and notify the listener.

        Args:
            new_state: State to transition to
            event: Event that triggered transition
        """
        self._previous_state = self._state
        self._state = new_state

        _LOGGER.debug(
            "Reconnection state: %s -> %s (event: %s)",
            self._previous_state,
            new_state,
            event.name,
        )

        listener = self._listener
        if listener is None:
            return

        if self._callback_loop is not None and not self._on_callback_loop():
            # call_soon_threadsafe is FIFO, so ordering is preserved
            self._callback_loop.call_soon_threadsafe(
                self._notify, listener, new_state
            )
        else:
            self._notify(listener, new_state)

    def _on_callback_loop(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._callback_loop
        except RuntimeError:
            return False

    @staticmethod
    def _notify(listener: StateListener, state: ReconnectionState) -> None:
        try:
            listener(state)
        except Exception as err:
            _LOGGER.error("Error in reconnection state listener: %s", err)

    def __str__(self) -> str:
        """String representation."""
        return f"ReconnectionStateMachine(state={self._state})"

    def __repr__(self) -> str:
        """Developer representation."""
        return (
            f"ReconnectionStateMachine(state={self._state!r}, "
            f"previous={self._previous_state!r})"
        )
