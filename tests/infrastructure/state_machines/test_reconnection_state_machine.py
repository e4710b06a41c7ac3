"""Tests for reconnection state machine."""

import asyncio
from unittest.mock import Mock

import pytest

from display_supervisor.domain.value_objects import ReconnectionState
from display_supervisor.infrastructure.state_machines import (
    ReconnectionEvent,
    ReconnectionStateMachine,
)


@pytest.fixture
def sm():
    return ReconnectionStateMachine(max_attempts=3)


class TestReconnectionStateMachine:
    """Test reconnection state machine transitions."""

    def test_initial_state_is_idle(self, sm):
        """Test state machine starts in IDLE."""
        assert sm.state == ReconnectionState.idle()
        assert sm.previous_state is None

    def test_drop_detected_starts_retrying(self, sm):
        """Test IDLE -> RETRYING(1) transition."""
        assert sm.transition(ReconnectionEvent.DROP_DETECTED)
        assert sm.state == ReconnectionState.retrying(1)

    def test_retry_increments_attempt(self, sm):
        """Test RETRYING(n) -> RETRYING(n+1) transition."""
        sm.transition(ReconnectionEvent.DROP_DETECTED)
        assert sm.transition(ReconnectionEvent.RETRY)
        assert sm.state == ReconnectionState.retrying(2)

    def test_retry_beyond_max_attempts_rejected(self, sm):
        """Test RETRYING cannot exceed max_attempts."""
        sm.transition(ReconnectionEvent.DROP_DETECTED)
        sm.transition(ReconnectionEvent.RETRY)
        sm.transition(ReconnectionEvent.RETRY)
        assert sm.state == ReconnectionState.retrying(3)

        assert not sm.transition(ReconnectionEvent.RETRY)
        assert sm.state == ReconnectionState.retrying(3)

    @pytest.mark.parametrize(
        "event", [ReconnectionEvent.RECONNECTED, ReconnectionEvent.RECOVERED]
    )
    def test_retrying_back_to_idle(self, sm, event):
        """Test RETRYING -> IDLE on reconnect or self-recovery."""
        sm.transition(ReconnectionEvent.DROP_DETECTED)
        assert sm.transition(event)
        assert sm.state.is_idle

    def test_gave_up_reaches_failed(self, sm):
        """Test RETRYING -> FAILED transition."""
        sm.transition(ReconnectionEvent.DROP_DETECTED)
        assert sm.transition(ReconnectionEvent.GAVE_UP)
        assert sm.state.is_failed

    def test_manual_retry_only_from_failed(self, sm):
        """Test MANUAL_RETRY is valid only after giving up."""
        assert not sm.transition(ReconnectionEvent.MANUAL_RETRY)

        sm.transition(ReconnectionEvent.DROP_DETECTED)
        sm.transition(ReconnectionEvent.GAVE_UP)
        assert sm.transition(ReconnectionEvent.MANUAL_RETRY)
        assert sm.state.is_idle

    def test_invalid_transition_returns_false(self, sm):
        """Test invalid transitions return False and keep state."""
        assert not sm.transition(ReconnectionEvent.RETRY)
        assert not sm.transition(ReconnectionEvent.GAVE_UP)
        assert not sm.transition(ReconnectionEvent.RECONNECTED)
        assert sm.state.is_idle

    def test_failed_ignores_drop(self, sm):
        """Test FAILED is terminal for automatic events."""
        sm.transition(ReconnectionEvent.DROP_DETECTED)
        sm.transition(ReconnectionEvent.GAVE_UP)
        assert not sm.transition(ReconnectionEvent.DROP_DETECTED)
        assert sm.state.is_failed

    def test_reset_from_any_state(self, sm):
        """Test RESET always returns to IDLE."""
        sm.transition(ReconnectionEvent.DROP_DETECTED)
        sm.transition(ReconnectionEvent.GAVE_UP)
        assert sm.transition(ReconnectionEvent.RESET)
        assert sm.state.is_idle
        assert sm.transition(ReconnectionEvent.RESET)
        assert sm.state.is_idle

    def test_invalid_max_attempts(self):
        with pytest.raises(ValueError):
            ReconnectionStateMachine(max_attempts=0)

    def test_reset_method_is_silent(self, sm):
        """Test reset() returns to IDLE without notifying."""
        listener = Mock()
        sm.subscribe(listener)
        sm.transition(ReconnectionEvent.DROP_DETECTED)
        listener.reset_mock()

        sm.reset()

        assert sm.state.is_idle
        listener.assert_not_called()


class TestListener:
    """Test listener delivery."""

    def test_listener_receives_every_transition_in_order(self, sm):
        """Test state changes are delivered in the order they happen."""
        states = []
        sm.subscribe(states.append)

        sm.transition(ReconnectionEvent.DROP_DETECTED)
        sm.transition(ReconnectionEvent.RETRY)
        sm.transition(ReconnectionEvent.GAVE_UP)
        sm.transition(ReconnectionEvent.MANUAL_RETRY)

        assert states == [
            ReconnectionState.retrying(1),
            ReconnectionState.retrying(2),
            ReconnectionState.failed(),
            ReconnectionState.idle(),
        ]

    def test_idle_republication_is_delivered(self, sm):
        """Test IDLE -> IDLE is published, not suppressed."""
        states = []
        sm.subscribe(states.append)

        sm.transition(ReconnectionEvent.RESET)
        sm.transition(ReconnectionEvent.RECOVERED)

        assert states == [ReconnectionState.idle(), ReconnectionState.idle()]

    def test_rejected_transition_not_delivered(self, sm):
        listener = Mock()
        sm.subscribe(listener)
        sm.transition(ReconnectionEvent.GAVE_UP)
        listener.assert_not_called()

    def test_single_listener_replaced(self, sm):
        """Test a new subscription replaces the previous listener."""
        first, second = Mock(), Mock()
        sm.subscribe(first)
        sm.subscribe(second)

        sm.transition(ReconnectionEvent.DROP_DETECTED)

        first.assert_not_called()
        second.assert_called_once_with(ReconnectionState.retrying(1))

    def test_unsubscribe(self, sm):
        listener = Mock()
        unsubscribe = sm.subscribe(listener)
        unsubscribe()

        sm.transition(ReconnectionEvent.DROP_DETECTED)

        listener.assert_not_called()

    def test_stale_unsubscribe_keeps_new_listener(self, sm):
        """Test unsubscribing a replaced listener leaves the new one."""
        old_unsubscribe = sm.subscribe(Mock())
        current = Mock()
        sm.subscribe(current)

        old_unsubscribe()
        sm.transition(ReconnectionEvent.DROP_DETECTED)

        current.assert_called_once()

    def test_listener_error_does_not_break_transition(self, sm):
        """Test listener exceptions are logged and swallowed."""
        sm.subscribe(Mock(side_effect=RuntimeError("UI gone")))

        assert sm.transition(ReconnectionEvent.DROP_DETECTED)
        assert sm.state == ReconnectionState.retrying(1)

    @pytest.mark.asyncio
    async def test_callback_loop_same_loop_is_synchronous(self):
        """Test listener runs inline when already on the callback loop."""
        sm = ReconnectionStateMachine(3, callback_loop=asyncio.get_running_loop())
        states = []
        sm.subscribe(states.append)

        sm.transition(ReconnectionEvent.DROP_DETECTED)

        assert states == [ReconnectionState.retrying(1)]

    @pytest.mark.asyncio
    async def test_callback_loop_from_other_thread(self):
        """Test transitions from another thread are handed to the loop in order."""
        loop = asyncio.get_running_loop()
        sm = ReconnectionStateMachine(3, callback_loop=loop)
        states = []
        sm.subscribe(states.append)

        def drive():
            sm.transition(ReconnectionEvent.DROP_DETECTED)
            sm.transition(ReconnectionEvent.RETRY)
            sm.transition(ReconnectionEvent.RECONNECTED)

        await loop.run_in_executor(None, drive)
        await asyncio.sleep(0)

        assert states == [
            ReconnectionState.retrying(1),
            ReconnectionState.retrying(2),
            ReconnectionState.idle(),
        ]


class TestRepresentation:
    def test_str(self, sm):
        assert str(sm) == "ReconnectionStateMachine(state=idle)"
