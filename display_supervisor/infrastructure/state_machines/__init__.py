"""State machines for managing recovery state transitions."""

from .reconnection_state_machine import (
    ReconnectionStateMachine,
    ReconnectionEvent,
)

__all__ = [
    "ReconnectionStateMachine",
    "ReconnectionEvent",
]
