"""Value objects for the display supervisor domain.

Value objects are immutable domain primitives compared by value.
"""

from .reconnection_state import ReconnectionState, ReconnectionStatus

__all__ = [
    "ReconnectionState",
    "ReconnectionStatus",
]
