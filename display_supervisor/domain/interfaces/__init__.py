"""Domain interfaces for the display supervisor.

This module defines the contracts that infrastructure implementations
must fulfill. Using these interfaces enables:
- Dependency Inversion: Recovery policy doesn't depend on the platform bridge
- Testability: A fake gateway can simulate drops, stale links and failures
- Flexibility: Swap platform gateways without touching the state machine
"""

from .i_connection_gateway import IConnectionGateway
from .i_connection_supervisor import IConnectionSupervisor, StateListener
from .i_modifier_key_releaser import IModifierKeyReleaser

__all__ = [
    "IConnectionGateway",
    "IConnectionSupervisor",
    "IModifierKeyReleaser",
    "StateListener",
]
