"""Test doubles for unit testing.

Test doubles are fake implementations of interfaces used for testing.
They're faster and more reliable than mocking, and they implement the
actual interface contracts.

Types of test doubles:
- Fake: Lightweight working implementation (e.g., a scriptable gateway)
- Spy: Records calls for verification
- Mock: Verifies interactions (use unittest.mock for this)

Example:
    >>> from tests.doubles import FakeGateway
    >>> gateway = FakeGateway([Device("ipad-1", "Studio iPad")])
    >>> gateway.fail_next_connect()
    >>> supervisor = ConnectionSupervisor(gateway)
"""

from .fake_gateway import FakeGateway, UnsupportedGateway
from .fake_modifier_releaser import RecordingModifierReleaser

__all__ = [
    "FakeGateway",
    "RecordingModifierReleaser",
    "UnsupportedGateway",
]
