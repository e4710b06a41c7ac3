"""Service for describing the display connection status."""

from typing import Any, Dict

from ...domain.interfaces import IConnectionSupervisor


class StatusService:
    """Service for turning supervisor state into user-facing text.

    This service centralizes the wording used by the status query and
    the menu headline, so every control surface reports the same thing.
    """

    def __init__(self, supervisor: IConnectionSupervisor, max_attempts: int):
        """Initialize status service.

        Args:
            supervisor: Connection supervisor to describe
            max_attempts: Give-up limit shown in the retrying headline
        """
        self._supervisor = supervisor
        self._max_attempts = max_attempts

    def describe(self) -> str:
        """Describe the connection (answer to a status query).

        Returns:
            "Connected to X", "X is available but not connected" or
            "No device found nearby"
        """
        name = self._supervisor.connected_device_name
        if name is not None:
            return f"Connected to {name}"

        device = self._supervisor.first_available_device
        if device is not None:
            return f"{device.display_name} is available but not connected"

        return "No device found nearby"

    def headline(self) -> str:
        """Headline that also reflects automatic recovery."""
        if self._supervisor.connected_device_name is not None:
            return self.describe()

        state = self._supervisor.reconnection_state
        if state.is_retrying:
            return f"Reconnecting... (attempt {state.attempt}/{self._max_attempts})"
        if state.is_failed:
            return "Reconnection failed"

        device = self._supervisor.first_available_device
        if device is not None:
            return f"{device.display_name} available"
        return "No device found"

    def snapshot(self) -> Dict[str, Any]:
        """Get a diagnostics snapshot.

        Returns:
            Dictionary with connection and recovery details
        """
        state = self._supervisor.reconnection_state
        device = self._supervisor.first_available_device
        return {
            "connected": self._supervisor.is_connected,
            "connected_device": self._supervisor.connected_device_name,
            "available_device": device.display_name if device else None,
            "reconnection_state": state.status.value,
            "attempt": state.attempt,
            "max_attempts": self._max_attempts,
            "summary": self.describe(),
        }
