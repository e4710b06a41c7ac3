"""IConnectionSupervisor interface for display connection lifecycle."""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..entities import Device
from ..value_objects import ReconnectionState

StateListener = Callable[[ReconnectionState], None]


class IConnectionSupervisor(ABC):
    """Interface for supervising the external display connection.

    The supervisor adds connection policy on top of the gateway:
    - Device discovery wait and stale-link recovery on connect
    - Watchdog with automatic reconnection and exponential backoff
    - Bounded attempts with a terminal FAILED state
    - Published reconnection state

    Example:
        >>> supervisor = ConnectionSupervisor(gateway)
        >>> supervisor.subscribe(print)
        >>> await supervisor.connect()
        'Connected to Studio iPad'
    """

    @abstractmethod
    async def connect(self, device: Optional[Device] = None) -> str:
        """Connect to the device (or the first visible one).

        Returns:
            Human-readable summary

        Raises:
            NoDeviceAvailableError: If no device appears during discovery
            ApiUnavailableError: If the gateway cannot connect devices
            Exception: Gateway transport errors, unchanged
        """

    @abstractmethod
    async def disconnect(self, device: Optional[Device] = None) -> str:
        """Stop supervising and disconnect the device.

        Raises:
            NotConnectedError: If nothing is connected
        """

    @abstractmethod
    async def toggle(self) -> str:
        """Disconnect if connected, connect otherwise."""

    @abstractmethod
    def start_watchdog(self) -> None:
        """Start (or restart) the watchdog loop."""

    @abstractmethod
    def stop_watchdog(self) -> None:
        """Cancel the watchdog loop and reset recovery counters."""

    @abstractmethod
    async def retry_reconnection(self) -> Optional[str]:
        """Resume recovery after giving up."""

    @abstractmethod
    def reset_modifier_keys(self) -> None:
        """Release modifier keys that may be stuck after a transition."""

    @abstractmethod
    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register the single state listener.

        Returns:
            Callable that removes the listener
        """

    @property
    @abstractmethod
    def reconnection_state(self) -> ReconnectionState:
        """Current reconnection state."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """True if the gateway reports any connected device."""

    @property
    @abstractmethod
    def connected_device_name(self) -> Optional[str]:
        """Display name of the first connected device, if any."""

    @property
    @abstractmethod
    def first_available_device(self) -> Optional[Device]:
        """First visible device, if any."""
