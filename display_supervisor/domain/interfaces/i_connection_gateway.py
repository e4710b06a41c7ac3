"""IConnectionGateway interface for the platform display bridge."""

from abc import ABC, abstractmethod
from typing import Sequence

from ..entities import Device


class IConnectionGateway(ABC):
    """Interface to the platform facility that links display devices.

    The gateway owns discovery and the actual link. The supervisor only
    asks it what is visible, what is connected, and to connect or
    disconnect a device.

    Failure contract:
        - Transport failures: raise any exception (``GatewayError`` is
          provided for convenience). Explicit operations pass it through
          to their caller unchanged.
        - Unsupported operation: raise ``NotImplementedError``. The
          supervisor reports it as ``ApiUnavailableError``.

    Example:
        >>> gateway = SomePlatformGateway()
        >>> device = gateway.list_devices()[0]
        >>> await gateway.connect(device)
        >>> assert device in gateway.list_connected_devices()
    """

    @abstractmethod
    def list_devices(self) -> Sequence[Device]:
        """Return devices currently visible (may be empty, order arbitrary)."""

    @abstractmethod
    def list_connected_devices(self) -> Sequence[Device]:
        """Return devices the gateway reports as connected.

        A reported link may be stale: the channel can be dead without the
        gateway knowing about it.
        """

    @abstractmethod
    async def connect(self, device: Device) -> None:
        """Link the device as an external display.

        Args:
            device: Device obtained from ``list_devices()``

        Raises:
            NotImplementedError: If the platform cannot connect devices
            Exception: Any transport error reported by the platform
        """

    @abstractmethod
    async def disconnect(self, device: Device) -> None:
        """Unlink the device.

        Args:
            device: Device to disconnect

        Raises:
            NotImplementedError: If the platform cannot disconnect devices
            Exception: Any transport error reported by the platform
        """
