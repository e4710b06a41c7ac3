"""Custom exceptions for the display connection supervisor.

This module defines the error surface exposed to callers of the
supervisor. Discovery and capability failures have their own types;
transport failures reported by a gateway are passed through unchanged
(gateways may use ``GatewayError`` for them, but are not required to).
"""

from ..const import MSG_API_UNAVAILABLE, MSG_NO_DEVICE_AVAILABLE, MSG_NOT_CONNECTED


class DisplaySupervisorError(Exception):
    """Base class for errors raised by the supervisor.

    Subclasses define ``default_message`` which is used when the error is
    raised without arguments, so ``str(err)`` is always suitable for
    showing to a user.
    """

    default_message = "Display connection error."

    def __init__(self, message: str = ""):
        super().__init__(message or self.default_message)


class NoDeviceAvailableError(DisplaySupervisorError):
    """No device could be resolved, even after the discovery retries."""

    default_message = MSG_NO_DEVICE_AVAILABLE


class NotConnectedError(DisplaySupervisorError):
    """Disconnect requested while no device is connected."""

    default_message = MSG_NOT_CONNECTED


class ApiUnavailableError(DisplaySupervisorError):
    """The gateway does not support the requested operation.

    This is a capability failure and is never retried.
    """

    default_message = MSG_API_UNAVAILABLE


class GatewayError(DisplaySupervisorError):
    """Transport failure reported by a gateway implementation.

    Example:
        >>> raise GatewayError("Connection refused by device")
    """

    default_message = "The display device rejected the request."
