"""Constants for the external display connection supervisor.

This file contains the default timing and retry values used by the
supervisor. All of them can be overridden through ``SupervisorSettings``
(see ``config_loader.py``).
"""

from __future__ import annotations

UNKNOWN_DEVICE_NAME = "Unknown"

# Reconnection policy
DEFAULT_MAX_RECONNECT_ATTEMPTS = 5

# Timing constants (in seconds)
DEFAULT_BASE_INTERVAL = 10.0  # Watchdog poll interval with no failures
DEFAULT_MAX_INTERVAL = 180.0  # Backoff cap
DEFAULT_SETTLE_DELAY = 3.0  # Pause after a drop before reconnecting
DEFAULT_DISCOVERY_ATTEMPTS = 3  # Polls while waiting for a device to appear
DEFAULT_DISCOVERY_POLL_DELAY = 2.0
DEFAULT_STALE_TEARDOWN_DELAY = 1.0  # Wait after dropping a stale link
DEFAULT_MODIFIER_RESET_DELAY = 1.0

# Virtual key codes of the modifier keys released after a transport change
KEY_LEFT_SHIFT = 56
KEY_RIGHT_SHIFT = 60
KEY_LEFT_COMMAND = 55
KEY_RIGHT_COMMAND = 54
KEY_LEFT_CONTROL = 59
KEY_RIGHT_CONTROL = 62
KEY_LEFT_OPTION = 58
KEY_RIGHT_OPTION = 61

MODIFIER_KEY_CODES = (
    KEY_LEFT_SHIFT,
    KEY_RIGHT_SHIFT,
    KEY_LEFT_COMMAND,
    KEY_RIGHT_COMMAND,
    KEY_LEFT_CONTROL,
    KEY_RIGHT_CONTROL,
    KEY_LEFT_OPTION,
    KEY_RIGHT_OPTION,
)

# User-facing messages
MSG_NO_DEVICE_AVAILABLE = (
    "No display device found nearby. Make sure the device is awake, "
    "on the same network and signed into the same account."
)
MSG_NOT_CONNECTED = "No display device is currently connected."
MSG_API_UNAVAILABLE = "The display connection API is not available on this system."
