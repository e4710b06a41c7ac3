"""Device entity representing a display device known to the gateway."""

from dataclasses import dataclass, field

from ...const import UNKNOWN_DEVICE_NAME


@dataclass(frozen=True)
class Device:
    """Domain entity for a device that can act as an external display.

    Devices are produced by the gateway. Identity is the ``id`` alone; the
    display name may change between discovery calls and takes no part in
    equality or hashing.

    Attributes:
        id: Opaque identifier, stable across discovery calls
        display_name: Human-readable name (``"Unknown"`` when not reported)

    Example:
        >>> Device("A1B2", "Studio iPad") == Device("A1B2", "iPad")
        True
    """

    id: str
    display_name: str = field(default=UNKNOWN_DEVICE_NAME, compare=False)

    def __post_init__(self) -> None:
        """Validate device attributes."""
        if not self.id:
            raise ValueError("Device id cannot be empty")
        if not self.display_name:
            object.__setattr__(self, "display_name", UNKNOWN_DEVICE_NAME)

    def __str__(self) -> str:
        """String representation for logging."""
        return f"{self.display_name} ({self.id})"
