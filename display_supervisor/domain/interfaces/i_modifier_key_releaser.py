"""IModifierKeyReleaser interface for keyboard state cleanup."""

from abc import ABC, abstractmethod
from typing import Sequence


class IModifierKeyReleaser(ABC):
    """Posts key-up events for modifier keys.

    Display transport transitions can leave a modifier key logically held
    down. Implementations send a key-up for every given key code.
    """

    @abstractmethod
    def release(self, key_codes: Sequence[int]) -> None:
        """Send a key-up event for each key code.

        Args:
            key_codes: Virtual key codes to release
        """
