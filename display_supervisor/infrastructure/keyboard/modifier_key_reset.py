"""Deferred modifier-key release after display transport transitions.

Connecting or dropping an external display can swallow the key-up event of
a modifier that was held at the time, leaving it logically stuck. After
every successful connect the supervisor schedules a release of all
modifier keys. The release is advisory: it runs later on the event loop
and its failures are only logged.
"""

import asyncio
import logging
from typing import Optional, Sequence

from ...const import DEFAULT_MODIFIER_RESET_DELAY, MODIFIER_KEY_CODES
from ...domain.interfaces import IModifierKeyReleaser

_LOGGER = logging.getLogger(__name__)


class LoggingModifierKeyReleaser(IModifierKeyReleaser):
    """Releaser used when no platform keyboard bridge is injected."""

    def release(self, key_codes: Sequence[int]) -> None:
        _LOGGER.debug("Modifier key release requested for %s", list(key_codes))


class ModifierKeyReset:
    """Schedules fire-and-forget modifier key releases.

    Attributes:
        _releaser: Platform keyboard bridge
        _delay: Seconds between scheduling and release
        _key_codes: Keys to release

    Example:
        >>> reset = ModifierKeyReset(releaser, delay=1.0)
        >>> reset.schedule()  # returns immediately
    """

    def __init__(
        self,
        releaser: Optional[IModifierKeyReleaser] = None,
        delay: float = DEFAULT_MODIFIER_RESET_DELAY,
        key_codes: Sequence[int] = MODIFIER_KEY_CODES,
    ):
        self._releaser = releaser or LoggingModifierKeyReleaser()
        self._delay = delay
        self._key_codes = tuple(key_codes)

    def schedule(self) -> Optional[asyncio.TimerHandle]:
        """Schedule a release on the running loop.

        Returns:
            Timer handle, or None when no loop is running (the release is
            then performed immediately)
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.release_now()
            return None
        return loop.call_later(self._delay, self.release_now)

    def release_now(self) -> None:
        """Release all modifier keys, logging any failure."""
        try:
            self._releaser.release(self._key_codes)
        except Exception as err:
            _LOGGER.warning("Modifier key reset failed: %s", err)
            return
        _LOGGER.debug("Modifier keys reset")
