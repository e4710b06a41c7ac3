"""Connection supervisor for the external display link.

This module implements connection lifecycle management with:
- Device discovery wait and stale-link recovery on connect
- A watchdog loop that detects unexpected drops
- Automatic reconnection with exponential backoff
- A bounded number of attempts ending in a terminal FAILED state
- Published reconnection state for a single listener
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from ...config_loader import SupervisorSettings
from ...domain.entities import Device
from ...domain.exceptions import (
    ApiUnavailableError,
    NoDeviceAvailableError,
    NotConnectedError,
)
from ...domain.interfaces import IConnectionGateway, IConnectionSupervisor, StateListener
from ...domain.services import BackoffPolicy
from ...domain.value_objects import ReconnectionState
from ..decorators import handle_gateway_errors
from ..keyboard import ModifierKeyReset
from ..state_machines import ReconnectionEvent, ReconnectionStateMachine

_LOGGER = logging.getLogger(__name__)


class ConnectionSupervisor(IConnectionSupervisor):
    """Supervises the external display connection with automatic recovery.

    This implementation:
    - Serializes every gateway connect/disconnect behind one asyncio lock
    - Runs at most one watchdog task at a time
    - Tracks consecutive failures to drive backoff and the give-up limit
    - Never lets a watchdog error reach a caller

    Attributes:
        _gateway: Platform display bridge
        _settings: Timing and retry settings
        _last_connected_device_id: Device to recover; None when not supervising
        _last_known_device_id: Last device connected, kept for manual retry
        _consecutive_failures: Recovery attempts in the current drop episode
        _is_reconnecting: True while a watchdog reconnect call is outstanding
        _watchdog_generation: Incremented whenever the running loop is replaced

    Example:
        >>> supervisor = ConnectionSupervisor(gateway)
        >>> supervisor.subscribe(lambda state: print(state))
        >>> await supervisor.connect()
        'Connected to Studio iPad'
    """

    def __init__(
        self,
        gateway: IConnectionGateway,
        settings: Optional[SupervisorSettings] = None,
        backoff: Optional[BackoffPolicy] = None,
        modifier_reset: Optional[ModifierKeyReset] = None,
        callback_loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        """Initialize connection supervisor.

        Args:
            gateway: Gateway to supervise
            settings: Timing and retry settings (defaults from const.py)
            backoff: Watchdog backoff policy (defaults from settings)
            modifier_reset: Keyboard cleanup run after successful connects
            callback_loop: Loop on which the state listener is invoked
        """
        self._gateway = gateway
        self._settings = settings or SupervisorSettings()
        self._backoff = backoff or BackoffPolicy(
            self._settings.base_interval, self._settings.max_interval
        )
        self._modifier_reset = modifier_reset or ModifierKeyReset(
            delay=self._settings.modifier_reset_delay
        )
        self._state_machine = ReconnectionStateMachine(
            self._settings.max_attempts, callback_loop=callback_loop
        )
        self._lock = asyncio.Lock()

        self._last_connected_device_id: Optional[str] = None
        self._last_known_device_id: Optional[str] = None
        self._consecutive_failures = 0
        self._is_reconnecting = False
        self._watchdog_task: Optional[asyncio.Task] = None
        self._watchdog_generation = 0

    # Read side

    @property
    def reconnection_state(self) -> ReconnectionState:
        return self._state_machine.state

    @property
    def is_connected(self) -> bool:
        return bool(self._gateway.list_connected_devices())

    @property
    def connected_device_name(self) -> Optional[str]:
        connected = self._gateway.list_connected_devices()
        return connected[0].display_name if connected else None

    @property
    def first_available_device(self) -> Optional[Device]:
        devices = self._gateway.list_devices()
        return devices[0] if devices else None

    @property
    def max_attempts(self) -> int:
        return self._settings.max_attempts

    @property
    def consecutive_failures(self) -> int:
        return self._consecutive_failures

    @property
    def is_reconnecting(self) -> bool:
        return self._is_reconnecting

    @property
    def last_connected_device_id(self) -> Optional[str]:
        return self._last_connected_device_id

    @property
    def last_known_device_id(self) -> Optional[str]:
        return self._last_known_device_id

    @property
    def is_watchdog_running(self) -> bool:
        return self._watchdog_task is not None and not self._watchdog_task.done()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register the single reconnection state listener.

        A new subscription replaces the previous listener.
        """
        return self._state_machine.subscribe(listener)

    def get_diagnostics(self) -> Dict[str, Any]:
        """Get current recovery tracking info.

        Returns:
            Dictionary with recovery statistics

        Example:
            >>> info = supervisor.get_diagnostics()
            >>> print(f"Failures: {info['consecutive_failures']}")
        """
        return {
            "state": str(self.reconnection_state),
            "consecutive_failures": self._consecutive_failures,
            "max_attempts": self._settings.max_attempts,
            "next_interval": self._backoff.interval(self._consecutive_failures),
            "is_reconnecting": self._is_reconnecting,
            "watchdog_running": self.is_watchdog_running,
            "last_connected_device_id": self._last_connected_device_id,
            "last_known_device_id": self._last_known_device_id,
        }

    # Explicit operations

    async def connect(self, device: Optional[Device] = None) -> str:
        """Connect to the device, or to the first visible one.

        A link the gateway already reports as connected is torn down and
        re-established, since the channel may be dead without the gateway
        knowing.

        Args:
            device: Target device (default: first visible device)

        Returns:
            Human-readable summary

        Raises:
            NoDeviceAvailableError: If no device appears during discovery
            ApiUnavailableError: If the gateway cannot connect devices
            Exception: Gateway transport errors, unchanged
        """
        async with self._lock:
            # The teardown below is not a drop; the old loop must not see it
            was_supervising = self.is_watchdog_running
            self._cancel_watchdog()
            try:
                target = await self._resolve_connect_target(device)
                await self._drop_stale_link(target)

                _LOGGER.debug("Connecting to %s", target)
                await self._gateway_connect(target)
            except Exception:
                if was_supervising:
                    self.start_watchdog()
                raise

            self._remember(target)
            self._consecutive_failures = 0
            self._is_reconnecting = False
            self._state_machine.transition(ReconnectionEvent.RESET)
            self.start_watchdog()

        _LOGGER.info("Connected to %s", target)
        self._modifier_reset.schedule()
        return f"Connected to {target.display_name}"

    async def disconnect(self, device: Optional[Device] = None) -> str:
        """Stop the watchdog and disconnect the device.

        Args:
            device: Device to disconnect (default: first connected device)

        Returns:
            Human-readable summary

        Raises:
            NotConnectedError: If no device is connected
            ApiUnavailableError: If the gateway cannot disconnect devices
            Exception: Gateway transport errors, unchanged
        """
        # Stop first so an in-flight reconnect cannot race the disconnect
        self.stop_watchdog()

        async with self._lock:
            # A connect holding the lock may have restarted the watchdog
            self._cancel_watchdog()
            self._last_connected_device_id = None
            self._last_known_device_id = None

            target = device
            if target is None:
                connected = self._gateway.list_connected_devices()
                target = connected[0] if connected else None
            if target is None:
                raise NotConnectedError()

            _LOGGER.debug("Disconnecting from %s", target)
            await self._gateway_disconnect(target)

        _LOGGER.info("Disconnected from %s", target)
        return f"Disconnected from {target.display_name}"

    async def toggle(self) -> str:
        """Disconnect if any device is connected, connect otherwise."""
        connected = self.is_connected
        _LOGGER.debug(
            "Toggle: connected=%s, visible devices=%d",
            connected,
            len(self._gateway.list_devices()),
        )
        if connected:
            return await self.disconnect()
        return await self.connect()

    async def retry_reconnection(self) -> Optional[str]:
        """Resume recovery after the watchdog gave up.

        Restores the remembered device, resets the failure counter,
        restarts the watchdog and immediately attempts a connect. A failed
        attempt is logged rather than raised; the watchdog keeps retrying.

        Returns:
            Connect summary, or None if the immediate attempt failed
        """
        async with self._lock:
            remembered = self._last_known_device_id
            if remembered is not None:
                self._last_connected_device_id = remembered
            self._consecutive_failures = 0
            self._is_reconnecting = False

            if self.reconnection_state.is_failed:
                self._state_machine.transition(ReconnectionEvent.MANUAL_RETRY)
            else:
                self._state_machine.transition(ReconnectionEvent.RESET)

            _LOGGER.info("Manual reconnection requested (device: %s)", remembered)
            self.start_watchdog()

        try:
            return await self.connect(self._find_visible_device(remembered))
        except Exception as err:
            _LOGGER.warning("Manual reconnection attempt failed: %s", err)
            return None

    def reset_modifier_keys(self) -> None:
        """Schedule a release of all modifier keys."""
        self._modifier_reset.schedule()

    # Watchdog

    def start_watchdog(self) -> None:
        """Start the watchdog loop, replacing any running one.

        Must be called from within the running event loop.
        """
        self._cancel_watchdog()
        generation = self._watchdog_generation
        self._watchdog_task = asyncio.get_running_loop().create_task(
            self._watchdog_loop(generation)
        )
        _LOGGER.debug("Watchdog started (generation %d)", generation)

    def stop_watchdog(self) -> None:
        """Cancel the watchdog and reset recovery counters."""
        was_running = self.is_watchdog_running
        self._cancel_watchdog()
        self._consecutive_failures = 0
        self._is_reconnecting = False
        self._state_machine.transition(ReconnectionEvent.RESET)
        if was_running:
            _LOGGER.info("Watchdog stopped")

    def _cancel_watchdog(self) -> None:
        # Bumping the generation silences the old loop even before the
        # cancellation is delivered to it.
        self._watchdog_generation += 1
        if self._watchdog_task is not None:
            self._watchdog_task.cancel()
            self._watchdog_task = None

    async def _watchdog_loop(self, generation: int) -> None:
        """Poll the gateway until cancelled or recovery is given up."""
        while generation == self._watchdog_generation:
            await asyncio.sleep(self._backoff.interval(self._consecutive_failures))
            try:
                keep_running = await self._watchdog_tick(generation)
            except Exception as err:
                _LOGGER.error("Watchdog iteration failed: %s", err, exc_info=True)
                continue
            if not keep_running:
                break

        if generation == self._watchdog_generation:
            self._watchdog_task = None
        _LOGGER.debug("Watchdog loop %d finished", generation)

    async def _watchdog_tick(self, generation: int) -> bool:
        """Run one watchdog iteration after the backoff sleep.

        Returns:
            False when the loop must terminate
        """
        if generation != self._watchdog_generation:
            return False

        if self.is_connected:
            if self._consecutive_failures > 0:
                _LOGGER.info("Connection recovered")
                self._mark_recovered(generation)
            return True

        if self._last_connected_device_id is None:
            return True

        if self._consecutive_failures >= self._settings.max_attempts:
            _LOGGER.error(
                "No reconnect after %d attempts", self._settings.max_attempts
            )
            self._give_up(generation)
            return False

        if self._is_reconnecting:
            _LOGGER.debug("Reconnect already in flight, skipping tick")
            return True

        self._consecutive_failures += 1
        _LOGGER.warning(
            "Connection dropped, reconnect attempt %d/%d",
            self._consecutive_failures,
            self._settings.max_attempts,
        )
        if self.reconnection_state.is_retrying:
            self._publish(ReconnectionEvent.RETRY, generation)
        else:
            self._publish(ReconnectionEvent.DROP_DETECTED, generation)

        # Transient drops often heal by themselves
        await asyncio.sleep(self._settings.settle_delay)
        if generation != self._watchdog_generation:
            return False

        if self.is_connected:
            _LOGGER.info("Connection came back during settle wait")
            self._mark_recovered(generation)
            return True

        if self._is_reconnecting:
            return True

        target = self._find_reconnect_target()
        if target is None:
            _LOGGER.debug("No device visible, skipping reconnect attempt")
            return True

        self._is_reconnecting = True
        try:
            return await self._reconnect(target, generation)
        finally:
            self._is_reconnecting = False

    async def _reconnect(self, target: Device, generation: int) -> bool:
        """Reconnect under the lock.

        Returns:
            False when the gateway cannot reconnect at all and the loop
            must terminate
        """
        async with self._lock:
            if (
                generation != self._watchdog_generation
                or self._last_connected_device_id is None
            ):
                return True
            if self.is_connected:
                self._mark_recovered(generation)
                return True

            try:
                await self._gateway_connect(target)
            except ApiUnavailableError:
                # Capability failures are not retried
                _LOGGER.error("Gateway cannot reconnect %s, giving up", target)
                self._give_up(generation)
                return False
            except Exception:
                _LOGGER.warning(
                    "Reconnect attempt %d/%d to %s failed",
                    self._consecutive_failures,
                    self._settings.max_attempts,
                    target,
                )
                return True

            self._remember(target)
            self._consecutive_failures = 0
            self._is_reconnecting = False
            self._publish(ReconnectionEvent.RECONNECTED, generation)

        _LOGGER.info("Reconnected to %s", target)
        self._modifier_reset.schedule()
        return True

    def _give_up(self, generation: int) -> None:
        _LOGGER.error("Reconnection failed; manual retry required")
        self._last_connected_device_id = None
        self._is_reconnecting = False
        self._publish(ReconnectionEvent.GAVE_UP, generation)

    def _mark_recovered(self, generation: int) -> None:
        self._consecutive_failures = 0
        self._publish(ReconnectionEvent.RECOVERED, generation)

    def _publish(self, event: ReconnectionEvent, generation: int) -> bool:
        if generation != self._watchdog_generation:
            _LOGGER.debug("Dropping %s from stopped watchdog %d", event.name, generation)
            return False
        return self._state_machine.transition(event)

    # Gateway helpers

    async def _resolve_connect_target(self, device: Optional[Device]) -> Device:
        if device is not None:
            return device

        target = self.first_available_device
        attempts = self._settings.discovery_attempts
        attempt = 0
        while target is None and attempt < attempts:
            attempt += 1
            _LOGGER.info(
                "No device found, waiting... (attempt %d/%d)", attempt, attempts
            )
            await asyncio.sleep(self._settings.discovery_poll_delay)
            target = self.first_available_device

        if target is None:
            _LOGGER.error("Connect failed: no device found after %d polls", attempts)
            raise NoDeviceAvailableError()
        return target

    async def _drop_stale_link(self, target: Device) -> None:
        stale = next(
            (d for d in self._gateway.list_connected_devices() if d.id == target.id),
            None,
        )
        if stale is None:
            return

        _LOGGER.info("%s already reported connected, re-establishing link", stale)
        await self._gateway_disconnect_quietly(stale)
        await asyncio.sleep(self._settings.stale_teardown_delay)

    def _find_visible_device(self, device_id: Optional[str]) -> Optional[Device]:
        if device_id is None:
            return None
        return next(
            (d for d in self._gateway.list_devices() if d.id == device_id), None
        )

    def _find_reconnect_target(self) -> Optional[Device]:
        return (
            self._find_visible_device(self._last_connected_device_id)
            or self.first_available_device
        )

    def _remember(self, device: Device) -> None:
        self._last_connected_device_id = device.id
        self._last_known_device_id = device.id

    @handle_gateway_errors("Connect")
    async def _gateway_connect(self, device: Device) -> None:
        await self._gateway.connect(device)

    @handle_gateway_errors("Disconnect")
    async def _gateway_disconnect(self, device: Device) -> None:
        await self._gateway.disconnect(device)

    @handle_gateway_errors("Stale link teardown", reraise=False, default_return=False)
    async def _gateway_disconnect_quietly(self, device: Device) -> bool:
        await self._gateway.disconnect(device)
        return True
