"""Pytest configuration and fixtures for display supervisor tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add repository root to Python path so tests.doubles is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from display_supervisor.config_loader import SupervisorSettings
from display_supervisor.domain.entities import Device
from display_supervisor.infrastructure.keyboard import ModifierKeyReset
from display_supervisor.infrastructure.supervisor import ConnectionSupervisor
from tests.doubles import FakeGateway, RecordingModifierReleaser


@pytest.fixture
def ipad() -> Device:
    """Primary display device."""
    return Device("ipad-1", "Studio iPad")


@pytest.fixture
def spare_ipad() -> Device:
    """Second display device."""
    return Device("ipad-2", "Kitchen iPad")


@pytest.fixture
def fake_gateway(ipad) -> FakeGateway:
    """Gateway with one visible, unconnected device."""
    return FakeGateway([ipad])


@pytest.fixture
def fast_settings() -> SupervisorSettings:
    """Settings with millisecond timings so the watchdog runs quickly."""
    return SupervisorSettings(
        max_attempts=5,
        base_interval=0.001,
        max_interval=0.004,
        settle_delay=0.001,
        discovery_attempts=3,
        discovery_poll_delay=0.001,
        stale_teardown_delay=0.001,
        modifier_reset_delay=0.001,
    )


@pytest.fixture
def parked_settings() -> SupervisorSettings:
    """Settings whose watchdog never wakes up during a test.

    Used when tests drive watchdog iterations by hand.
    """
    return SupervisorSettings(
        base_interval=3600.0,
        max_interval=3600.0,
        settle_delay=0.001,
        discovery_poll_delay=0.001,
        stale_teardown_delay=0.001,
        modifier_reset_delay=0.001,
    )


@pytest.fixture
def releaser() -> RecordingModifierReleaser:
    return RecordingModifierReleaser()


@pytest.fixture
def supervisor(fake_gateway, fast_settings, releaser) -> ConnectionSupervisor:
    """Supervisor wired to the fake gateway with fast timings."""
    return ConnectionSupervisor(
        fake_gateway,
        settings=fast_settings,
        modifier_reset=ModifierKeyReset(releaser, delay=0.001),
    )


@pytest.fixture
def parked_supervisor(fake_gateway, parked_settings, releaser) -> ConnectionSupervisor:
    """Supervisor whose watchdog only advances when a test ticks it."""
    return ConnectionSupervisor(
        fake_gateway,
        settings=parked_settings,
        modifier_reset=ModifierKeyReset(releaser, delay=0.001),
    )


@pytest.fixture
def recorded_states(supervisor) -> list:
    """List receiving every published reconnection state."""
    states: list = []
    supervisor.subscribe(states.append)
    return states
