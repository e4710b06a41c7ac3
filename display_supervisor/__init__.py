"""Supervisor for an external display connection that recovers from drops."""

from .config_loader import SupervisorSettings, load_settings, load_settings_file
from .domain.entities import Device
from .domain.exceptions import (
    ApiUnavailableError,
    DisplaySupervisorError,
    GatewayError,
    NoDeviceAvailableError,
    NotConnectedError,
)
from .domain.interfaces import IConnectionGateway, IModifierKeyReleaser
from .domain.services import BackoffPolicy, backoff_interval
from .domain.value_objects import ReconnectionState, ReconnectionStatus
from .infrastructure.supervisor import ConnectionSupervisor
from .presentation import create_container

__all__ = [
    "ApiUnavailableError",
    "BackoffPolicy",
    "ConnectionSupervisor",
    "Device",
    "DisplaySupervisorError",
    "GatewayError",
    "IConnectionGateway",
    "IModifierKeyReleaser",
    "NoDeviceAvailableError",
    "NotConnectedError",
    "ReconnectionState",
    "ReconnectionStatus",
    "SupervisorSettings",
    "backoff_interval",
    "create_container",
    "load_settings",
    "load_settings_file",
]
