"""Dependency Injection Container.

This module implements a simple DI container using dataclasses.
The container holds all dependencies and provides a factory function
for creating the full dependency graph.

There is no process-wide supervisor: whoever owns the container owns the
supervisor and hands it to the control surfaces that need it.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Optional

from ..config_loader import SupervisorSettings
from ..domain.interfaces import IConnectionGateway, IModifierKeyReleaser


@dataclass
class DIContainer:
    """Dependency Injection Container.

    This container holds all dependencies organized by layer:
    - Infrastructure: Supervisor, backoff policy, keyboard cleanup
    - Application: Status service and command use case

    Attributes:
        gateway: Platform display bridge
        settings: Timing and retry settings

        # Infrastructure Layer
        backoff_policy: Watchdog backoff policy
        modifier_reset: Deferred modifier key release
        supervisor: Connection supervisor

        # Application Layer
        status_service: Status wording and diagnostics
        execute_command_use_case: Named command dispatch

    Example:
        >>> container = create_container(gateway)
        >>> await container.supervisor.connect()
    """

    # Core
    gateway: IConnectionGateway
    settings: SupervisorSettings

    # Infrastructure Layer
    backoff_policy: Optional[Any] = None  # BackoffPolicy
    modifier_reset: Optional[Any] = None  # ModifierKeyReset
    supervisor: Optional[Any] = None  # IConnectionSupervisor

    # Application Layer
    status_service: Optional[Any] = None
    execute_command_use_case: Optional[Any] = None


def create_container(
    gateway: IConnectionGateway,
    settings: Optional[SupervisorSettings] = None,
    modifier_releaser: Optional[IModifierKeyReleaser] = None,
    callback_loop: Optional[asyncio.AbstractEventLoop] = None,
) -> DIContainer:
    """Factory function to create fully-wired DI container.

    Dependencies are created in order:
    1. Infrastructure layer (depends on gateway and settings)
    2. Application layer (depends on the supervisor)

    Args:
        gateway: Platform display bridge
        settings: Timing and retry settings (defaults from const.py)
        modifier_releaser: Platform keyboard bridge (default: log only)
        callback_loop: Loop on which state listeners are invoked

    Returns:
        Fully-wired DIContainer
    """
    container = DIContainer(
        gateway=gateway,
        settings=settings or SupervisorSettings(),
    )

    # Infrastructure Layer
    container.backoff_policy = _create_backoff_policy(container.settings)
    container.modifier_reset = _create_modifier_reset(
        container.settings, modifier_releaser
    )
    container.supervisor = _create_supervisor(
        gateway=gateway,
        settings=container.settings,
        backoff=container.backoff_policy,
        modifier_reset=container.modifier_reset,
        callback_loop=callback_loop,
    )

    # Application Layer
    container.status_service = _create_status_service(
        container.supervisor, container.settings
    )
    container.execute_command_use_case = _create_execute_command_use_case(
        container.supervisor, container.status_service
    )

    return container


# Infrastructure Layer Factory Functions


def _create_backoff_policy(settings: SupervisorSettings) -> Any:
    """Create watchdog backoff policy.

    Returns:
        BackoffPolicy using the configured base interval and cap
    """
    from ..domain.services import BackoffPolicy

    return BackoffPolicy(base=settings.base_interval, cap=settings.max_interval)


def _create_modifier_reset(
    settings: SupervisorSettings,
    releaser: Optional[IModifierKeyReleaser],
) -> Any:
    """Create deferred modifier key release.

    Returns:
        ModifierKeyReset
    """
    from ..infrastructure.keyboard import ModifierKeyReset

    return ModifierKeyReset(releaser, delay=settings.modifier_reset_delay)


def _create_supervisor(
    gateway: IConnectionGateway,
    settings: SupervisorSettings,
    backoff: Any,
    modifier_reset: Any,
    callback_loop: Optional[asyncio.AbstractEventLoop],
) -> Any:
    """Create connection supervisor.

    Returns:
        IConnectionSupervisor implementation (ConnectionSupervisor)
    """
    from ..infrastructure.supervisor import ConnectionSupervisor

    return ConnectionSupervisor(
        gateway,
        settings=settings,
        backoff=backoff,
        modifier_reset=modifier_reset,
        callback_loop=callback_loop,
    )


# Application Layer Factory Functions


def _create_status_service(supervisor: Any, settings: SupervisorSettings) -> Any:
    """Create status service.

    Returns:
        StatusService
    """
    from ..application.services import StatusService

    return StatusService(supervisor, max_attempts=settings.max_attempts)


def _create_execute_command_use_case(supervisor: Any, status_service: Any) -> Any:
    """Create named command dispatch use case.

    Returns:
        ExecuteCommandUseCase
    """
    from ..application.use_cases import ExecuteCommandUseCase

    return ExecuteCommandUseCase(supervisor, status_service)


def validate_container(container: DIContainer) -> bool:
    """Validate that container has all required dependencies.

    Args:
        container: Container to validate

    Returns:
        True if all critical dependencies are present

    Raises:
        ValueError: If critical dependencies are missing

    Example:
        >>> container = create_container(gateway)
        >>> assert validate_container(container)
    """
    critical_dependencies = [
        "gateway",
        "settings",
        "supervisor",
        "status_service",
        "execute_command_use_case",
    ]

    missing = []
    for dep_name in critical_dependencies:
        if getattr(container, dep_name, None) is None:
            missing.append(dep_name)

    if missing:
        raise ValueError(f"Missing critical dependencies: {', '.join(missing)}")

    return True
