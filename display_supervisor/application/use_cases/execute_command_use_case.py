"""ExecuteCommandUseCase for named supervisor commands.

Control surfaces that only carry a command name (URL schemes, shortcuts,
voice actions) go through this use case instead of calling the
supervisor directly. Errors come back in the result instead of being
raised, so a surface never has to know the supervisor's error types.
"""

import logging
from typing import Awaitable, Callable, Dict

from ...domain.exceptions import DisplaySupervisorError
from ...domain.interfaces import IConnectionSupervisor
from ..services import StatusService
from .command_result import CommandResult

_LOGGER = logging.getLogger(__name__)


class ExecuteCommandUseCase:
    """Use case for dispatching a named command to the supervisor.

    Supported commands (case-insensitive, surrounding slashes ignored):
        connect, disconnect, toggle, status, retry, cancel, reset-keyboard

    Example:
        >>> use_case = ExecuteCommandUseCase(supervisor, status_service)
        >>> result = await use_case.execute("Toggle")
        >>> result.message
        'Connected to Studio iPad'
    """

    def __init__(self, supervisor: IConnectionSupervisor, status: StatusService):
        self._supervisor = supervisor
        self._status = status
        self._handlers: Dict[str, Callable[[], Awaitable[str]]] = {
            "connect": self._connect,
            "disconnect": self._disconnect,
            "toggle": self._toggle,
            "status": self._describe,
            "retry": self._retry,
            "cancel": self._cancel,
            "reset-keyboard": self._reset_keyboard,
        }

    @property
    def commands(self) -> tuple:
        return tuple(self._handlers)

    async def execute(self, command: str) -> CommandResult:
        """Run the command.

        Args:
            command: Command name, e.g. "connect" or "/Toggle"

        Returns:
            CommandResult with the summary or the error message
        """
        name = command.strip().strip("/").lower()
        handler = self._handlers.get(name)
        if handler is None:
            _LOGGER.warning("Unknown command: %s", command)
            return CommandResult(
                command=name,
                success=False,
                message=f"Unknown command: {command}",
                error="UnknownCommand",
            )

        try:
            message = await handler()
        except DisplaySupervisorError as err:
            _LOGGER.warning("Command %s failed: %s", name, err)
            return CommandResult(
                command=name,
                success=False,
                message=str(err),
                error=type(err).__name__,
            )
        except Exception as err:
            _LOGGER.error("Command %s failed: %s", name, err, exc_info=True)
            return CommandResult(
                command=name,
                success=False,
                message=str(err) or type(err).__name__,
                error=type(err).__name__,
            )

        _LOGGER.debug("Command %s: %s", name, message)
        return CommandResult(command=name, success=True, message=message)

    async def _connect(self) -> str:
        return await self._supervisor.connect()

    async def _disconnect(self) -> str:
        return await self._supervisor.disconnect()

    async def _toggle(self) -> str:
        return await self._supervisor.toggle()

    async def _describe(self) -> str:
        return self._status.describe()

    async def _retry(self) -> str:
        result = await self._supervisor.retry_reconnection()
        return result or "Reconnection restarted"

    async def _cancel(self) -> str:
        self._supervisor.stop_watchdog()
        return "Reconnection cancelled"

    async def _reset_keyboard(self) -> str:
        self._supervisor.reset_modifier_keys()
        return "Keyboard reset scheduled"
