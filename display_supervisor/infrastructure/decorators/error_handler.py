"""Error handling decorators for standardized gateway exception handling."""

import asyncio
import inspect
import logging
from functools import wraps
from typing import Any, Callable

from ...domain.exceptions import ApiUnavailableError, DisplaySupervisorError


def handle_gateway_errors(
    operation_name: str,
    logger: logging.Logger = None,
    reraise: bool = True,
    default_return: Any = None,
):
    """Decorator for standardized gateway error handling.

    ``NotImplementedError`` raised by a gateway is converted to
    ``ApiUnavailableError``. Every other exception keeps its type.
    ``asyncio.CancelledError`` is never intercepted.

    Args:
        operation_name: Human-readable operation name for logging
        logger: Logger to use (defaults to function's module logger)
        reraise: Whether to re-raise exception after logging
        default_return: Value to return on error if not re-raising

    Example:
        @handle_gateway_errors("Reconnect", reraise=False, default_return=False)
        async def _reconnect(self, device: Device) -> bool:
            await self._gateway.connect(device)
            return True
    """

    def decorator(func: Callable):
        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            log = logger or logging.getLogger(func.__module__)
            try:
                return await func(*args, **kwargs)
            except NotImplementedError as err:
                log.error("%s not supported by gateway: %s", operation_name, err)
                if reraise:
                    raise ApiUnavailableError() from err
                return default_return
            except asyncio.TimeoutError as err:
                log.warning("%s timed out: %s", operation_name, err)
                if reraise:
                    raise
                return default_return
            except DisplaySupervisorError as err:
                # Expected condition - log without stack trace
                log.warning("%s failed: %s", operation_name, err)
                if reraise:
                    raise
                return default_return
            except Exception as err:
                log.error(
                    "%s unexpected error: %s",
                    operation_name,
                    err,
                    exc_info=True,
                )
                if reraise:
                    raise
                return default_return

        @wraps(func)
        def sync_wrapper(*args, **kwargs):
            log = logger or logging.getLogger(func.__module__)
            try:
                return func(*args, **kwargs)
            except NotImplementedError as err:
                log.error("%s not supported by gateway: %s", operation_name, err)
                if reraise:
                    raise ApiUnavailableError() from err
                return default_return
            except Exception as err:
                log.error(
                    "%s error: %s",
                    operation_name,
                    err,
                    exc_info=True,
                )
                if reraise:
                    raise
                return default_return

        return async_wrapper if inspect.iscoroutinefunction(func) else sync_wrapper

    return decorator
