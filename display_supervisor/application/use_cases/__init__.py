"""Application use cases."""

from .command_result import CommandResult
from .execute_command_use_case import ExecuteCommandUseCase

__all__ = [
    "CommandResult",
    "ExecuteCommandUseCase",
]
