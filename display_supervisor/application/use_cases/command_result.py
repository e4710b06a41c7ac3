"""Command Result DTO.

Data Transfer Object representing the outcome of a named command.
"""

from dataclasses import dataclass


@dataclass
class CommandResult:
    """Result of a supervisor command.

    Attributes:
        command: Normalized command name
        success: Whether the command completed
        message: Summary to show the user (error text on failure)
        error: Exception class name if failed
    """

    command: str
    success: bool
    message: str = ""
    error: str = ""
