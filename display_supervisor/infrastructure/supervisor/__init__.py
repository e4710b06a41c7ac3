"""Connection supervision."""

from .connection_supervisor import ConnectionSupervisor

__all__ = [
    "ConnectionSupervisor",
]
