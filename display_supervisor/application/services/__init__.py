"""Application services."""

from .status_service import StatusService

__all__ = ["StatusService"]
