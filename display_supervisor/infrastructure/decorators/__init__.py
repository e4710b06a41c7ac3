"""Infrastructure layer decorators."""

from .error_handler import handle_gateway_errors

__all__ = [
    "handle_gateway_errors",
]
