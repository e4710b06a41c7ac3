"""Presentation layer for the display supervisor.

The presentation layer is the outermost layer. It wires the object graph
that menus, shortcuts and other control surfaces receive.

This layer depends on application and domain layers but NOT vice versa.
"""

from .container import DIContainer, create_container, validate_container

__all__ = [
    "DIContainer",
    "create_container",
    "validate_container",
]
