"""Keyboard cleanup helpers."""

from .modifier_key_reset import LoggingModifierKeyReleaser, ModifierKeyReset

__all__ = [
    "LoggingModifierKeyReleaser",
    "ModifierKeyReset",
]
