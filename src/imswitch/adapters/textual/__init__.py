"""Textual demo adapter."""

from .controller import (
    SwitcherController,
    TextualHost,
    TextualUIHooks,
    install_demo_commands,
    key_to_notation,
)

__all__ = [
    "SwitcherController",
    "TextualHost",
    "TextualUIHooks",
    "install_demo_commands",
    "key_to_notation",
]
