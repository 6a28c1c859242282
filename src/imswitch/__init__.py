"""Toggle an external input method engine from editor context."""

from imswitch.config import SwitchConfig
from imswitch.errors import (
    ImSwitchError,
    MissingDependencyError,
    UnrecognizedBindingError,
)
from imswitch.guard import ToggleGuard, make_guard
from imswitch.switcher import InputMethodSwitcher

__all__ = [
    "ImSwitchError",
    "InputMethodSwitcher",
    "MissingDependencyError",
    "SwitchConfig",
    "ToggleGuard",
    "UnrecognizedBindingError",
    "make_guard",
]

__version__ = "0.1.0"
