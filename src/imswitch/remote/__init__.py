"""Input method remotes."""

from .base import InputMethodRemote
from .fcitx import (
    ACTIVE_STATUS,
    DEFAULT_COMMAND,
    FALLBACK_COMMANDS,
    FcitxRemote,
    detect_remote_command,
)
from .memory import InMemoryRemote

__all__ = [
    "ACTIVE_STATUS",
    "DEFAULT_COMMAND",
    "FALLBACK_COMMANDS",
    "FcitxRemote",
    "InMemoryRemote",
    "InputMethodRemote",
    "detect_remote_command",
]
