"""Input-method policies built on the guarded toggle."""

from .base import Feature, SwitchContext
from .commands import (
    EVAL_EXPRESSION,
    EXTENDED_COMMANDS,
    READ_FUNCTIONS,
    SHELL_COMMAND,
    CommandInterceptor,
    resolve_extended_command,
)
from .minibuffer import MinibufferObserver
from .modal import ModalStateObserver
from .prefix_keys import PrefixKeyMonitor, TickOutcome

__all__ = [
    "CommandInterceptor",
    "EVAL_EXPRESSION",
    "EXTENDED_COMMANDS",
    "Feature",
    "MinibufferObserver",
    "ModalStateObserver",
    "PrefixKeyMonitor",
    "READ_FUNCTIONS",
    "SHELL_COMMAND",
    "SwitchContext",
    "TickOutcome",
    "resolve_extended_command",
]
