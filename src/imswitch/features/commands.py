"""Around-advice that suppresses the input method while a command runs."""

from __future__ import annotations

from typing import Any, Callable

from imswitch.errors import UnrecognizedBindingError
from imswitch.guard import ToggleGuard
from imswitch.host import EditorHost
from imswitch.runtime import telemetry

from .base import Feature, SwitchContext

EXTENDED_COMMANDS: tuple[str, ...] = (
    "execute-extended-command",
    "smex",
    "helm-M-x",
)
SHELL_COMMAND = "read-shell-command"
EVAL_EXPRESSION = "read--expression"
READ_FUNCTIONS: tuple[str, ...] = ("read-char", "read-char-choice", "read-key")


def resolve_extended_command(host: EditorHost, key: str = "M-x") -> str:
    """Return the extended-command implementation bound to ``key``."""

    command = host.key_binding(key)
    if command not in EXTENDED_COMMANDS:
        raise UnrecognizedBindingError(key, command, EXTENDED_COMMANDS)
    return command


class CommandInterceptor(Feature):
    """Wraps one interactive command with deactivate/activate calls."""

    def __init__(
        self, context: SwitchContext, guard: ToggleGuard, command: str
    ) -> None:
        super().__init__(context, guard)
        if not command:
            raise ValueError("command cannot be empty")
        self.command = command
        self.name = f"command:{command}"
        self._installed = False

    @property
    def active(self) -> bool:
        return self._installed

    def around(self, original: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        self.guard.maybe_deactivate()
        try:
            return original(*args, **kwargs)
        finally:
            self.guard.maybe_activate()

    def turn_on(self) -> None:
        if self._installed:
            return
        self.context.host.add_advice(self.command, self.around)
        self._installed = True
        telemetry.record_event("command.advised", data={"command": self.command})

    def turn_off(self) -> None:
        if not self._installed:
            return
        self.context.host.remove_advice(self.command, self.around)
        self._installed = False
        telemetry.record_event("command.unadvised", data={"command": self.command})


__all__ = [
    "CommandInterceptor",
    "EVAL_EXPRESSION",
    "EXTENDED_COMMANDS",
    "READ_FUNCTIONS",
    "SHELL_COMMAND",
    "resolve_extended_command",
]
