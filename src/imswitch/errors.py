"""Exception types raised by imswitch."""

from __future__ import annotations

from typing import Iterable


class ImSwitchError(RuntimeError):
    """Base class for errors raised during setup."""


class MissingDependencyError(ImSwitchError):
    """Raised when the input-method remote executable cannot be found."""

    def __init__(self, command: str):
        super().__init__(
            f"Input method control executable '{command}' was not found on PATH"
        )
        self.command = command


class UnrecognizedBindingError(ImSwitchError):
    """Raised when the extended-command key is bound to an unknown command."""

    def __init__(self, key: str, command: str | None, supported: Iterable[str]):
        supported_tuple = tuple(supported)
        bound = f"'{command}'" if command else "nothing"
        message = (
            f"'{key}' is bound to {bound}; supported implementations are "
            f"{', '.join(supported_tuple)}"
        )
        super().__init__(message)
        self.key = key
        self.command = command
        self.supported = supported_tuple


__all__ = [
    "ImSwitchError",
    "MissingDependencyError",
    "UnrecognizedBindingError",
]
