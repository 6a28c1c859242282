"""Protocol implemented by every input-method remote."""

from __future__ import annotations

from typing import Protocol


class InputMethodRemote(Protocol):
    """Controls the global active/inactive state of an input method engine."""

    command: str

    def is_available(self) -> bool:
        ...

    def is_active(self) -> bool:
        ...

    def activate(self) -> None:
        ...

    def deactivate(self) -> None:
        ...


__all__ = ["InputMethodRemote"]
