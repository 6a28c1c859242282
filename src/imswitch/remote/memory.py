"""In-memory remote used by tests and the demo application."""

from __future__ import annotations

from typing import List


class InMemoryRemote:
    """Keeps the input method state in a flag and records every call."""

    def __init__(
        self, *, active: bool = True, available: bool = True, command: str = "memory"
    ) -> None:
        self.active = active
        self.available = available
        self.command = command
        self.calls: List[str] = []

    def is_available(self) -> bool:
        return self.available

    def is_active(self) -> bool:
        self.calls.append("status")
        return self.active

    def activate(self) -> None:
        self.calls.append("activate")
        self.active = True

    def deactivate(self) -> None:
        self.calls.append("deactivate")
        self.active = False

    def count(self, call: str) -> int:
        return self.calls.count(call)

    def reset_calls(self) -> None:
        self.calls.clear()


__all__ = ["InMemoryRemote"]
