"""Editor extension points consumed by imswitch features."""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol

Hook = Callable[..., None]
Advice = Callable[..., Any]


class EditorHost(Protocol):
    """Capabilities a host editor must provide.

    Every callback registered through this protocol is expected to run on the
    editor's single logic thread.
    """

    def run_with_timer(self, interval: float, callback: Callable[[], None]) -> Any:
        """Schedule ``callback`` every ``interval`` seconds and return a handle."""

    def cancel_timer(self, handle: Any) -> None:
        ...

    def this_single_command_keys(self) -> tuple[str, ...]:
        """Tokens of the most recent key sequence read for a single command."""

    def this_command_keys(self) -> tuple[str, ...]:
        """Tokens accumulated for the command currently being read."""

    def current_buffer(self) -> str:
        ...

    def add_hook(self, name: str, callback: Hook) -> None:
        ...

    def remove_hook(self, name: str, callback: Hook) -> None:
        ...

    def with_feature(self, feature: str, callback: Callable[[], None]) -> None:
        """Run ``callback`` now if ``feature`` is loaded, otherwise once it loads."""

    def key_binding(self, notation: str) -> Optional[str]:
        """Name of the command bound to ``notation`` in the global keymap."""

    def add_advice(self, command: str, advice: Advice) -> None:
        """Wrap ``command``; ``advice`` receives the original as first argument."""

    def remove_advice(self, command: str, advice: Advice) -> None:
        ...


__all__ = ["Advice", "EditorHost", "Hook"]
