"""Bridges Textual key events and timers to an ``InputMethodSwitcher``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional

from imswitch.features import EVAL_EXPRESSION, SHELL_COMMAND
from imswitch.host import InMemoryHost
from imswitch.switcher import InputMethodSwitcher

SPECIAL_KEYS = {
    "escape": "ESC",
    "enter": "RET",
    "space": "SPC",
    "tab": "TAB",
    "backspace": "DEL",
}

MODIFIER_NOTATION = {
    "ctrl": "C",
    "alt": "M",
    "meta": "M",
    "shift": "S",
    "super": "s",
}


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def key_to_notation(key: str, character: Optional[str] = None) -> Optional[str]:
    """Translate a Textual key name such as ``ctrl+x`` into ``C-x``."""

    *modifiers, base = key.split("+") if key != "+" else ("+",)
    if not base:
        return None
    prefixes = []
    for modifier in modifiers:
        notation = MODIFIER_NOTATION.get(modifier)
        if notation is None:
            return None
        prefixes.append(f"{notation}-")
    if base in SPECIAL_KEYS:
        name = SPECIAL_KEYS[base]
    elif len(base) == 1:
        name = base
    elif character and len(character) == 1 and character.isprintable():
        name = character
    else:
        name = f"<{base}>"
    return "".join(prefixes) + name


class TextualHost(InMemoryHost):
    """In-memory host whose repeating timers run on the app's event loop."""

    def __init__(self, app: Any, *, buffer: str = "*scratch*") -> None:
        super().__init__(buffer=buffer)
        self._app = app

    def run_with_timer(self, interval: float, callback: Callable[[], None]) -> Any:
        if interval <= 0:
            raise ValueError("interval must be positive")
        return self._app.set_interval(interval, callback)

    def cancel_timer(self, handle: Any) -> None:
        handle.stop()


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the controller to update Textual widgets."""

    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


def install_demo_commands(host: InMemoryHost) -> None:
    """Bind a handful of commands so prefixes and wrappers can be tried out."""

    def prompt() -> None:
        host.read_from_minibuffer(lambda: None)

    host.define_command("execute-extended-command", prompt)
    host.define_command("find-file", lambda: None)
    host.define_command("switch-to-buffer", lambda: None)
    host.define_command("org-ctrl-c-ctrl-c", lambda: None)
    host.define_command(SHELL_COMMAND, prompt)
    host.define_command(EVAL_EXPRESSION, prompt)
    host.define_command(
        "evil-insert-state", lambda: host.run_hook("evil-insert-state-entry-hook")
    )
    host.define_command(
        "evil-normal-state", lambda: host.run_hook("evil-insert-state-exit-hook")
    )
    bindings: Dict[str, str] = {
        "M-x": "execute-extended-command",
        "C-x C-f": "find-file",
        "C-x b": "switch-to-buffer",
        "C-c C-c": "org-ctrl-c-ctrl-c",
        "M-!": SHELL_COMMAND,
        "M-:": EVAL_EXPRESSION,
        "<f2>": "evil-insert-state",
        "ESC": "evil-normal-state",
    }
    for notation, command in bindings.items():
        host.bind_key(notation, command)
    host.provide("evil")


class SwitcherController:
    """Feeds keys to the host and reports input method state to the UI."""

    def __init__(
        self,
        switcher: InputMethodSwitcher,
        host: InMemoryHost,
        hooks: TextualUIHooks,
    ) -> None:
        self.switcher = switcher
        self.host = host
        self.hooks = hooks

    def handle_key(self, notation: str) -> None:
        self.host.press(notation)
        executed = self.host.executed[-1] if self.host.executed else None
        self._log_state("key ->", key=notation, command=executed)
        self.refresh()

    def refresh(self) -> None:
        self.hooks.update_status(self.status_line())

    def status_line(self) -> str:
        state = "active" if self.switcher.remote.is_active() else "inactive"
        pending = " ".join(self.host.this_command_keys()) or "-"
        features = ", ".join(self.switcher.active_features()) or "none"
        return f"IM {state} | keys {pending} | features: {features}"

    def _log_state(self, prefix: str, **fields: object) -> None:
        parts: Iterable[str] = (
            f"{key}={value!r}" for key, value in fields.items() if value is not None
        )
        self.hooks.log(" ".join((prefix, *parts)))


__all__ = [
    "SwitcherController",
    "TextualHost",
    "TextualUIHooks",
    "install_demo_commands",
    "key_to_notation",
]
