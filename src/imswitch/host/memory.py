"""Reference host that keeps the whole editor state in memory."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, List, Optional

from imswitch.keymaps import KeySequence
from imswitch.runtime import telemetry

from .base import Advice, Hook

MINIBUFFER_SETUP_HOOK = "minibuffer-setup-hook"
MINIBUFFER_EXIT_HOOK = "minibuffer-exit-hook"


@dataclass(slots=True)
class TimerHandle:
    id: int
    interval: float
    callback: Callable[[], None]
    due: float


class InMemoryHost:
    """Key dispatch, hooks, advice, buffers and virtual-clock timers.

    Key presses are resolved against the global keymap the way a prefix-aware
    dispatcher does: a complete binding runs its command, a strict prefix of a
    binding keeps accumulating keys, anything else is discarded as undefined.
    """

    def __init__(self, *, buffer: str = "*scratch*") -> None:
        self._now = 0.0
        self._timers: Dict[int, TimerHandle] = {}
        self._timer_counter = 0
        self._hooks: Dict[str, List[Hook]] = {}
        self._features: set[str] = set()
        self._feature_waiters: Dict[str, List[Callable[[], None]]] = {}
        self._bindings: Dict[tuple[str, ...], str] = {}
        self._commands: Dict[str, Callable[..., Any]] = {}
        self._advice: Dict[str, List[Advice]] = {}
        self._pending: List[str] = []
        self._last_keys: tuple[str, ...] = ()
        self._buffer = buffer
        self.executed: List[str] = []

    # -- timers ---------------------------------------------------------

    @property
    def now(self) -> float:
        return self._now

    @property
    def timers(self) -> tuple[TimerHandle, ...]:
        return tuple(self._timers.values())

    def run_with_timer(
        self, interval: float, callback: Callable[[], None]
    ) -> TimerHandle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._timer_counter += 1
        handle = TimerHandle(
            id=self._timer_counter,
            interval=interval,
            callback=callback,
            due=self._now + interval,
        )
        self._timers[handle.id] = handle
        return handle

    def cancel_timer(self, handle: TimerHandle) -> None:
        if self._timers.pop(handle.id, None) is None:
            raise KeyError(f"Timer {handle.id} is not scheduled")

    def advance(self, seconds: float) -> int:
        """Move the virtual clock forward, firing due timers in order."""

        target = self._now + seconds
        fired = 0
        while True:
            due = [timer for timer in self._timers.values() if timer.due <= target]
            if not due:
                break
            timer = min(due, key=lambda item: (item.due, item.id))
            self._now = timer.due
            timer.due += timer.interval
            fired += 1
            timer.callback()
        self._now = target
        return fired

    # -- keys -----------------------------------------------------------

    def bind_key(self, notation: str, command: str) -> None:
        self._bindings[KeySequence.parse(notation).tokens] = command

    def key_binding(self, notation: str) -> Optional[str]:
        return self._bindings.get(KeySequence.parse(notation).tokens)

    def this_single_command_keys(self) -> tuple[str, ...]:
        return self._last_keys

    def this_command_keys(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def press(self, notation: str) -> None:
        """Feed every stroke of ``notation`` to the dispatcher."""

        for stroke in KeySequence.parse(notation).strokes:
            self._feed(stroke.token)

    def _feed(self, token: str) -> None:
        self._pending.append(token)
        keys = tuple(self._pending)
        self._last_keys = keys
        command = self._bindings.get(keys)
        if command is not None:
            try:
                self.call(command)
            finally:
                self._pending.clear()
            return
        if any(
            len(seq) > len(keys) and seq[: len(keys)] == keys for seq in self._bindings
        ):
            return
        self._pending.clear()
        telemetry.record_event(
            "host.undefined_key",
            level="debug",
            data={"keys": " ".join(keys)},
            logger_name="imswitch.host",
        )

    # -- commands and advice --------------------------------------------

    def define_command(self, name: str, function: Callable[..., Any]) -> None:
        self._commands[name] = function

    def call(self, name: str, *args: Any, **kwargs: Any) -> Any:
        try:
            function = self._commands[name]
        except KeyError as exc:
            raise KeyError(f"Command '{name}' is not defined") from exc
        # The most recently added advice ends up outermost.
        for advice in self._advice.get(name, ()):
            function = partial(advice, function)
        self.executed.append(name)
        return function(*args, **kwargs)

    def add_advice(self, command: str, advice: Advice) -> None:
        chain = self._advice.setdefault(command, [])
        if advice not in chain:
            chain.append(advice)

    def remove_advice(self, command: str, advice: Advice) -> None:
        chain = self._advice.get(command)
        if chain and advice in chain:
            chain.remove(advice)

    def advice_for(self, command: str) -> tuple[Advice, ...]:
        return tuple(self._advice.get(command, ()))

    # -- hooks and features ---------------------------------------------

    def add_hook(self, name: str, callback: Hook) -> None:
        callbacks = self._hooks.setdefault(name, [])
        if callback not in callbacks:
            callbacks.append(callback)

    def remove_hook(self, name: str, callback: Hook) -> None:
        callbacks = self._hooks.get(name)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def hooks(self, name: str) -> tuple[Hook, ...]:
        return tuple(self._hooks.get(name, ()))

    def run_hook(self, name: str) -> None:
        for callback in list(self._hooks.get(name, ())):
            callback()

    def with_feature(self, feature: str, callback: Callable[[], None]) -> None:
        if feature in self._features:
            callback()
        else:
            self._feature_waiters.setdefault(feature, []).append(callback)

    def provide(self, feature: str) -> None:
        """Mark ``feature`` as loaded and run deferred registrations."""

        if feature in self._features:
            return
        self._features.add(feature)
        for callback in self._feature_waiters.pop(feature, []):
            callback()

    def feature_loaded(self, feature: str) -> bool:
        return feature in self._features

    # -- buffers and minibuffer -----------------------------------------

    def current_buffer(self) -> str:
        return self._buffer

    def switch_to_buffer(self, name: str) -> None:
        self._buffer = name

    def read_from_minibuffer(self, reader: Callable[[], Any]) -> Any:
        """Run ``reader`` between the minibuffer setup and exit hooks."""

        self.run_hook(MINIBUFFER_SETUP_HOOK)
        try:
            return reader()
        finally:
            self.run_hook(MINIBUFFER_EXIT_HOOK)


__all__ = [
    "InMemoryHost",
    "MINIBUFFER_EXIT_HOOK",
    "MINIBUFFER_SETUP_HOOK",
    "TimerHandle",
]
