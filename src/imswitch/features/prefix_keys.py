"""Polling monitor that suppresses the input method after prefix keys."""

from __future__ import annotations

from typing import Any, Literal, Optional

from imswitch.config import DEFAULT_PREFIX_KEYS
from imswitch.guard import ToggleGuard
from imswitch.keymaps import KeySequence, TriggerKeySet
from imswitch.runtime import telemetry

from .base import Feature, SwitchContext

TickOutcome = Literal["deactivate", "activate", "idle"]


class PrefixKeyMonitor(Feature):
    """Checks the latest key input on a repeating timer.

    A trigger prefix just typed suppresses the input method; an empty
    command-key vector (a fresh command boundary) restores it. Anything else
    is mid-sequence input and left alone.
    """

    name = "prefix-keys"

    def __init__(
        self,
        context: SwitchContext,
        guard: ToggleGuard,
        *,
        triggers: Optional[TriggerKeySet] = None,
        interval_ms: Optional[int] = None,
    ) -> None:
        super().__init__(context, guard)
        if triggers is None:
            triggers = TriggerKeySet(logger_name="imswitch.keymaps")
        self.triggers = triggers
        if interval_ms is None:
            interval_ms = context.config.poll_interval_ms
        self.interval_ms = interval_ms
        if self.interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self._timer: Optional[Any] = None

    @property
    def active(self) -> bool:
        return self._timer is not None

    def add_keys(self, notation: str) -> KeySequence:
        return self.triggers.add(notation)

    def use_default_keys(self) -> None:
        for notation in DEFAULT_PREFIX_KEYS:
            self.add_keys(notation)

    def tick(self) -> TickOutcome:
        host = self.context.host
        if self.triggers.matches(host.this_single_command_keys()):
            self.guard.maybe_deactivate()
            return "deactivate"
        if not host.this_command_keys():
            self.guard.maybe_activate()
            return "activate"
        return "idle"

    def turn_on(self) -> None:
        if self._timer is not None:
            return
        self._timer = self.context.host.run_with_timer(
            self.interval_ms / 1000.0, self.tick
        )
        telemetry.record_event(
            "prefix_keys.timer_start",
            data={"interval_ms": self.interval_ms, "triggers": len(self.triggers)},
        )

    def turn_off(self) -> None:
        if self._timer is None:
            return
        self.context.host.cancel_timer(self._timer)
        self._timer = None
        telemetry.record_event("prefix_keys.timer_stop")


__all__ = ["PrefixKeyMonitor", "TickOutcome"]
