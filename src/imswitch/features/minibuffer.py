"""Suppress the input method for every minibuffer session."""

from __future__ import annotations

from imswitch.guard import ToggleGuard
from imswitch.host import MINIBUFFER_EXIT_HOOK, MINIBUFFER_SETUP_HOOK
from imswitch.runtime import telemetry

from .base import Feature, SwitchContext


class MinibufferObserver(Feature):
    """Deactivates on minibuffer setup and restores on minibuffer exit."""

    name = "aggressive-minibuffer"

    def __init__(self, context: SwitchContext, guard: ToggleGuard) -> None:
        super().__init__(context, guard)
        self._registered = False

    @property
    def active(self) -> bool:
        return self._registered

    def on_setup(self) -> None:
        self.guard.maybe_deactivate()

    def on_exit(self) -> None:
        self.guard.maybe_activate()

    def turn_on(self) -> None:
        if self._registered:
            return
        host = self.context.host
        host.add_hook(MINIBUFFER_SETUP_HOOK, self.on_setup)
        host.add_hook(MINIBUFFER_EXIT_HOOK, self.on_exit)
        self._registered = True
        telemetry.record_event("minibuffer.registered")

    def turn_off(self) -> None:
        if not self._registered:
            return
        host = self.context.host
        host.remove_hook(MINIBUFFER_SETUP_HOOK, self.on_setup)
        host.remove_hook(MINIBUFFER_EXIT_HOOK, self.on_exit)
        self._registered = False
        telemetry.record_event("minibuffer.unregistered")


__all__ = ["MinibufferObserver"]
