"""Hook-driven observer for modal insert-state transitions."""

from __future__ import annotations

from typing import Optional

from imswitch.guard import ToggleGuard
from imswitch.runtime import telemetry

from .base import Feature, SwitchContext


class ModalStateObserver(Feature):
    """Restores the input method on insert entry and suppresses it on exit.

    The guard is expected to carry a buffer-local flag. Switching buffers
    while suppressed is best-effort: the flag follows the buffer, the input
    method does not.
    """

    name = "modal"

    def __init__(
        self,
        context: SwitchContext,
        guard: ToggleGuard,
        *,
        feature: Optional[str] = None,
        entry_hook: Optional[str] = None,
        exit_hook: Optional[str] = None,
    ) -> None:
        super().__init__(context, guard)
        config = context.config
        self.feature = feature or config.modal_feature
        self.entry_hook = entry_hook or config.modal_entry_hook
        self.exit_hook = exit_hook or config.modal_exit_hook
        self._enabled = False
        self._registered = False
        self._waiting = False

    @property
    def active(self) -> bool:
        return self._registered

    @property
    def pending(self) -> bool:
        """Turned on but still waiting for the modal-editing feature."""

        return self._enabled and not self._registered

    def on_insert_entry(self) -> None:
        self.guard.maybe_activate()

    def on_insert_exit(self) -> None:
        self.guard.maybe_deactivate()

    def turn_on(self) -> None:
        if self._enabled:
            return
        self._enabled = True
        if self._waiting:
            return
        self._waiting = True
        self.context.host.with_feature(self.feature, self._register)

    def turn_off(self) -> None:
        self._enabled = False
        if not self._registered:
            return
        host = self.context.host
        host.remove_hook(self.entry_hook, self.on_insert_entry)
        host.remove_hook(self.exit_hook, self.on_insert_exit)
        self._registered = False
        telemetry.record_event("modal.unregistered", data={"feature": self.feature})

    def _register(self) -> None:
        self._waiting = False
        if not self._enabled or self._registered:
            return
        host = self.context.host
        host.add_hook(self.entry_hook, self.on_insert_entry)
        host.add_hook(self.exit_hook, self.on_insert_exit)
        self._registered = True
        telemetry.record_event("modal.registered", data={"feature": self.feature})


__all__ = ["ModalStateObserver"]
