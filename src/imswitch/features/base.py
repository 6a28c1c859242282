"""Shared context and base class for input-method features."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from imswitch.config import SwitchConfig
from imswitch.guard import ToggleGuard
from imswitch.host import EditorHost
from imswitch.remote import InputMethodRemote


@dataclass(slots=True)
class SwitchContext:
    """Services every feature can access."""

    host: EditorHost
    remote: InputMethodRemote
    config: SwitchConfig = field(default_factory=SwitchConfig)
    extras: Dict[str, object] = field(default_factory=dict)


class Feature:
    """Base class for every toggleable policy."""

    name: str = "feature"

    def __init__(self, context: SwitchContext, guard: ToggleGuard) -> None:
        self.context = context
        self.guard = guard

    @property
    def active(self) -> bool:  # pragma: no cover - abstract override
        raise NotImplementedError

    def turn_on(self) -> None:  # pragma: no cover - abstract override
        raise NotImplementedError

    def turn_off(self) -> None:  # pragma: no cover - abstract override
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, active={self.active})"
