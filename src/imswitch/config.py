"""User configuration with ``IMSWITCH_*`` environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from imswitch.keymaps import KeySequence
from imswitch.remote import DEFAULT_COMMAND

ENV_PREFIX = "IMSWITCH_"

DEFAULT_PREFIX_KEYS: tuple[str, ...] = ("C-x", "C-c")


@dataclass(slots=True)
class SwitchConfig:
    remote_command: str = DEFAULT_COMMAND
    poll_interval_ms: int = 100
    prefix_keys: tuple[str, ...] = DEFAULT_PREFIX_KEYS
    extended_command_key: str = "M-x"
    modal_feature: str = "evil"
    modal_entry_hook: str = "evil-insert-state-entry-hook"
    modal_exit_hook: str = "evil-insert-state-exit-hook"

    def __post_init__(self) -> None:
        if self.poll_interval_ms <= 0:
            raise ValueError("poll_interval_ms must be positive")
        if not self.remote_command:
            raise ValueError("remote_command cannot be empty")
        for notation in (*self.prefix_keys, self.extended_command_key):
            KeySequence.parse(notation)

    @property
    def poll_interval(self) -> float:
        return self.poll_interval_ms / 1000.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SwitchConfig":
        env = os.environ if environ is None else environ

        def read(name: str) -> Optional[str]:
            value = env.get(f"{ENV_PREFIX}{name}")
            return value.strip() if value is not None and value.strip() else None

        kwargs: dict[str, object] = {}
        remote = read("REMOTE")
        if remote:
            kwargs["remote_command"] = remote
        interval = read("POLL_INTERVAL_MS")
        if interval:
            try:
                kwargs["poll_interval_ms"] = int(interval)
            except ValueError as exc:
                raise ValueError(
                    f"{ENV_PREFIX}POLL_INTERVAL_MS must be an integer, got {interval!r}"
                ) from exc
        keys = read("PREFIX_KEYS")
        if keys:
            kwargs["prefix_keys"] = tuple(
                part.strip() for part in keys.split(",") if part.strip()
            )
        extended = read("EXTENDED_COMMAND_KEY")
        if extended:
            kwargs["extended_command_key"] = extended
        return cls(**kwargs)  # type: ignore[arg-type]


__all__ = ["DEFAULT_PREFIX_KEYS", "ENV_PREFIX", "SwitchConfig"]
