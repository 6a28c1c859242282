"""Subprocess-backed remote for ``fcitx-remote`` / ``fcitx5-remote``."""

from __future__ import annotations

import shutil
import subprocess
from typing import Callable, Optional, Sequence

from imswitch.runtime import telemetry

DEFAULT_COMMAND = "fcitx-remote"
FALLBACK_COMMANDS: tuple[str, ...] = ("fcitx5-remote",)

# First character printed by ``fcitx-remote`` when the engine is active.
ACTIVE_STATUS = "2"


def detect_remote_command(
    preferred: str = DEFAULT_COMMAND,
    *,
    fallbacks: Sequence[str] = FALLBACK_COMMANDS,
    which: Callable[[str], Optional[str]] = shutil.which,
) -> str:
    """Return the first discoverable remote command, else ``preferred``."""

    for candidate in (preferred, *fallbacks):
        if which(candidate):
            return candidate
    return preferred


class FcitxRemote:
    """Runs the remote executable synchronously for every query and command.

    Non-zero exit codes raise ``subprocess.CalledProcessError``; there is no
    timeout and no retry.
    """

    def __init__(self, command: str = DEFAULT_COMMAND) -> None:
        self.command = command

    def is_available(self) -> bool:
        return shutil.which(self.command) is not None

    def is_active(self) -> bool:
        output = self._run()
        return output[:1] == ACTIVE_STATUS

    def activate(self) -> None:
        self._run("-o")

    def deactivate(self) -> None:
        self._run("-c")

    def _run(self, *args: str) -> str:
        argv = [self.command, *args]
        with telemetry.span(
            "remote::run",
            logger_name="imswitch.remote",
            component="remote",
            metadata={"argv": " ".join(argv)},
        ) as handle:
            completed = subprocess.run(
                argv,
                check=True,
                capture_output=True,
                text=True,
            )
            handle.add_metadata("returncode", completed.returncode)
            return completed.stdout

    def __repr__(self) -> str:
        return f"FcitxRemote(command={self.command!r})"


__all__ = [
    "ACTIVE_STATUS",
    "DEFAULT_COMMAND",
    "FALLBACK_COMMANDS",
    "FcitxRemote",
    "detect_remote_command",
]
