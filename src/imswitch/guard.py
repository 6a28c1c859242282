"""Guarded activate/deactivate primitive shared by every feature."""

from __future__ import annotations

from typing import Dict, Optional, Protocol

from imswitch.host import EditorHost
from imswitch.remote import InputMethodRemote
from imswitch.runtime import telemetry


class SuppressionFlag(Protocol):
    def get(self) -> bool:
        ...

    def set(self, value: bool) -> None:
        ...


class GlobalFlag:
    """Process-wide suppression flag."""

    def __init__(self) -> None:
        self._value = False

    def get(self) -> bool:
        return self._value

    def set(self, value: bool) -> None:
        self._value = value


class BufferLocalFlag:
    """Suppression flag scoped to the host's current buffer.

    Only the flag is per buffer; the input method itself stays global.
    """

    def __init__(self, host: EditorHost) -> None:
        self._host = host
        self._values: Dict[str, bool] = {}

    def get(self) -> bool:
        return self._values.get(self._host.current_buffer(), False)

    def set(self, value: bool) -> None:
        buffer = self._host.current_buffer()
        if value:
            self._values[buffer] = True
        else:
            self._values.pop(buffer, None)

    def buffers(self) -> tuple[str, ...]:
        return tuple(self._values)


class ToggleGuard:
    """Deactivates the input method and restores it only if it did so itself."""

    def __init__(
        self,
        feature: str,
        remote: InputMethodRemote,
        flag: Optional[SuppressionFlag] = None,
        *,
        logger_name: str | None = None,
    ) -> None:
        if not feature:
            raise ValueError("feature cannot be empty")
        self.feature = feature
        self.remote = remote
        self.flag: SuppressionFlag = flag or GlobalFlag()
        self._logger_name = logger_name

    @property
    def suppressed(self) -> bool:
        return self.flag.get()

    def maybe_deactivate(self) -> bool:
        """Turn the input method off if it is on; return whether it did."""

        with telemetry.span(
            "guard::maybe_deactivate",
            logger_name=self._logger_name,
            component="guard",
            metadata={"feature": self.feature},
        ) as handle:
            if not self.remote.is_active():
                handle.add_metadata("status", "already_inactive")
                return False
            self.remote.deactivate()
            self.flag.set(True)
        telemetry.record_event(
            "guard.deactivate",
            level="debug",
            data={"feature": self.feature},
            logger_name=self._logger_name,
        )
        return True

    def maybe_activate(self) -> bool:
        """Turn the input method back on if this guard turned it off."""

        if not self.flag.get():
            return False
        with telemetry.span(
            "guard::maybe_activate",
            logger_name=self._logger_name,
            component="guard",
            metadata={"feature": self.feature},
        ):
            self.remote.activate()
            self.flag.set(False)
        telemetry.record_event(
            "guard.activate",
            level="debug",
            data={"feature": self.feature},
            logger_name=self._logger_name,
        )
        return True

    def __repr__(self) -> str:
        return f"ToggleGuard(feature={self.feature!r}, suppressed={self.suppressed})"


def make_guard(
    feature: str,
    remote: InputMethodRemote,
    *,
    host: EditorHost | None = None,
    buffer_local: bool = False,
) -> ToggleGuard:
    """Build the guard for ``feature`` with a global or buffer-local flag."""

    if buffer_local:
        if host is None:
            raise ValueError("buffer_local guards require a host")
        flag: SuppressionFlag = BufferLocalFlag(host)
    else:
        flag = GlobalFlag()
    return ToggleGuard(feature, remote, flag, logger_name="imswitch.guard")


__all__ = [
    "BufferLocalFlag",
    "GlobalFlag",
    "SuppressionFlag",
    "ToggleGuard",
    "make_guard",
]
