from __future__ import annotations

from typing import Any, Callable, List

import pytest

from imswitch.adapters.textual import (
    SwitcherController,
    TextualHost,
    TextualUIHooks,
    install_demo_commands,
    key_to_notation,
)
from imswitch.host import InMemoryHost
from imswitch.remote import InMemoryRemote
from imswitch.switcher import InputMethodSwitcher


class FakeTimer:
    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.stopped = False

    def stop(self) -> None:
        self.stopped = True


class FakeApp:
    def __init__(self) -> None:
        self.timers: List[FakeTimer] = []

    def set_interval(self, interval: float, callback: Callable[[], None]) -> Any:
        timer = FakeTimer(interval, callback)
        self.timers.append(timer)
        return timer


@pytest.mark.parametrize(
    ("key", "character", "expected"),
    [
        ("ctrl+x", "\x18", "C-x"),
        ("escape", None, "ESC"),
        ("f2", None, "<f2>"),
        ("a", "a", "a"),
        ("alt+exclamation_mark", "!", "M-!"),
        ("ctrl+alt+f", None, "C-M-f"),
        ("enter", "\r", "RET"),
    ],
)
def test_key_to_notation(key: str, character: str | None, expected: str) -> None:
    assert key_to_notation(key, character) == expected


def test_key_to_notation_rejects_unknown_modifier() -> None:
    assert key_to_notation("hyperx+a", "a") is None


def test_textual_host_uses_app_intervals() -> None:
    app = FakeApp()
    host = TextualHost(app)
    calls: List[str] = []

    handle = host.run_with_timer(0.1, lambda: calls.append("tick"))
    app.timers[0].callback()
    host.cancel_timer(handle)

    assert calls == ["tick"]
    assert app.timers[0].stopped is True


def test_controller_reports_state_through_hooks() -> None:
    host = InMemoryHost()
    install_demo_commands(host)
    remote = InMemoryRemote(active=True)
    switcher = InputMethodSwitcher(host, remote=remote)
    switcher.default_setup()
    statuses: List[str] = []
    lines: List[str] = []
    controller = SwitcherController(
        switcher,
        host,
        TextualUIHooks(update_status=statuses.append, log=lines.append),
    )

    controller.handle_key("C-x")
    host.advance(0.15)
    controller.refresh()

    assert "keys ctrl+x" in statuses[0]
    assert statuses[-1].startswith("IM inactive")
    assert lines[0].startswith("key ->")

    controller.handle_key("C-f")
    host.advance(0.15)
    controller.refresh()

    assert statuses[-1].startswith("IM active")
    assert "find-file" in lines[-1]


def test_demo_commands_drive_modal_hooks() -> None:
    host = InMemoryHost()
    install_demo_commands(host)
    remote = InMemoryRemote(active=True)
    switcher = InputMethodSwitcher(host, remote=remote)
    switcher.default_setup()

    host.press("ESC")
    assert remote.active is False

    host.press("<f2>")
    assert remote.active is True
