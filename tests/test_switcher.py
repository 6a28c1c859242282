from __future__ import annotations

from typing import List

import pytest

from imswitch import (
    InputMethodSwitcher,
    MissingDependencyError,
    SwitchConfig,
    UnrecognizedBindingError,
)
from imswitch.features import EVAL_EXPRESSION, READ_FUNCTIONS, SHELL_COMMAND
from imswitch.host import MINIBUFFER_EXIT_HOOK, MINIBUFFER_SETUP_HOOK, InMemoryHost
from imswitch.remote import InMemoryRemote


def make_host(extended: str = "execute-extended-command") -> InMemoryHost:
    host = InMemoryHost()
    for command in (extended, SHELL_COMMAND, EVAL_EXPRESSION, "find-file"):
        host.define_command(command, lambda: None)
    host.bind_key("M-x", extended)
    host.bind_key("C-x C-f", "find-file")
    host.provide("evil")
    return host


def make_switcher(
    host: InMemoryHost | None = None,
    *,
    available: bool = True,
    config: SwitchConfig | None = None,
) -> tuple[InputMethodSwitcher, InMemoryHost, InMemoryRemote]:
    host = host or make_host()
    remote = InMemoryRemote(active=True, available=available, command="fcitx-remote")
    switcher = InputMethodSwitcher(host, remote=remote, config=config)
    return switcher, host, remote


def test_default_setup_activates_every_default_feature() -> None:
    switcher, host, _ = make_switcher()

    switcher.default_setup()

    assert switcher.active_features() == (
        "prefix-keys",
        "modal",
        "command:execute-extended-command",
        f"command:{SHELL_COMMAND}",
        f"command:{EVAL_EXPRESSION}",
    )
    assert len(host.timers) == 1
    assert len(switcher.prefix_keys.triggers) == 2


def test_default_setup_without_executable_activates_nothing() -> None:
    switcher, host, remote = make_switcher(available=False)

    with pytest.raises(MissingDependencyError) as excinfo:
        switcher.default_setup()

    assert excinfo.value.command == "fcitx-remote"
    assert switcher.active_features() == ()
    assert host.timers == ()
    assert host.advice_for("execute-extended-command") == ()
    assert remote.calls == []


def test_default_setup_with_unknown_extended_command_activates_nothing() -> None:
    switcher, host, _ = make_switcher(make_host("counsel-M-x"))

    with pytest.raises(UnrecognizedBindingError):
        switcher.default_setup()

    assert switcher.active_features() == ()
    assert host.timers == ()


def test_default_setup_wraps_enhanced_extended_command() -> None:
    switcher, host, _ = make_switcher(make_host("smex"))

    switcher.default_setup()

    assert switcher.extended_command is not None
    assert switcher.extended_command.command == "smex"
    assert len(host.advice_for("smex")) == 1


def test_default_setup_twice_does_not_duplicate() -> None:
    switcher, host, _ = make_switcher()

    switcher.default_setup()
    switcher.default_setup()

    assert len(host.timers) == 1
    assert len(switcher.prefix_keys.triggers) == 2
    assert len(host.advice_for(SHELL_COMMAND)) == 1


def test_extended_command_suppresses_while_running() -> None:
    host = make_host()
    seen: List[bool] = []
    switcher, _, remote = make_switcher(host)
    host.define_command(
        "execute-extended-command", lambda: seen.append(remote.active)
    )
    switcher.default_setup()

    host.press("M-x")

    assert seen == [False]
    assert remote.active is True


def test_prefix_and_modal_features_cooperate() -> None:
    switcher, host, remote = make_switcher()
    switcher.default_setup()

    host.press("C-x")
    host.advance(0.15)
    assert remote.active is False

    host.press("C-f")
    host.advance(0.15)
    assert remote.active is True

    host.run_hook("evil-insert-state-exit-hook")
    host.advance(0.15)
    assert remote.active is False
    assert switcher.modal.guard.suppressed is True


def test_aggressive_setup_suppresses_every_minibuffer() -> None:
    switcher, host, remote = make_switcher()
    seen: List[bool] = []

    switcher.aggressive_setup()
    host.read_from_minibuffer(lambda: seen.append(remote.active))

    assert "aggressive-minibuffer" in switcher.active_features()
    assert f"command:{SHELL_COMMAND}" not in switcher.active_features()
    assert seen == [False]
    assert remote.active is True


def test_read_functions_are_opt_in() -> None:
    switcher, host, remote = make_switcher()
    for name in READ_FUNCTIONS:
        host.define_command(name, lambda: "y")

    switcher.enable_read_functions()
    assert host.call("read-char") == "y"
    assert remote.calls == ["status", "deactivate", "activate"]

    switcher.disable_read_functions()
    remote.reset_calls()
    host.call("read-key")
    assert remote.calls == []


def test_shutdown_turns_everything_off() -> None:
    switcher, host, _ = make_switcher()
    switcher.default_setup()
    switcher.aggressive_setup()

    switcher.shutdown()
    switcher.shutdown()

    assert switcher.active_features() == ()
    assert host.timers == ()
    assert host.hooks(MINIBUFFER_SETUP_HOOK) == ()
    assert host.hooks(MINIBUFFER_EXIT_HOOK) == ()
    assert host.hooks("evil-insert-state-entry-hook") == ()
    assert host.advice_for("execute-extended-command") == ()


def test_custom_config_prefix_keys() -> None:
    config = SwitchConfig(prefix_keys=("C-c",), poll_interval_ms=50)
    switcher, host, remote = make_switcher(config=config)
    switcher.default_setup()

    host.press("C-x")
    host.advance(0.1)

    assert remote.active is True
    assert host.timers[0].interval == pytest.approx(0.05)
