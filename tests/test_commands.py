from __future__ import annotations

from typing import List

import pytest

from imswitch.errors import UnrecognizedBindingError
from imswitch.features import (
    EXTENDED_COMMANDS,
    SHELL_COMMAND,
    CommandInterceptor,
    SwitchContext,
    resolve_extended_command,
)
from imswitch.guard import make_guard
from imswitch.host import InMemoryHost
from imswitch.remote import InMemoryRemote


def make_interceptor(
    command: str = SHELL_COMMAND, *, active: bool = True
) -> tuple[CommandInterceptor, InMemoryHost, InMemoryRemote]:
    host = InMemoryHost()
    remote = InMemoryRemote(active=active)
    context = SwitchContext(host=host, remote=remote)
    interceptor = CommandInterceptor(
        context, make_guard("minibuffer-command", remote), command
    )
    return interceptor, host, remote


def test_wrapped_command_runs_with_input_method_off() -> None:
    interceptor, host, remote = make_interceptor()
    seen: List[bool] = []

    def read_shell_command(prompt: str) -> str:
        seen.append(remote.active)
        return f"{prompt}ls"

    host.define_command(SHELL_COMMAND, read_shell_command)
    interceptor.turn_on()

    assert host.call(SHELL_COMMAND, "$ ") == "$ ls"
    assert seen == [False]
    assert remote.active is True
    assert remote.calls == ["status", "deactivate", "activate"]


def test_restores_input_method_when_command_fails() -> None:
    interceptor, host, remote = make_interceptor()

    def read_shell_command(prompt: str) -> str:
        raise KeyboardInterrupt

    host.define_command(SHELL_COMMAND, read_shell_command)
    interceptor.turn_on()

    with pytest.raises(KeyboardInterrupt):
        host.call(SHELL_COMMAND, "$ ")

    assert remote.count("activate") == 1
    assert remote.active is True
    assert interceptor.guard.suppressed is False


def test_turn_on_twice_wraps_once() -> None:
    interceptor, host, remote = make_interceptor()
    host.define_command(SHELL_COMMAND, lambda: None)

    interceptor.turn_on()
    interceptor.turn_on()
    host.call(SHELL_COMMAND)

    assert len(host.advice_for(SHELL_COMMAND)) == 1
    assert remote.count("status") == 1
    assert remote.count("deactivate") == 1


def test_turn_off_removes_wrapper() -> None:
    interceptor, host, remote = make_interceptor()
    host.define_command(SHELL_COMMAND, lambda: None)
    interceptor.turn_on()

    interceptor.turn_off()
    interceptor.turn_off()
    host.call(SHELL_COMMAND)

    assert interceptor.active is False
    assert host.advice_for(SHELL_COMMAND) == ()
    assert remote.calls == []


def test_inactive_input_method_is_not_touched() -> None:
    interceptor, host, remote = make_interceptor(active=False)
    host.define_command(SHELL_COMMAND, lambda: None)
    interceptor.turn_on()

    host.call(SHELL_COMMAND)

    assert remote.calls == ["status"]
    assert remote.active is False


@pytest.mark.parametrize("command", EXTENDED_COMMANDS)
def test_resolve_extended_command_known_implementations(command: str) -> None:
    host = InMemoryHost()
    host.bind_key("M-x", command)

    assert resolve_extended_command(host) == command


def test_resolve_extended_command_rejects_unknown_binding() -> None:
    host = InMemoryHost()
    host.bind_key("M-x", "counsel-M-x")

    with pytest.raises(UnrecognizedBindingError) as excinfo:
        resolve_extended_command(host)

    assert excinfo.value.command == "counsel-M-x"
    assert "execute-extended-command" in str(excinfo.value)
    assert "helm-M-x" in str(excinfo.value)


def test_resolve_extended_command_rejects_unbound_key() -> None:
    with pytest.raises(UnrecognizedBindingError) as excinfo:
        resolve_extended_command(InMemoryHost(), "C-c x")

    assert excinfo.value.command is None
    assert "nothing" in str(excinfo.value)
