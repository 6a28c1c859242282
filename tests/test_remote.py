from __future__ import annotations

import subprocess
from typing import Any, List

import pytest

from imswitch.remote import FcitxRemote, detect_remote_command
from imswitch.remote import fcitx as fcitx_module


class FakeRun:
    def __init__(self, stdout: str = "", returncode: int = 0) -> None:
        self.stdout = stdout
        self.returncode = returncode
        self.calls: List[List[str]] = []

    def __call__(self, argv: List[str], **kwargs: Any) -> subprocess.CompletedProcess:
        self.calls.append(list(argv))
        assert kwargs["check"] is True
        if self.returncode:
            raise subprocess.CalledProcessError(self.returncode, argv)
        return subprocess.CompletedProcess(argv, 0, stdout=self.stdout, stderr="")


def install(monkeypatch: pytest.MonkeyPatch, fake: FakeRun) -> FakeRun:
    monkeypatch.setattr(fcitx_module.subprocess, "run", fake)
    return fake


@pytest.mark.parametrize(
    ("stdout", "expected"),
    [("2\n", True), ("1\n", False), ("0\n", False), ("", False)],
)
def test_status_reads_first_character(
    monkeypatch: pytest.MonkeyPatch, stdout: str, expected: bool
) -> None:
    fake = install(monkeypatch, FakeRun(stdout=stdout))

    assert FcitxRemote().is_active() is expected
    assert fake.calls == [["fcitx-remote"]]


def test_activate_and_deactivate_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    fake = install(monkeypatch, FakeRun())
    remote = FcitxRemote("fcitx5-remote")

    remote.activate()
    remote.deactivate()

    assert fake.calls == [["fcitx5-remote", "-o"], ["fcitx5-remote", "-c"]]


def test_failures_propagate(monkeypatch: pytest.MonkeyPatch) -> None:
    install(monkeypatch, FakeRun(returncode=1))

    with pytest.raises(subprocess.CalledProcessError):
        FcitxRemote().deactivate()


def test_is_available_uses_path_lookup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        fcitx_module.shutil,
        "which",
        lambda name: "/usr/bin/fcitx5-remote" if name == "fcitx5-remote" else None,
    )

    assert FcitxRemote("fcitx5-remote").is_available() is True
    assert FcitxRemote("fcitx-remote").is_available() is False


def test_detect_prefers_configured_command() -> None:
    found = detect_remote_command("fcitx-remote", which=lambda name: "/bin/" + name)

    assert found == "fcitx-remote"


def test_detect_falls_back_to_fcitx5() -> None:
    def which(name: str) -> str | None:
        return "/usr/bin/fcitx5-remote" if name == "fcitx5-remote" else None

    assert detect_remote_command("fcitx-remote", which=which) == "fcitx5-remote"


def test_detect_returns_preferred_when_nothing_found() -> None:
    assert detect_remote_command("my-remote", which=lambda name: None) == "my-remote"
