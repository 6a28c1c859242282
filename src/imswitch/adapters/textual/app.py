"""Executable Textual app that shows imswitch reacting to key input."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Log, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use imswitch.adapters.textual.app"
    ) from exc

from imswitch.config import SwitchConfig
from imswitch.remote import FcitxRemote, InMemoryRemote, InputMethodRemote
from imswitch.switcher import InputMethodSwitcher

from .controller import (
    SwitcherController,
    TextualHost,
    TextualUIHooks,
    install_demo_commands,
    key_to_notation,
)


@dataclass
class UIState:
    status_text: str = ""


class ImSwitchDemoApp(App[None]):
    """Minimal Textual UI wiring key presses through an in-memory host."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#event-log {
		height: 1fr;
		border: round $accent;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        config: SwitchConfig | None = None,
        use_fcitx: bool = False,
        aggressive: bool = False,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._config = config or SwitchConfig()
        self._use_fcitx = use_fcitx
        self._aggressive = aggressive
        self.switcher: InputMethodSwitcher | None = None
        self.controller: SwitcherController | None = None
        self._status_widget: Static | None = None
        self._log_widget: Log | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="log-area"):
            self._log_widget = Log(id="event-log")
            yield self._log_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        host = TextualHost(self)
        install_demo_commands(host)
        remote: InputMethodRemote
        if self._use_fcitx:
            remote = FcitxRemote(self._config.remote_command)
        else:
            remote = InMemoryRemote()
        self.switcher = InputMethodSwitcher(host, remote=remote, config=self._config)
        if self._aggressive:
            self.switcher.aggressive_setup()
        else:
            self.switcher.default_setup()
        hooks = TextualUIHooks(update_status=self._update_status, log=self._log_line)
        self.controller = SwitcherController(self.switcher, host, hooks)
        self.set_interval(0.5, self.controller.refresh)
        self.controller.refresh()

    def on_unmount(self) -> None:
        if self.switcher:
            self.switcher.shutdown()

    def on_key(self, event: events.Key) -> None:
        if not self.controller:
            return
        notation = key_to_notation(event.key, event.character)
        if notation is None:
            return
        self.controller.handle_key(notation)
        event.stop()

    def _update_status(self, status: str) -> None:
        if status == self._state.status_text:
            return
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _log_line(self, line: str) -> None:
        if self._log_widget:
            self._log_widget.write_line(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the imswitch Textual demo.")
    add_demo_arguments(parser)
    return parser.parse_args(argv)


def add_demo_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--fcitx",
        action="store_true",
        help="Drive the real fcitx remote instead of an in-memory input method",
    )
    parser.add_argument(
        "--aggressive",
        action="store_true",
        help="Suppress the input method for every minibuffer session",
    )


def run_demo(args: argparse.Namespace) -> None:
    app = ImSwitchDemoApp(
        config=SwitchConfig.from_env(),
        use_fcitx=args.fcitx,
        aggressive=args.aggressive,
    )
    app.run()


def main(argv: Optional[Sequence[str]] = None) -> None:
    run_demo(_parse_args(argv))


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
