"""Command-line entry point: query or flip the input method, or run the demo."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from imswitch.config import SwitchConfig
from imswitch.errors import MissingDependencyError
from imswitch.remote import FcitxRemote, detect_remote_command
from imswitch.runtime import telemetry


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imswitch",
        description="Control the input method engine used by imswitch.",
    )
    parser.add_argument(
        "--remote",
        default=None,
        help="Remote executable (default: IMSWITCH_REMOTE or fcitx-remote)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="Telemetry preset to apply before running",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("status", help="Print 'active' or 'inactive'")
    sub.add_parser("activate", help="Turn the input method on")
    sub.add_parser("deactivate", help="Turn the input method off")
    demo = sub.add_parser("demo", help="Run the Textual demo")
    demo.add_argument("--fcitx", action="store_true", help="Use the real remote")
    demo.add_argument(
        "--aggressive", action="store_true", help="Use the aggressive setup"
    )
    return parser


def _make_remote(args: argparse.Namespace) -> FcitxRemote:
    config = SwitchConfig.from_env()
    command = args.remote or detect_remote_command(config.remote_command)
    remote = FcitxRemote(command)
    if not remote.is_available():
        raise MissingDependencyError(command)
    return remote


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)

    if args.command == "demo":
        from imswitch.adapters.textual.app import run_demo

        run_demo(args)
        return 0

    try:
        remote = _make_remote(args)
    except MissingDependencyError as exc:
        print(f"imswitch: {exc}", file=sys.stderr)
        return 2

    if args.command == "status":
        print("active" if remote.is_active() else "inactive")
    elif args.command == "activate":
        remote.activate()
    elif args.command == "deactivate":
        remote.deactivate()
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
