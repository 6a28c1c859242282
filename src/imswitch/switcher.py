"""Top-level object owning every feature and the umbrella setups."""

from __future__ import annotations

from typing import Optional

from imswitch.config import SwitchConfig
from imswitch.errors import MissingDependencyError
from imswitch.features import (
    EVAL_EXPRESSION,
    READ_FUNCTIONS,
    SHELL_COMMAND,
    CommandInterceptor,
    Feature,
    MinibufferObserver,
    ModalStateObserver,
    PrefixKeyMonitor,
    SwitchContext,
    resolve_extended_command,
)
from imswitch.guard import make_guard
from imswitch.host import EditorHost
from imswitch.remote import FcitxRemote, InputMethodRemote, detect_remote_command
from imswitch.runtime import telemetry


class InputMethodSwitcher:
    """Builds the features for one host and turns them on or off together.

    Nothing touches the host until a setup method (or a feature's own
    ``turn_on``) is called; ``shutdown`` undoes every registration.
    """

    def __init__(
        self,
        host: EditorHost,
        *,
        remote: InputMethodRemote | None = None,
        config: SwitchConfig | None = None,
    ) -> None:
        self.config = config or SwitchConfig()
        if remote is None:
            remote = FcitxRemote(detect_remote_command(self.config.remote_command))
        self.context = SwitchContext(host=host, remote=remote, config=self.config)
        self.context.extras["switcher"] = self

        self.prefix_keys = PrefixKeyMonitor(
            self.context, make_guard("prefix-keys", remote)
        )
        self.modal = ModalStateObserver(
            self.context,
            make_guard("modal", remote, host=host, buffer_local=True),
        )
        self.minibuffer_guard = make_guard("minibuffer-command", remote)
        self.extended_command: Optional[CommandInterceptor] = None
        self.shell_command = CommandInterceptor(
            self.context, self.minibuffer_guard, SHELL_COMMAND
        )
        self.eval_expression = CommandInterceptor(
            self.context, self.minibuffer_guard, EVAL_EXPRESSION
        )
        read_guard = make_guard("read-funcs", remote)
        self.read_functions = tuple(
            CommandInterceptor(self.context, read_guard, name)
            for name in READ_FUNCTIONS
        )
        self.minibuffer = MinibufferObserver(
            self.context, make_guard("aggressive-minibuffer", remote)
        )

    @property
    def remote(self) -> InputMethodRemote:
        return self.context.remote

    @property
    def host(self) -> EditorHost:
        return self.context.host

    def features(self) -> tuple[Feature, ...]:
        features: list[Feature] = [self.prefix_keys, self.modal]
        if self.extended_command is not None:
            features.append(self.extended_command)
        features.extend((self.shell_command, self.eval_expression))
        features.extend(self.read_functions)
        features.append(self.minibuffer)
        return tuple(features)

    def active_features(self) -> tuple[str, ...]:
        return tuple(feature.name for feature in self.features() if feature.active)

    def require_remote(self) -> None:
        if not self.remote.is_available():
            raise MissingDependencyError(self.remote.command)

    def resolve_extended_command(self) -> CommandInterceptor:
        """Create the interceptor for whatever implements the extended command."""

        if self.extended_command is None:
            command = resolve_extended_command(
                self.host, self.config.extended_command_key
            )
            self.extended_command = CommandInterceptor(
                self.context, self.minibuffer_guard, command
            )
        return self.extended_command

    def configure_prefix_keys(self) -> None:
        if len(self.prefix_keys.triggers):
            return
        for notation in self.config.prefix_keys:
            self.prefix_keys.add_keys(notation)

    def enable_read_functions(self) -> None:
        for interceptor in self.read_functions:
            interceptor.turn_on()

    def disable_read_functions(self) -> None:
        for interceptor in self.read_functions:
            interceptor.turn_off()

    def default_setup(self) -> None:
        """Prefix keys, the three command wrappers and the modal observer.

        Fails before activating anything when the remote executable is missing
        or the extended-command key is bound to an unknown implementation.
        """

        with telemetry.span(
            "switcher::default_setup",
            logger_name="imswitch.switcher",
            component="switcher",
        ) as handle:
            self.require_remote()
            extended = self.resolve_extended_command()
            handle.add_metadata("extended_command", extended.command)

            self.configure_prefix_keys()
            self.prefix_keys.turn_on()
            extended.turn_on()
            self.shell_command.turn_on()
            self.eval_expression.turn_on()
            self.modal.turn_on()
        telemetry.record_event(
            "switcher.setup",
            data={"kind": "default", "features": ",".join(self.active_features())},
        )

    def aggressive_setup(self) -> None:
        """Prefix keys, the whole-minibuffer observer and the modal observer."""

        with telemetry.span(
            "switcher::aggressive_setup",
            logger_name="imswitch.switcher",
            component="switcher",
        ):
            self.require_remote()
            self.configure_prefix_keys()
            self.prefix_keys.turn_on()
            self.minibuffer.turn_on()
            self.modal.turn_on()
        telemetry.record_event(
            "switcher.setup",
            data={"kind": "aggressive", "features": ",".join(self.active_features())},
        )

    def shutdown(self) -> None:
        for feature in self.features():
            feature.turn_off()
        telemetry.record_event("switcher.shutdown")


__all__ = ["InputMethodSwitcher"]
