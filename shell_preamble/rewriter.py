"""Recognise plain shell-command launches and prepend setup commands."""

import logging
from typing import Optional, Sequence

from shell_preamble.constants import DEFAULT_SEPARATOR
from shell_preamble.models import (
    LaunchKind,
    LaunchRequest,
    OtherLaunch,
    ShellCommand,
    ShellIdentity,
)

logger = logging.getLogger(__name__)


def classify(request: LaunchRequest, shell: ShellIdentity) -> LaunchKind:
    """Return ``ShellCommand`` for ``[shell.path, shell.switch, command]``.

    Both the shell path and the switch are compared as plain strings, so
    ``/usr/bin/sh`` and ``/bin/sh`` are different shells here. Every other
    argument vector, including unrelated three-argument invocations, is
    ``OtherLaunch``.
    """
    argv = request.argv
    if len(argv) == 3 and argv[0] == shell.path and argv[1] == shell.switch:
        return ShellCommand(path=argv[0], switch=argv[1], command=argv[2])
    return OtherLaunch(argv=argv)


def build_command(
    setup_commands: Sequence[str],
    user_command: str,
    separator: str = DEFAULT_SEPARATOR,
) -> str:
    return "".join(command + separator for command in setup_commands) + user_command


class CommandRewriter:
    def __init__(self, shell: Optional[ShellIdentity] = None) -> None:
        self.shell = shell or ShellIdentity()

    def process(
        self,
        request: LaunchRequest,
        setup_commands: Sequence[str],
        separator: str = DEFAULT_SEPARATOR,
    ) -> LaunchRequest:
        if not setup_commands:
            return request

        launch = classify(request, self.shell)
        if isinstance(launch, OtherLaunch):
            logger.debug("Not a plain shell command, passing through: %r", launch.argv)
            return request

        command = build_command(setup_commands, launch.command, separator)
        logger.debug(
            "Prepended %d setup command(s) to %r", len(setup_commands), launch.command
        )
        return request.with_argv((launch.path, launch.switch, command))
