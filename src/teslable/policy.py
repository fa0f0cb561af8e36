"""Wake-escalation policy."""

from __future__ import annotations

from teslable.models.commands import Command

#: Commands that work against a sleeping vehicle.
_NO_WAKE_COMMANDS: frozenset[Command] = frozenset({Command.WAKE_UP, Command.PAIR})


def needs_wake_up(command: Command) -> bool:
    """Whether *command* must be preceded by a successful wake-up.

    Data reads never wake the vehicle; they fail fast if it is asleep.
    """
    if command.is_data:
        return False
    return command not in _NO_WAKE_COMMANDS
