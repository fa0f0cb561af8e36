"""Command registry keys.

Every command the bridge understands is a :class:`Command` member. The
member's :attr:`Command.kind` decides the dispatch path: action commands
mutate vehicle state and go through the retry engine, data commands read
vehicle state once and return a typed scalar.
"""

from __future__ import annotations

import enum

from teslable.exceptions import CommandNotFoundError


class CommandKind(enum.StrEnum):
    """Dispatch path of a command."""

    ACTION = "action"
    DATA = "data"


class Command(enum.StrEnum):
    """Command names as they appear in the request path."""

    PAIR = "pair"
    WAKE_UP = "wake_up"
    SET_CHARGING_AMPS = "set_charging_amps"
    SET_SOC_LIMIT = "set_soc_limit"
    CHARGE = "charge"
    CHARGE_START = "charge_start"
    CHARGE_STOP = "charge_stop"

    GET_SOC = "get_soc"
    GET_SOC_LIMIT = "get_soc_limit"
    GET_BATTERY_RANGE = "get_battery_range"
    GET_CHARGE_STATE = "get_charge_state"

    @property
    def kind(self) -> CommandKind:
        if self in _DATA_COMMANDS:
            return CommandKind.DATA
        return CommandKind.ACTION

    @property
    def is_data(self) -> bool:
        return self.kind is CommandKind.DATA

    @classmethod
    def resolve(cls, name: str) -> Command:
        """Return the command named *name*.

        Raises :class:`~teslable.exceptions.CommandNotFoundError` for
        names outside the registry.
        """
        try:
            return cls(name)
        except ValueError:
            raise CommandNotFoundError(name) from None


_DATA_COMMANDS: frozenset[Command] = frozenset(
    {
        Command.GET_SOC,
        Command.GET_SOC_LIMIT,
        Command.GET_BATTERY_RANGE,
        Command.GET_CHARGE_STATE,
    }
)
