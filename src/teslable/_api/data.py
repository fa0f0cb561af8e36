"""Data command handlers.

A data handler reads the charge state category once and returns a typed
scalar. Failures raise :class:`~teslable.exceptions.DataReadError`
carrying the value the handler reports for an unreadable vehicle.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping

from teslable._constants import DATA_HANDLER_TIMEOUT
from teslable._transport import StateCategory, VehicleHandle
from teslable.exceptions import CommandNotFoundError, DataReadError
from teslable.models.commands import Command, CommandKind
from teslable.models.state import ChargeState, ChargeStateCode

DataValue = int | float | str
DataHandler = Callable[[VehicleHandle], Awaitable[DataValue]]


async def _read_charge_state(vehicle: VehicleHandle, command: Command, fallback: DataValue) -> ChargeState:
    try:
        async with asyncio.timeout(DATA_HANDLER_TIMEOUT):
            state = await vehicle.get_state(StateCategory.CHARGE)
    except TimeoutError as exc:
        raise DataReadError("failed to get state: timed out", command=command, fallback=fallback) from exc
    except Exception as exc:
        raise DataReadError(f"failed to get state: {exc}", command=command, fallback=fallback) from exc
    return state.charge()


async def get_soc(vehicle: VehicleHandle) -> int:
    charge = await _read_charge_state(vehicle, Command.GET_SOC, 0)
    return charge.battery_level


async def get_soc_limit(vehicle: VehicleHandle) -> int:
    charge = await _read_charge_state(vehicle, Command.GET_SOC_LIMIT, 0)
    return charge.charge_limit_soc


async def get_battery_range(vehicle: VehicleHandle) -> float:
    charge = await _read_charge_state(vehicle, Command.GET_BATTERY_RANGE, 0.0)
    return charge.battery_range


async def get_charge_state(vehicle: VehicleHandle) -> str:
    """Classify the charging sub-state as ``C``, ``B`` or ``A``."""
    charge = await _read_charge_state(vehicle, Command.GET_CHARGE_STATE, ChargeStateCode.A.value)
    return ChargeStateCode.from_charging_state(charge.charging_state).value


DATA_HANDLERS: Mapping[Command, DataHandler] = {
    Command.GET_SOC: get_soc,
    Command.GET_SOC_LIMIT: get_soc_limit,
    Command.GET_BATTERY_RANGE: get_battery_range,
    Command.GET_CHARGE_STATE: get_charge_state,
}


def data_handler(command: Command) -> DataHandler:
    """Return the handler of a data command."""
    if command.kind is not CommandKind.DATA:
        raise CommandNotFoundError(command)
    return DATA_HANDLERS[command]
