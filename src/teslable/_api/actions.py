"""Action command handlers.

An action handler mutates vehicle state and either returns ``None`` or
raises :class:`~teslable.exceptions.CommandFailedError`. Every remote
call runs under its own timeout, independent of the connection setup
timeout. Parameter errors are raised before the vehicle is contacted.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from teslable._constants import (
    ACTION_HANDLER_TIMEOUT,
    CHARGE_START_NOOP_MARKERS,
    CHARGE_STOP_NOOP_MARKERS,
)
from teslable._transport import KeyFormFactor, VehicleHandle
from teslable.exceptions import CommandFailedError, CommandNotFoundError
from teslable.models.commands import Command, CommandKind
from teslable.models.params import ChargeEnableParams, ChargingAmpsParams, SocLimitParams

if TYPE_CHECKING:
    from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePublicKey

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActionContext:
    """Per-execution values a handler may need besides the request body."""

    vin: str
    public_key: EllipticCurvePublicKey | None = None


ActionHandler = Callable[[VehicleHandle, Mapping[str, Any] | None, ActionContext], Awaitable[None]]


async def _remote_call(
    command: Command,
    action: str,
    call: Callable[[], Awaitable[None]],
    *,
    noop_markers: tuple[str, ...] = (),
) -> None:
    """Run *call* under the handler timeout.

    Remote errors whose message contains one of *noop_markers* mean the
    vehicle is already in the requested state and count as success.
    """
    try:
        async with asyncio.timeout(ACTION_HANDLER_TIMEOUT):
            await call()
    except TimeoutError as exc:
        raise CommandFailedError(f"failed to {action}: timed out", command=command) from exc
    except Exception as exc:
        message = str(exc)
        if any(marker in message for marker in noop_markers):
            _logger.info("Command %s is a no-op, vehicle reported: %s", command, message)
            return
        raise CommandFailedError(f"failed to {action}: {exc}", command=command) from exc


async def pair(vehicle: VehicleHandle, params: Mapping[str, Any] | None, ctx: ActionContext) -> None:
    public_key = ctx.public_key
    if public_key is None:
        raise CommandFailedError("failed to send add key request: no public key configured", command=Command.PAIR)
    await _remote_call(
        Command.PAIR,
        "send add key request",
        lambda: vehicle.send_add_key_request(public_key, True, KeyFormFactor.UNKNOWN),
    )


async def wake_up(vehicle: VehicleHandle, params: Mapping[str, Any] | None, ctx: ActionContext) -> None:
    await _remote_call(Command.WAKE_UP, "wake up vehicle", vehicle.wakeup)


async def set_charging_amps(vehicle: VehicleHandle, params: Mapping[str, Any] | None, ctx: ActionContext) -> None:
    request = ChargingAmpsParams.from_body(params)
    await _remote_call(
        Command.SET_CHARGING_AMPS,
        "set charging amps",
        lambda: vehicle.set_charging_amps(request.charging_amps),
    )


async def set_soc_limit(vehicle: VehicleHandle, params: Mapping[str, Any] | None, ctx: ActionContext) -> None:
    request = SocLimitParams.from_body(params)
    await _remote_call(
        Command.SET_SOC_LIMIT,
        "set soc limit",
        lambda: vehicle.change_charge_limit(request.soc_limit),
    )


async def charge(vehicle: VehicleHandle, params: Mapping[str, Any] | None, ctx: ActionContext) -> None:
    request = ChargeEnableParams.from_body(params)
    if request.start:
        await charge_start(vehicle, params, ctx)
    else:
        await charge_stop(vehicle, params, ctx)


async def charge_start(vehicle: VehicleHandle, params: Mapping[str, Any] | None, ctx: ActionContext) -> None:
    await _remote_call(
        Command.CHARGE_START,
        "start charging",
        vehicle.charge_start,
        noop_markers=CHARGE_START_NOOP_MARKERS,
    )


async def charge_stop(vehicle: VehicleHandle, params: Mapping[str, Any] | None, ctx: ActionContext) -> None:
    await _remote_call(
        Command.CHARGE_STOP,
        "stop charging",
        vehicle.charge_stop,
        noop_markers=CHARGE_STOP_NOOP_MARKERS,
    )


ACTION_HANDLERS: Mapping[Command, ActionHandler] = {
    Command.PAIR: pair,
    Command.WAKE_UP: wake_up,
    Command.SET_CHARGING_AMPS: set_charging_amps,
    Command.SET_SOC_LIMIT: set_soc_limit,
    Command.CHARGE: charge,
    Command.CHARGE_START: charge_start,
    Command.CHARGE_STOP: charge_stop,
}


def action_handler(command: Command) -> ActionHandler:
    """Return the handler of an action command."""
    if command.kind is not CommandKind.ACTION:
        raise CommandNotFoundError(command)
    return ACTION_HANDLERS[command]
