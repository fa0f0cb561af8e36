"""Request dispatch: command resolution, wake escalation and execution.

A request names a VIN and a command. Unknown commands fail before the
vehicle is contacted. Action commands that need an awake vehicle are
preceded by a full ``wake_up`` command and a settle delay; data commands
run once on a short-timeout connection, action commands through the
retry engine on a long-timeout one. Every execution opens and closes its
own connection.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from teslable._api.actions import ActionContext, action_handler
from teslable._api.data import DataValue, data_handler
from teslable._transport import VehicleHandle
from teslable.connection import vehicle_connection
from teslable.exceptions import BadRequestError, CommandNotFoundError, TeslaBleError, WakeUpError
from teslable.models.commands import Command
from teslable.policy import needs_wake_up
from teslable.retry import retry_command
from teslable.runtime import BridgeRuntime

_logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Execute named commands against vehicles.

    Parameters
    ----------
    runtime:
        Configuration, keys and backend.
    sleep:
        Coroutine used for the settle delay after waking the vehicle.
    """

    def __init__(
        self,
        runtime: BridgeRuntime,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._runtime = runtime
        self._sleep = sleep

    @property
    def runtime(self) -> BridgeRuntime:
        return self._runtime

    # ------------------------------------------------------------------
    # Request entry points
    # ------------------------------------------------------------------

    async def handle_command(self, vin: str, name: str, params: Mapping[str, Any] | None) -> DataValue | bool:
        """Handle ``POST .../command/{name}``.

        Returns ``True`` for action commands and the read value for data
        commands.
        """
        _require_vin(vin)
        command = Command.resolve(name)
        if needs_wake_up(command):
            await self.wake_up(vin)
        if command.is_data:
            return await self.execute_data_command(vin, command)
        await self.execute_command(vin, command, params)
        return True

    async def handle_data(self, vin: str, name: str) -> DataValue:
        """Handle ``GET .../data/{name}``; only data commands are known here."""
        _require_vin(vin)
        command = Command.resolve(name)
        if not command.is_data:
            raise CommandNotFoundError(name)
        return await self.execute_data_command(vin, command)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def wake_up(self, vin: str) -> None:
        """Wake the vehicle and wait for it to settle.

        Raises :class:`~teslable.exceptions.WakeUpError` when waking fails.
        """
        try:
            await self.execute_command(vin, Command.WAKE_UP, None)
        except TeslaBleError as exc:
            _logger.error("Waking vehicle %s failed, giving up: %s", vin, exc)
            raise WakeUpError(f"waking vehicle failed: {exc}", command=Command.WAKE_UP, vin=vin) from exc
        delay = self._runtime.config.wake_settle_delay
        _logger.debug("Waiting %.1fs for VIN %s to settle after wake-up", delay, vin)
        await self._sleep(delay)

    async def execute_command(self, vin: str, command: Command, params: Mapping[str, Any] | None) -> None:
        """Run an action command through the retry engine on a fresh connection."""
        handler = action_handler(command)
        _logger.info("Executing command %s for VIN %s ...", command, vin)
        ctx = ActionContext(vin=vin, public_key=self._runtime.keys.public_key)
        async with vehicle_connection(self._runtime, vin, command) as vehicle:
            await retry_command(
                vin,
                command,
                vehicle,
                handler,
                params,
                ctx,
                attempts=self._runtime.config.command_attempts,
            )
            await self._update_session_cache(vin, vehicle)

    async def execute_data_command(self, vin: str, command: Command) -> DataValue:
        """Run a data command once on a fresh connection."""
        handler = data_handler(command)
        _logger.info("Executing get data command %s for VIN %s ...", command, vin)
        async with vehicle_connection(self._runtime, vin, command) as vehicle:
            value = await handler(vehicle)
            await self._update_session_cache(vin, vehicle)
        return value

    async def _update_session_cache(self, vin: str, vehicle: VehicleHandle) -> None:
        cache = self._runtime.session_cache
        if cache is None:
            return
        try:
            await vehicle.update_cached_sessions(cache)
        except Exception:
            _logger.warning("Updating cached sessions for VIN %s failed", vin, exc_info=True)


def _require_vin(vin: str) -> None:
    if not vin or not vin.strip():
        raise BadRequestError("missing VIN")
