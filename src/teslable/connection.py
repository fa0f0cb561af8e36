"""Connection lifecycle: open, connect, handshake and guaranteed teardown.

Every command execution gets its own connection. :func:`prepare_connection`
returns a fully set up :class:`VehicleLink` or raises
:class:`~teslable.exceptions.VehicleConnectionError` after releasing
whatever it had acquired: the transport connection is always closed, the
vehicle handle is disconnected only if ``connect`` had succeeded.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from teslable._constants import ACTION_CONNECT_TIMEOUT, DATA_CONNECT_TIMEOUT
from teslable._transport import Connection, Domain, VehicleHandle
from teslable.exceptions import VehicleConnectionError
from teslable.models.commands import Command

if TYPE_CHECKING:
    from teslable.runtime import BridgeRuntime

_logger = logging.getLogger(__name__)


def connect_timeout(command: Command) -> float:
    """Setup budget: short for data reads, long for everything else."""
    return DATA_CONNECT_TIMEOUT if command.is_data else ACTION_CONNECT_TIMEOUT


def session_domains(command: Command) -> list[Domain] | None:
    """Domains to handshake with; ``None`` means all of them.

    A sleeping vehicle only answers on the security domain, so waking it
    must not wait for the others.
    """
    if command is Command.WAKE_UP:
        return [Domain.VCSEC]
    return None


@dataclass(slots=True)
class VehicleLink:
    """A connected, session-established vehicle and its transport connection."""

    vin: str
    vehicle: VehicleHandle
    connection: Connection
    _closed: bool = False

    async def close(self) -> None:
        """Disconnect the vehicle, then close the connection (idempotent).

        Teardown failures are logged and never raised, so they cannot
        change the outcome of the command that ran on this link.
        """
        if self._closed:
            return
        self._closed = True
        await _disconnect_quietly(self.vehicle, self.vin)
        await _close_quietly(self.connection, self.vin)


async def _close_quietly(connection: Connection, vin: str) -> None:
    try:
        await connection.close()
    except Exception:
        _logger.warning("Closing connection to VIN %s failed", vin, exc_info=True)


async def _disconnect_quietly(vehicle: VehicleHandle, vin: str) -> None:
    try:
        await vehicle.disconnect()
    except Exception:
        _logger.warning("Disconnecting vehicle %s failed", vin, exc_info=True)


async def prepare_connection(runtime: BridgeRuntime, vin: str, command: Command) -> VehicleLink:
    """Open a connection to *vin* and make it ready for *command*.

    ``pair`` skips the session handshake (the key is not enrolled yet);
    ``wake_up`` only handshakes with the security domain. The caller owns
    the returned link and must :meth:`VehicleLink.close` it.
    """
    timeout = connect_timeout(command)
    stage = "open"
    connection: Connection | None = None
    vehicle: VehicleHandle | None = None
    connected = False
    try:
        async with asyncio.timeout(timeout):
            connection = await runtime.backend.open_connection(vin)
            stage = "vehicle"
            vehicle = runtime.backend.new_vehicle(connection, runtime.keys.private_key, runtime.session_cache)
            stage = "connect"
            await vehicle.connect()
            connected = True
            if command is not Command.PAIR:
                stage = "handshake"
                await vehicle.start_session(session_domains(command))
    except BaseException as exc:
        if connected and vehicle is not None:
            await _disconnect_quietly(vehicle, vin)
        if connection is not None:
            await _close_quietly(connection, vin)
        if stage == "handshake" and runtime.session_cache is not None:
            runtime.session_cache.invalidate(vin)
        if not isinstance(exc, Exception):
            raise
        raise _connection_error(exc, vin, stage, timeout) from exc

    assert vehicle is not None and connection is not None  # noqa: S101
    _logger.debug("Connected to VIN %s for command %s", vin, command)
    return VehicleLink(vin=vin, vehicle=vehicle, connection=connection)


_STAGE_MESSAGES = {
    "open": "failed to create BLE connection to vehicle",
    "vehicle": "failed to create vehicle",
    "connect": "failed to connect to vehicle",
    "handshake": "failed to perform handshake with vehicle",
}


def _connection_error(exc: Exception, vin: str, stage: str, timeout: float) -> VehicleConnectionError:
    reason = f"timed out after {timeout:g}s" if isinstance(exc, TimeoutError) else str(exc)
    return VehicleConnectionError(f"{_STAGE_MESSAGES[stage]}: {reason}", vin=vin, stage=stage)


@asynccontextmanager
async def vehicle_connection(runtime: BridgeRuntime, vin: str, command: Command) -> AsyncIterator[VehicleHandle]:
    """Context manager around :func:`prepare_connection` that always tears down."""
    link = await prepare_connection(runtime, vin, command)
    try:
        yield link.vehicle
    finally:
        await link.close()
