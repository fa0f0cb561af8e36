"""Bounded retry of action commands within one held connection."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from teslable._api.actions import ActionContext, ActionHandler
from teslable._constants import COMMAND_ATTEMPTS
from teslable._transport import VehicleHandle
from teslable.exceptions import RetriesExhaustedError

_logger = logging.getLogger(__name__)


def param_names(params: Mapping[str, Any] | None) -> str:
    """Comma separated request parameter names; values are never logged."""
    if not params:
        return "none"
    return ", ".join(sorted(str(key) for key in params))


async def retry_command(
    vin: str,
    command: str,
    vehicle: VehicleHandle,
    handler: ActionHandler,
    params: Mapping[str, Any] | None,
    ctx: ActionContext,
    *,
    attempts: int = COMMAND_ATTEMPTS,
) -> None:
    """Run *handler* up to *attempts* times, stopping at the first success.

    There is no delay between attempts; each handler call is bounded by
    its own timeout. Raises :class:`~teslable.exceptions.RetriesExhaustedError`
    with the final attempt's error once every attempt failed.
    """
    _logger.debug("Parameters of command %s for VIN %s: %s", command, vin, param_names(params))
    last_error: Exception | None = None
    for attempt in range(1, attempts + 1):
        if attempt > 1:
            _logger.info("Retry %d of command %s for VIN %s ...", attempt, command, vin)
        try:
            await handler(vehicle, params, ctx)
        except Exception as exc:
            _logger.warning("Failed to process command %s for VIN %s: %s", command, vin, exc)
            last_error = exc
            continue
        _logger.info("Successfully processed command %s for VIN %s", command, vin)
        return

    _logger.error("Giving up on command %s for VIN %s after %d attempts", command, vin, attempts)
    raise RetriesExhaustedError(command=command, attempts=attempts, last_error=last_error) from last_error
