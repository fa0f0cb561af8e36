"""Custom exception hierarchy for teslable."""

from __future__ import annotations


class TeslaBleError(Exception):
    """Base exception for all teslable errors."""


class ConfigError(TeslaBleError):
    """Invalid or missing configuration or key material."""


class BadRequestError(TeslaBleError):
    """Malformed request input (missing VIN, undecodable body)."""


class CommandNotFoundError(TeslaBleError):
    """Command name is not in the command registry."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"command not found: {command}")


class VehicleConnectionError(TeslaBleError):
    """Transport connection, vehicle connect or session handshake failed.

    ``stage`` names the setup step that failed (``open``, ``vehicle``,
    ``connect`` or ``handshake``).
    """

    def __init__(self, message: str, *, vin: str = "", stage: str = "") -> None:
        self.vin = vin
        self.stage = stage
        super().__init__(message)


class CommandFailedError(TeslaBleError):
    """A command handler failed (remote rejection or unexpected result)."""

    def __init__(self, message: str, *, command: str = "") -> None:
        self.command = command
        super().__init__(message)


class CommandParamsError(CommandFailedError):
    """A request parameter required by the handler is missing or invalid."""


class DataReadError(CommandFailedError):
    """Reading vehicle state failed.

    ``fallback`` holds the value the handler reports alongside the
    failure so callers may degrade gracefully (``"A"`` for the charge
    state classification, ``0`` for numeric reads).
    """

    def __init__(self, message: str, *, command: str = "", fallback: object = None) -> None:
        self.fallback = fallback
        super().__init__(message, command=command)


class RetriesExhaustedError(TeslaBleError):
    """Command failed on every attempt.

    The final attempt's error is kept as ``last_error`` and chained as
    ``__cause__``.
    """

    def __init__(self, *, command: str, attempts: int, last_error: BaseException | None = None) -> None:
        self.command = command
        self.attempts = attempts
        self.last_error = last_error
        message = f"command {command} failed after {attempts} attempts"
        if last_error is not None:
            message = f"{message}: {last_error}"
        super().__init__(message)


class WakeUpError(TeslaBleError):
    """Waking the vehicle failed, so the requested command was not attempted."""

    def __init__(self, message: str, *, command: str = "", vin: str = "") -> None:
        self.command = command
        self.vin = vin
        super().__init__(message)
