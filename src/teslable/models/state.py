"""Vehicle state snapshot models."""

from __future__ import annotations

import enum

from pydantic import Field

from teslable.models._base import BridgeBaseModel, StateEnum


class ChargingState(StateEnum):
    """Charging sub-state reported in the charge state category."""

    UNKNOWN = "unknown"
    DISCONNECTED = "disconnected"
    NO_POWER = "no_power"
    STARTING = "starting"
    CHARGING = "charging"
    COMPLETE = "complete"
    STOPPED = "stopped"
    CALIBRATING = "calibrating"


class ChargeStateCode(enum.StrEnum):
    """Ternary charge state classification returned by ``get_charge_state``.

    * ``C`` - actively charging
    * ``B`` - plugged in but not charging (stopped, no power, complete)
    * ``A`` - anything else, including unknown, disconnected and read errors
    """

    A = "A"
    B = "B"
    C = "C"

    @classmethod
    def from_charging_state(cls, state: ChargingState) -> ChargeStateCode:
        if state is ChargingState.CHARGING:
            return cls.C
        if state in (ChargingState.STOPPED, ChargingState.NO_POWER, ChargingState.COMPLETE):
            return cls.B
        return cls.A


class ChargeState(BridgeBaseModel):
    """Charge state category of a vehicle state snapshot."""

    battery_level: int = 0
    """State of charge in percent."""

    charge_limit_soc: int = 0
    """Configured charge limit in percent."""

    battery_range: float = 0.0
    """Estimated range."""

    charging_state: ChargingState = ChargingState.UNKNOWN


class VehicleState(BridgeBaseModel):
    """State snapshot returned by ``VehicleHandle.get_state``.

    Categories the vehicle did not report are ``None``.
    """

    charge_state: ChargeState | None = Field(default=None)

    def charge(self) -> ChargeState:
        """Charge state, or an all-zero :class:`ChargeState` when unset."""
        return self.charge_state if self.charge_state is not None else ChargeState()
