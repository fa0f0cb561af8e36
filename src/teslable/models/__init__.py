"""Data models for commands, request parameters and vehicle state."""

from teslable.models._base import BridgeBaseModel, StateEnum
from teslable.models.commands import Command, CommandKind
from teslable.models.params import (
    ChargeEnableParams,
    ChargingAmpsParams,
    CommandParams,
    Int32String,
    SocLimitParams,
    parse_int32_string,
)
from teslable.models.state import ChargeState, ChargeStateCode, ChargingState, VehicleState

__all__ = [
    "BridgeBaseModel",
    "ChargeEnableParams",
    "ChargeState",
    "ChargeStateCode",
    "ChargingAmpsParams",
    "ChargingState",
    "Command",
    "CommandKind",
    "CommandParams",
    "Int32String",
    "SocLimitParams",
    "StateEnum",
    "VehicleState",
    "parse_int32_string",
]
