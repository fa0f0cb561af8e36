from __future__ import annotations

import pytest

from teslable.models.state import ChargeState, ChargeStateCode, ChargingState, VehicleState


def test_charge_state_from_camel_case_payload() -> None:
    state = ChargeState.model_validate(
        {"batteryLevel": 81, "chargeLimitSoc": 90, "batteryRange": 212.5, "chargingState": "Charging"}
    )
    assert state.battery_level == 81
    assert state.charge_limit_soc == 90
    assert state.battery_range == 212.5
    assert state.charging_state is ChargingState.CHARGING
    assert state.raw["batteryLevel"] == 81


def test_none_values_fall_back_to_defaults() -> None:
    state = ChargeState.model_validate({"batteryLevel": None, "chargingState": None})
    assert state.battery_level == 0
    assert state.charging_state is ChargingState.UNKNOWN


def test_unknown_fields_are_ignored() -> None:
    state = ChargeState.model_validate({"batteryLevel": 10, "somethingNew": True})
    assert state.battery_level == 10
    assert not hasattr(state, "something_new")


def test_vehicle_state_without_charge_category_reads_as_zero() -> None:
    charge = VehicleState().charge()
    assert charge.battery_level == 0
    assert charge.charge_limit_soc == 0
    assert charge.battery_range == 0.0
    assert charge.charging_state is ChargingState.UNKNOWN


def test_vehicle_state_nested_payload() -> None:
    state = VehicleState.model_validate({"chargeState": {"batteryLevel": 55, "chargingState": "NO_POWER"}})
    assert state.charge().battery_level == 55
    assert state.charge().charging_state is ChargingState.NO_POWER


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Disconnected", ChargingState.DISCONNECTED),
        ("NoPower", ChargingState.NO_POWER),
        ("no_power", ChargingState.NO_POWER),
        (" Complete ", ChargingState.COMPLETE),
        ("", ChargingState.UNKNOWN),
        (7, ChargingState.UNKNOWN),
    ],
)
def test_charging_state_lookup(value: object, expected: ChargingState) -> None:
    assert ChargingState(value) is expected


@pytest.mark.parametrize(
    ("state", "code"),
    [
        (ChargingState.CHARGING, ChargeStateCode.C),
        (ChargingState.STOPPED, ChargeStateCode.B),
        (ChargingState.NO_POWER, ChargeStateCode.B),
        (ChargingState.COMPLETE, ChargeStateCode.B),
        (ChargingState.STARTING, ChargeStateCode.A),
        (ChargingState.DISCONNECTED, ChargeStateCode.A),
        (ChargingState.CALIBRATING, ChargeStateCode.A),
        (ChargingState.UNKNOWN, ChargeStateCode.A),
    ],
)
def test_charge_state_code(state: ChargingState, code: ChargeStateCode) -> None:
    assert ChargeStateCode.from_charging_state(state) is code
