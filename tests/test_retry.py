from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import pytest

from teslable._api import actions
from teslable._api.actions import ActionContext
from teslable.exceptions import CommandFailedError, RetriesExhaustedError
from teslable.retry import param_names, retry_command

if TYPE_CHECKING:
    from conftest import FakeBackend, FakeVehicle


class _FlakyHandler:
    """Fails ``failures`` times, then succeeds."""

    def __init__(self, failures: int) -> None:
        self._failures = failures
        self.invocations = 0

    async def __call__(self, vehicle: Any, params: Mapping[str, Any] | None, ctx: ActionContext) -> None:
        self.invocations += 1
        if self.invocations <= self._failures:
            raise CommandFailedError(f"attempt {self.invocations} failed", command="wake_up")


_CTX = ActionContext(vin="VIN123")


@pytest.mark.asyncio
async def test_fails_twice_then_succeeds(vehicle: FakeVehicle) -> None:
    handler = _FlakyHandler(failures=2)
    await retry_command("VIN123", "wake_up", vehicle, handler, None, _CTX)
    assert handler.invocations == 3


@pytest.mark.asyncio
async def test_first_success_is_not_repeated(vehicle: FakeVehicle) -> None:
    handler = _FlakyHandler(failures=0)
    await retry_command("VIN123", "wake_up", vehicle, handler, None, _CTX)
    assert handler.invocations == 1


@pytest.mark.asyncio
async def test_always_failing_handler_exhausts_retries(vehicle: FakeVehicle) -> None:
    handler = _FlakyHandler(failures=10)
    with pytest.raises(RetriesExhaustedError) as exc_info:
        await retry_command("VIN123", "wake_up", vehicle, handler, None, _CTX)

    assert handler.invocations == 3
    exc = exc_info.value
    assert exc.attempts == 3
    assert exc.command == "wake_up"
    assert isinstance(exc.last_error, CommandFailedError)
    assert str(exc.last_error) == "attempt 3 failed"
    assert exc.__cause__ is exc.last_error


@pytest.mark.asyncio
async def test_attempt_ceiling_is_configurable(vehicle: FakeVehicle) -> None:
    handler = _FlakyHandler(failures=10)
    with pytest.raises(RetriesExhaustedError):
        await retry_command("VIN123", "wake_up", vehicle, handler, None, _CTX, attempts=5)
    assert handler.invocations == 5


@pytest.mark.asyncio
async def test_charge_start_already_started_needs_single_invocation(
    backend: FakeBackend, vehicle: FakeVehicle
) -> None:
    backend.fail("charge_start", RuntimeError("car could not execute command: already_started"))
    await retry_command("VIN123", "charge_start", vehicle, actions.charge_start, None, _CTX)
    assert backend.count("charge_start") == 1


@pytest.mark.asyncio
async def test_param_errors_are_retried_like_any_other_error(backend: FakeBackend, vehicle: FakeVehicle) -> None:
    with pytest.raises(RetriesExhaustedError):
        await retry_command(
            "VIN123", "set_charging_amps", vehicle, actions.set_charging_amps, {"charging_amps": "x"}, _CTX
        )
    assert backend.calls == []


def test_param_names_never_include_values() -> None:
    assert param_names(None) == "none"
    assert param_names({}) == "none"
    assert param_names({"soc_limit": "80", "charging_amps": "16"}) == "charging_amps, soc_limit"


@pytest.mark.asyncio
async def test_parameter_values_are_not_logged(vehicle: FakeVehicle, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("DEBUG", logger="teslable.retry")
    await retry_command("VIN123", "wake_up", vehicle, _FlakyHandler(0), {"charging_amps": "s3cret-value"}, _CTX)
    assert "charging_amps" in caplog.text
    assert "s3cret-value" not in caplog.text
