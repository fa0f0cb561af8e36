"""Shared fakes for the transport backend.

``FakeBackend`` records every collaborator call, in order, in
``backend.calls`` so tests can assert sequencing across connections.
Failures are injected per method name via ``backend.fail(name, *errors)``;
each call pops the next queued error, an empty queue means success.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from teslable._cache import SessionCache
from teslable._keys import KeyPair
from teslable._transport import Domain, KeyFormFactor, StateCategory
from teslable.config import BridgeConfig
from teslable.models.state import VehicleState
from teslable.runtime import BridgeRuntime


class FakeConnection:
    def __init__(self, backend: FakeBackend, vin: str) -> None:
        self._backend = backend
        self.vin = vin
        self.close_count = 0

    async def close(self) -> None:
        self.close_count += 1
        self._backend.calls.append("close")
        self._backend.raise_queued("close")


class FakeVehicle:
    def __init__(self, backend: FakeBackend) -> None:
        self._backend = backend
        self.disconnect_count = 0

    async def _call(self, name: str, detail: Any = None) -> None:
        self._backend.calls.append(name if detail is None else f"{name}:{detail}")
        self._backend.raise_queued(name)

    async def connect(self) -> None:
        await self._call("connect")

    async def start_session(self, domains: Sequence[Domain] | None) -> None:
        label = "all" if domains is None else ",".join(str(d) for d in domains)
        await self._call("start_session", label)

    async def disconnect(self) -> None:
        self.disconnect_count += 1
        self._backend.calls.append("disconnect")
        self._backend.raise_queued("disconnect")

    async def update_cached_sessions(self, cache: SessionCache) -> None:
        await self._call("update_cached_sessions")

    async def wakeup(self) -> None:
        await self._call("wakeup")

    async def send_add_key_request(self, public_key: Any, is_owner: bool, form_factor: KeyFormFactor) -> None:
        self._backend.added_keys.append((public_key, is_owner, form_factor))
        await self._call("send_add_key_request")

    async def set_charging_amps(self, amps: int) -> None:
        await self._call("set_charging_amps", amps)

    async def change_charge_limit(self, percent: int) -> None:
        await self._call("change_charge_limit", percent)

    async def charge_start(self) -> None:
        await self._call("charge_start")

    async def charge_stop(self) -> None:
        await self._call("charge_stop")

    async def get_state(self, category: StateCategory) -> VehicleState:
        await self._call("get_state", category)
        return self._backend.state


class FakeBackend:
    def __init__(self) -> None:
        self.calls: list[str] = []
        self.connections: list[FakeConnection] = []
        self.vehicles: list[FakeVehicle] = []
        self.added_keys: list[tuple[Any, bool, KeyFormFactor]] = []
        self.session_caches: list[SessionCache | None] = []
        self.state = VehicleState()
        self._errors: dict[str, list[BaseException]] = {}

    def fail(self, name: str, *errors: BaseException) -> None:
        self._errors.setdefault(name, []).extend(errors)

    def raise_queued(self, name: str) -> None:
        queue = self._errors.get(name)
        if queue:
            raise queue.pop(0)

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call == name or call.startswith(f"{name}:"))

    async def open_connection(self, vin: str) -> FakeConnection:
        self.calls.append(f"open:{vin}")
        self.raise_queued("open")
        connection = FakeConnection(self, vin)
        self.connections.append(connection)
        return connection

    def new_vehicle(self, connection: Any, private_key: Any, session_cache: SessionCache | None) -> FakeVehicle:
        self.calls.append("new_vehicle")
        self.raise_queued("new_vehicle")
        self.session_caches.append(session_cache)
        vehicle = FakeVehicle(self)
        self.vehicles.append(vehicle)
        return vehicle


@pytest.fixture(scope="session")
def key_pair() -> KeyPair:
    private_key = ec.generate_private_key(ec.SECP256R1())
    return KeyPair(private_key=private_key, public_key=private_key.public_key())


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def vehicle(backend: FakeBackend) -> FakeVehicle:
    return FakeVehicle(backend)


@pytest.fixture
def runtime(backend: FakeBackend, key_pair: KeyPair) -> BridgeRuntime:
    return BridgeRuntime(config=BridgeConfig(wake_settle_delay=5.0), keys=key_pair, backend=backend)
