"""Structural interfaces of the vehicle transport/protocol backend.

The radio transport, the session handshake and command authentication
live in an external backend. Having protocols here makes it easy to pass
test doubles while the production backend stays a plug-in, loaded from
``TESLA_BLE_BACKEND`` by :func:`load_backend`.
"""

from __future__ import annotations

import enum
import importlib
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol

from teslable.exceptions import ConfigError

if TYPE_CHECKING:
    from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePrivateKey, EllipticCurvePublicKey

    from teslable._cache import SessionCache
    from teslable.models.state import VehicleState


class Domain(enum.StrEnum):
    """Vehicle subsystems a session can be established with."""

    VCSEC = "vcsec"
    """Vehicle security controller; the only domain awake while asleep."""

    INFOTAINMENT = "infotainment"


class StateCategory(enum.StrEnum):
    """State categories accepted by ``VehicleHandle.get_state``."""

    CHARGE = "charge"
    CLIMATE = "climate"
    DRIVE = "drive"
    CLOSURES = "closures"


class KeyFormFactor(enum.IntEnum):
    """Form factor attached to an enrolled key."""

    UNKNOWN = 0
    NFC_CARD = 1
    IOS_DEVICE = 6
    ANDROID_DEVICE = 7
    CLOUD_KEY = 9


class Connection(Protocol):
    """Open transport connection to one vehicle."""

    async def close(self) -> None:
        ...


class VehicleHandle(Protocol):
    """Session-bound vehicle handle created on top of a :class:`Connection`."""

    async def connect(self) -> None:
        ...

    async def start_session(self, domains: Sequence[Domain] | None) -> None:
        """Perform the session handshake; ``None`` means every domain."""
        ...

    async def disconnect(self) -> None:
        ...

    async def update_cached_sessions(self, cache: SessionCache) -> None:
        ...

    async def wakeup(self) -> None:
        ...

    async def send_add_key_request(
        self,
        public_key: EllipticCurvePublicKey,
        is_owner: bool,
        form_factor: KeyFormFactor,
    ) -> None:
        ...

    async def set_charging_amps(self, amps: int) -> None:
        ...

    async def change_charge_limit(self, percent: int) -> None:
        ...

    async def charge_start(self) -> None:
        ...

    async def charge_stop(self) -> None:
        ...

    async def get_state(self, category: StateCategory) -> VehicleState:
        ...


class Backend(Protocol):
    """Factory for connections and vehicle handles."""

    async def open_connection(self, vin: str) -> Connection:
        ...

    def new_vehicle(
        self,
        connection: Connection,
        private_key: EllipticCurvePrivateKey,
        session_cache: SessionCache | None,
    ) -> VehicleHandle:
        ...


def load_backend(path: str, **kwargs: Any) -> Backend:
    """Import and instantiate the backend named by *path*.

    *path* has the form ``package.module:attribute``; the attribute is
    called with *kwargs* and must return a :class:`Backend`.
    """
    module_name, sep, attribute = path.partition(":")
    if not module_name or not sep or not attribute:
        raise ConfigError(f"backend must be given as 'module:attribute', got {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"could not import backend module {module_name!r}: {exc}") from exc
    try:
        factory = getattr(module, attribute)
    except AttributeError as exc:
        raise ConfigError(f"backend module {module_name!r} has no attribute {attribute!r}") from exc
    backend: Backend = factory(**kwargs)
    return backend
