"""teslable - HTTP-to-BLE command bridge for vehicles."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("teslable")
except PackageNotFoundError:
    __version__ = "0+local"
from teslable._cache import SessionCache
from teslable._keys import KeyPair, load_key_pair
from teslable._transport import Backend, Connection, Domain, KeyFormFactor, StateCategory, VehicleHandle
from teslable.config import BridgeConfig
from teslable.connection import VehicleLink, prepare_connection, vehicle_connection
from teslable.dispatcher import CommandDispatcher
from teslable.exceptions import (
    BadRequestError,
    CommandFailedError,
    CommandNotFoundError,
    CommandParamsError,
    ConfigError,
    DataReadError,
    RetriesExhaustedError,
    TeslaBleError,
    VehicleConnectionError,
    WakeUpError,
)
from teslable.models import (
    ChargeEnableParams,
    ChargeState,
    ChargeStateCode,
    ChargingAmpsParams,
    ChargingState,
    Command,
    CommandKind,
    SocLimitParams,
    VehicleState,
)
from teslable.policy import needs_wake_up
from teslable.retry import retry_command
from teslable.runtime import BridgeRuntime
from teslable.server import create_app

__all__ = [
    "__version__",
    "BadRequestError",
    "Backend",
    "BridgeConfig",
    "BridgeRuntime",
    "ChargeEnableParams",
    "ChargeState",
    "ChargeStateCode",
    "ChargingAmpsParams",
    "ChargingState",
    "Command",
    "CommandDispatcher",
    "CommandFailedError",
    "CommandKind",
    "CommandNotFoundError",
    "CommandParamsError",
    "ConfigError",
    "Connection",
    "DataReadError",
    "Domain",
    "KeyFormFactor",
    "KeyPair",
    "RetriesExhaustedError",
    "SessionCache",
    "SocLimitParams",
    "StateCategory",
    "TeslaBleError",
    "VehicleConnectionError",
    "VehicleHandle",
    "VehicleLink",
    "VehicleState",
    "WakeUpError",
    "create_app",
    "load_key_pair",
    "needs_wake_up",
    "prepare_connection",
    "retry_command",
    "vehicle_connection",
]
