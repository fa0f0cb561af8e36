"""Bridge configuration for teslable."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from teslable._constants import (
    COMMAND_ATTEMPTS,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_PRIVATE_KEY,
    DEFAULT_PUBLIC_KEY,
    WAKE_SETTLE_DELAY,
)
from teslable.exceptions import ConfigError


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    value = env.get(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{key} must be numeric, got {value!r}") from None


def _env_float(env: Mapping[str, str], key: str, default: float) -> float:
    value = env.get(key)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"{key} must be numeric, got {value!r}") from None


@dataclasses.dataclass(frozen=True)
class BridgeConfig:
    """Bridge configuration, loaded once at startup.

    Parameters
    ----------
    port : int
        HTTP listen port.
    host : str
        HTTP listen address.
    username : str
        Basic auth user name. Authentication is enabled only when both
        ``username`` and ``password`` are non-empty.
    password : str
        Basic auth password.
    private_key : str
        Path or ``http(s)://`` URL of the PEM encoded EC private key used
        for the session handshake.
    public_key : str
        Path or ``http(s)://`` URL of the PEM encoded EC public key sent
        when pairing.
    backend : str
        ``module:attribute`` path of the transport backend factory.
    session_cache_size : int
        Number of vehicles whose session material is cached between
        requests. ``0`` disables the cache.
    wake_settle_delay : float
        Seconds to wait after a successful wake-up before the requested
        command is sent.
    command_attempts : int
        Attempts per action command within one connection.
    """

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    username: str = ""
    password: str = ""
    private_key: str = DEFAULT_PRIVATE_KEY
    public_key: str = DEFAULT_PUBLIC_KEY
    backend: str = ""
    session_cache_size: int = 0
    wake_settle_delay: float = WAKE_SETTLE_DELAY
    command_attempts: int = COMMAND_ATTEMPTS

    def __post_init__(self) -> None:
        if not self.private_key:
            raise ConfigError("Need to specify PRIVATE_KEY")
        if not self.public_key:
            raise ConfigError("Need to specify PUBLIC_KEY")
        if self.command_attempts < 1:
            raise ConfigError("COMMAND_ATTEMPTS must be at least 1")
        if self.session_cache_size < 0:
            raise ConfigError("SESSION_CACHE_SIZE must not be negative")
        if self.wake_settle_delay < 0:
            raise ConfigError("WAKE_SETTLE_DELAY must not be negative")

    @property
    def auth_enabled(self) -> bool:
        """Whether requests must carry matching basic auth credentials."""
        return bool(self.username) and bool(self.password)

    @classmethod
    def from_env(cls, **overrides: Any) -> BridgeConfig:
        """Create configuration from environment variables.

        Reads ``PORT``, ``HOST``, ``USERNAME``, ``PASSWORD``,
        ``PRIVATE_KEY``, ``PUBLIC_KEY``, ``TESLA_BLE_BACKEND``,
        ``SESSION_CACHE_SIZE``, ``WAKE_SETTLE_DELAY`` and
        ``COMMAND_ATTEMPTS``. Empty variables fall back to the defaults.
        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "HOST": "host",
            "USERNAME": "username",
            "PASSWORD": "password",
            "PRIVATE_KEY": "private_key",
            "PUBLIC_KEY": "public_key",
            "TESLA_BLE_BACKEND": "backend",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val:
                config_kwargs[field_name] = val

        if "port" not in overrides:
            config_kwargs["port"] = _env_int(env, "PORT", DEFAULT_PORT)
        if "session_cache_size" not in overrides:
            config_kwargs["session_cache_size"] = _env_int(env, "SESSION_CACHE_SIZE", 0)
        if "command_attempts" not in overrides:
            config_kwargs["command_attempts"] = _env_int(env, "COMMAND_ATTEMPTS", COMMAND_ATTEMPTS)
        if "wake_settle_delay" not in overrides:
            config_kwargs["wake_settle_delay"] = _env_float(env, "WAKE_SETTLE_DELAY", WAKE_SETTLE_DELAY)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
