"""Immutable process-wide state shared by every request."""

from __future__ import annotations

import dataclasses
import logging

import aiohttp

from teslable._cache import SessionCache
from teslable._keys import KeyPair, load_key_pair
from teslable._transport import Backend, load_backend
from teslable.config import BridgeConfig
from teslable.exceptions import ConfigError

_logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class BridgeRuntime:
    """Configuration, key pair, backend and optional session cache.

    Built once at startup and passed explicitly to the dispatcher and the
    connection lifecycle; nothing here changes while serving requests
    except the contents of ``session_cache``.
    """

    config: BridgeConfig
    keys: KeyPair
    backend: Backend
    session_cache: SessionCache | None = None

    @classmethod
    async def create(
        cls,
        config: BridgeConfig,
        *,
        backend: Backend | None = None,
        http_session: aiohttp.ClientSession | None = None,
    ) -> BridgeRuntime:
        """Load keys and backend for *config*.

        *backend* overrides ``config.backend``; without either a
        :class:`~teslable.exceptions.ConfigError` is raised.
        """
        keys = await load_key_pair(config, http_session)
        if backend is None:
            if not config.backend:
                raise ConfigError("Need to specify TESLA_BLE_BACKEND")
            backend = load_backend(config.backend)
            _logger.info("Loaded backend %s", config.backend)
        cache = SessionCache(config.session_cache_size) if config.session_cache_size > 0 else None
        return cls(config=config, keys=keys, backend=backend, session_cache=cache)
