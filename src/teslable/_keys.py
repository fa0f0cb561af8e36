"""Loading of the EC key pair used for handshakes and pairing."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from pathlib import Path

import aiohttp
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ec import EllipticCurvePrivateKey, EllipticCurvePublicKey

from teslable.config import BridgeConfig
from teslable.exceptions import ConfigError

_logger = logging.getLogger(__name__)

_REMOTE_SCHEMES = ("http://", "https://")
_FETCH_TIMEOUT = aiohttp.ClientTimeout(total=30)


@dataclasses.dataclass(frozen=True)
class KeyPair:
    """Private key for session handshakes and public key for pairing."""

    private_key: EllipticCurvePrivateKey
    public_key: EllipticCurvePublicKey


def is_remote(location: str) -> bool:
    return location.startswith(_REMOTE_SCHEMES)


async def fetch_key_file(location: str, http_session: aiohttp.ClientSession) -> bytes:
    """Download a key file from an ``http(s)://`` location."""
    _logger.debug("Fetching key file from %s", location)
    try:
        async with http_session.get(location, timeout=_FETCH_TIMEOUT) as resp:
            if resp.status != 200:
                raise ConfigError(f"HTTP {resp.status} while fetching key file {location}")
            return await resp.read()
    except aiohttp.ClientError as exc:
        raise ConfigError(f"Could not load key file via http from {location}: {exc}") from exc


async def read_key_file(location: str, http_session: aiohttp.ClientSession | None = None) -> bytes:
    """Read key material from a local path or an ``http(s)://`` URL."""
    if is_remote(location):
        if http_session is not None:
            return await fetch_key_file(location, http_session)
        async with aiohttp.ClientSession() as session:
            return await fetch_key_file(location, session)
    try:
        return await asyncio.to_thread(Path(location).read_bytes)
    except OSError as exc:
        raise ConfigError(f"Could not read key file {location}: {exc}") from exc


def parse_private_key(data: bytes, *, source: str = "") -> EllipticCurvePrivateKey:
    try:
        key = serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError) as exc:
        raise ConfigError(f"Could not load private key {source}: {exc}") from exc
    if not isinstance(key, EllipticCurvePrivateKey):
        raise ConfigError(f"Private key {source} is not an EC key")
    return key


def parse_public_key(data: bytes, *, source: str = "") -> EllipticCurvePublicKey:
    try:
        key = serialization.load_pem_public_key(data)
    except (ValueError, TypeError) as exc:
        raise ConfigError(f"Could not load public key {source}: {exc}") from exc
    if not isinstance(key, EllipticCurvePublicKey):
        raise ConfigError(f"Public key {source} is not an EC key")
    return key


async def load_key_pair(config: BridgeConfig, http_session: aiohttp.ClientSession | None = None) -> KeyPair:
    """Load the configured private and public keys.

    Raises :class:`~teslable.exceptions.ConfigError` when a key cannot be
    read or parsed.
    """
    private_key = parse_private_key(
        await read_key_file(config.private_key, http_session),
        source=config.private_key,
    )
    public_key = parse_public_key(
        await read_key_file(config.public_key, http_session),
        source=config.public_key,
    )
    _logger.info("Loaded key pair (private: %s, public: %s)", config.private_key, config.public_key)
    return KeyPair(private_key=private_key, public_key=public_key)
