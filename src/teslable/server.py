"""HTTP surface of the bridge.

Routes:
  - ``POST /api/1/vehicles/{vin}/command/{command}`` (optional JSON body)
  - ``GET /api/1/vehicles/{vin}/data/{command}``

Both are protected by HTTP basic auth when credentials are configured.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from aiohttp import BasicAuth, web

from teslable._constants import AUTH_REALM_HEADER
from teslable.config import BridgeConfig
from teslable.dispatcher import CommandDispatcher
from teslable.exceptions import BadRequestError, CommandNotFoundError, TeslaBleError
from teslable.runtime import BridgeRuntime

_logger = logging.getLogger(__name__)

DISPATCHER_KEY: web.AppKey[CommandDispatcher] = web.AppKey("dispatcher", CommandDispatcher)
CONFIG_KEY: web.AppKey[BridgeConfig] = web.AppKey("config", BridgeConfig)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


# ------------------------------------------------------------------
# Basic auth
# ------------------------------------------------------------------


def _digest(value: str) -> bytes:
    return hashlib.sha256(value.encode("utf-8")).digest()


def parse_basic_auth(header: str | None) -> tuple[str, str] | None:
    """Return ``(username, password)`` from an ``Authorization`` header."""
    if not header:
        return None
    try:
        auth = BasicAuth.decode(header, encoding="utf-8")
    except ValueError:
        return None
    return auth.login, auth.password


def credentials_match(config: BridgeConfig, username: str, password: str) -> bool:
    """Compare credentials in constant time (over fixed-length digests)."""
    username_match = hmac.compare_digest(_digest(username), _digest(config.username))
    password_match = hmac.compare_digest(_digest(password), _digest(config.password))
    return username_match and password_match


@web.middleware
async def basic_auth_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    config = request.app[CONFIG_KEY]
    if not config.auth_enabled:
        return await handler(request)
    credentials = parse_basic_auth(request.headers.get("Authorization"))
    if credentials is not None and credentials_match(config, *credentials):
        return await handler(request)
    _logger.warning("Rejected unauthenticated request %s %s", request.method, request.path)
    return web.Response(
        status=401,
        text="Unauthorized",
        headers={"WWW-Authenticate": AUTH_REALM_HEADER},
    )


# ------------------------------------------------------------------
# Request handling
# ------------------------------------------------------------------


async def read_params(request: web.Request) -> dict[str, Any] | None:
    """Decode the optional JSON object body.

    An empty body yields ``None``. Anything that is not a JSON object
    (or ``null``) raises :class:`~teslable.exceptions.BadRequestError`.
    """
    raw = await request.read()
    if not raw:
        return None
    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise BadRequestError(f"error decoding body: {exc}") from exc
    if body is None:
        return None
    if not isinstance(body, dict):
        raise BadRequestError(f"request body must be a JSON object, got {type(body).__name__}")
    return body


def _error_response(exc: Exception, vin: str, command: str) -> web.Response:
    if isinstance(exc, BadRequestError):
        _logger.warning("Bad request for command %s for VIN %s: %s", command, vin, exc)
        return web.Response(status=400, text="Bad Request")
    if isinstance(exc, CommandNotFoundError):
        _logger.warning("Unknown command %s for VIN %s", command, vin)
        return web.Response(status=404, text="Not Found")
    _logger.error("could not exec command %s for VIN %s: %s", command, vin, exc)
    return web.Response(status=500, text="Internal Server Error")


async def handle_exec_command(request: web.Request) -> web.Response:
    vin = request.match_info.get("vin", "")
    command = request.match_info.get("command", "")
    dispatcher = request.app[DISPATCHER_KEY]
    try:
        params = await read_params(request)
        result = await dispatcher.handle_command(vin, command, params)
    except TeslaBleError as exc:
        return _error_response(exc, vin, command)
    return web.json_response(result)


async def handle_get_data(request: web.Request) -> web.Response:
    vin = request.match_info.get("vin", "")
    command = request.match_info.get("command", "")
    dispatcher = request.app[DISPATCHER_KEY]
    try:
        result = await dispatcher.handle_data(vin, command)
    except TeslaBleError as exc:
        return _error_response(exc, vin, command)
    return web.json_response(result)


def create_app(runtime: BridgeRuntime, dispatcher: CommandDispatcher | None = None) -> web.Application:
    """Build the aiohttp application serving *runtime*."""
    app = web.Application(middlewares=[basic_auth_middleware])
    app[CONFIG_KEY] = runtime.config
    app[DISPATCHER_KEY] = dispatcher if dispatcher is not None else CommandDispatcher(runtime)
    app.router.add_post("/api/1/vehicles/{vin:[^{}/]*}/command/{command}", handle_exec_command)
    app.router.add_get("/api/1/vehicles/{vin:[^{}/]*}/data/{command}", handle_get_data, allow_head=False)
    return app
