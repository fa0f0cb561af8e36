"""Run the HTTP-to-BLE command bridge: ``python -m teslable``."""

from __future__ import annotations

import argparse
import logging
import sys

from aiohttp import web

from teslable._constants import SHUTDOWN_TIMEOUT
from teslable.config import BridgeConfig
from teslable.exceptions import ConfigError
from teslable.runtime import BridgeRuntime
from teslable.server import create_app

_logger = logging.getLogger("teslable")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="teslable",
        description="Expose vehicle BLE commands over a small REST API.",
    )
    parser.add_argument("--host", help="Listen address (default: HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Listen port (default: PORT or 8080)")
    parser.add_argument("--backend", help="Transport backend as module:attribute (default: TESLA_BLE_BACKEND)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


async def _make_app(config: BridgeConfig) -> web.Application:
    runtime = await BridgeRuntime.create(config)
    _logger.info("HTTP server listening on %s:%d", config.host, config.port)
    return create_app(runtime)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _logger.info("Starting Tesla BLE command bridge...")

    overrides = {
        key: value
        for key, value in (("host", args.host), ("port", args.port), ("backend", args.backend))
        if value is not None
    }
    try:
        config = BridgeConfig.from_env(**overrides)
        web.run_app(
            _make_app(config),
            host=config.host,
            port=config.port,
            shutdown_timeout=SHUTDOWN_TIMEOUT,
            print=None,
        )
    except ConfigError as exc:
        _logger.error("Invalid configuration: %s", exc)
        return 2
    _logger.info("Shut down")
    return 0


if __name__ == "__main__":
    sys.exit(main())
