#!/usr/bin/env python3
"""Send a command to a running teslable bridge.

Examples::

    python scripts/send_command.py VIN123 wake_up
    python scripts/send_command.py VIN123 set_charging_amps --param charging_amps=16
    python scripts/send_command.py VIN123 get_soc --data

Credentials default to the bridge's own ``USERNAME``/``PASSWORD``
environment variables.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any

import aiohttp

LOG = logging.getLogger("send_command")


def _parse_params(values: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise SystemExit(f"--param expects key=value, got {item!r}")
        params[key] = value
    return params


async def run(args: argparse.Namespace) -> int:
    base = args.url.rstrip("/")
    kind = "data" if args.data else "command"
    url = f"{base}/api/1/vehicles/{args.vin}/{kind}/{args.command}"

    auth = None
    username = args.username or os.environ.get("USERNAME", "")
    password = args.password or os.environ.get("PASSWORD", "")
    if username and password:
        auth = aiohttp.BasicAuth(username, password)

    timeout = aiohttp.ClientTimeout(total=args.timeout)
    async with aiohttp.ClientSession(auth=auth, timeout=timeout) as session:
        if args.data:
            request = session.get(url)
        else:
            params = _parse_params(args.param)
            LOG.debug("POST %s %s", url, params)
            request = session.post(url, json=params) if params else session.post(url)
        async with request as resp:
            text = await resp.text()
            if resp.status != 200:
                print(f"HTTP {resp.status}: {text.strip()}", file=sys.stderr)
                return 1
            result: Any = json.loads(text)
            print(json.dumps(result))
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Send a command to a teslable bridge.")
    parser.add_argument("vin", help="Target VIN")
    parser.add_argument("command", help="Command name, e.g. wake_up or get_soc")
    parser.add_argument("--data", action="store_true", help="Use the data endpoint (GET)")
    parser.add_argument("--param", action="append", default=[], help="Body parameter as key=value (repeatable)")
    parser.add_argument("--url", default="http://localhost:8080", help="Bridge base URL")
    parser.add_argument("--username", help="Basic auth user (default: USERNAME)")
    parser.add_argument("--password", help="Basic auth password (default: PASSWORD)")
    parser.add_argument("--timeout", type=float, default=120.0, help="Request timeout in seconds")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        sys.exit(asyncio.run(run(args)))
    except aiohttp.ClientError as exc:
        print(f"Request failed: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
