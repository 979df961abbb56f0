"""Command-line entry point: issue one raw RPC call against a LIT node."""

from __future__ import annotations

import sys
import asyncio
import logging
import argparse
from typing import Any

import orjson

from litrpc.errors import RpcError
from litrpc.runtime.logging import configure_logging
from litrpc.client.connection import ConnectionManager
from litrpc.runtime.settings_loader import load_settings

logger = logging.getLogger(__name__)


def _parse_params(raw: str | None) -> Any:
    if raw is None or not raw.strip():
        return {}
    try:
        params = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"params must be JSON: {exc}") from exc
    if not isinstance(params, dict):
        raise argparse.ArgumentTypeError("params must be a JSON object")
    return params


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = load_settings()
    p = argparse.ArgumentParser(prog="lit-rpc", description="Raw JSON-RPC calls against a LIT node")
    p.add_argument("--host", default=settings.endpoint.host, help="Node host")
    p.add_argument("--port", type=int, default=settings.endpoint.port, help="Node RPC port")
    p.add_argument("--endpoint", default=None, help="Full ws:// URL; overrides --host/--port")
    p.add_argument("--origin", default=settings.endpoint.origin, help="Origin header sent on connect")
    p.add_argument("--timeout", type=float, default=30.0, help="Seconds to wait for the reply (0 = forever)")
    p.add_argument("--debug", action="store_true", help="Log outgoing and incoming JSON")

    sub = p.add_subparsers(dest="command", required=True)
    call = sub.add_parser("call", help="Invoke one method and print its result")
    call.add_argument("method", help="Method name, e.g. LitRPC.Balance")
    call.add_argument("params", nargs="?", default=None, help="JSON object sent as the single parameter")
    return p.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    try:
        params = _parse_params(args.params)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    connection = ConnectionManager(args.host, args.port, origin=args.origin)
    try:
        await connection.connect(args.endpoint)
        call = connection.invoke(args.method, params)
        result = await (asyncio.wait_for(call, timeout=args.timeout) if args.timeout > 0 else call)
    except TimeoutError:
        print(f"error: no reply to {args.method} within {args.timeout}s", file=sys.stderr)
        return 1
    except RpcError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        await connection.disconnect()

    sys.stdout.write(orjson.dumps(result, option=orjson.OPT_INDENT_2).decode("utf-8") + "\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging("DEBUG" if args.debug else None)
    return asyncio.run(run(args))


__all__ = ["main", "parse_args", "run"]
