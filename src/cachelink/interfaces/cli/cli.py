from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog

from cachelink.client import get_cache_client
from cachelink.domain.errors import CacheError
from cachelink.infrastructure.config import AppConfig, load_config
from cachelink.infrastructure.logging.setup import configure_logging

log = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_MISS = 1
EXIT_ERROR = 2


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {value}")
    return value


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="cachelink")

    # Config wiring flags
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--redis-url",
        default=None,
        help="Override Redis URL.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("ping", help="Check whether the cache service is reachable.")

    get_p = sub.add_parser("get", help="Print the value stored under KEY.")
    get_p.add_argument("key")

    set_p = sub.add_parser("set", help="Store VALUE under KEY with a TTL.")
    set_p.add_argument("key")
    set_p.add_argument("value")
    set_p.add_argument(
        "--ttl",
        required=True,
        type=_positive_int,
        help="Expiry in seconds.",
    )

    del_p = sub.add_parser("del", help="Remove KEY.")
    del_p.add_argument("key")

    return parser.parse_args(argv)


async def _run(args: argparse.Namespace, config: AppConfig) -> int:
    async with get_cache_client(config) as cache:
        if args.command == "ping":
            alive = cache.is_alive()
            print("alive" if alive else "not alive")
            return EXIT_OK if alive else EXIT_MISS

        if args.command == "get":
            try:
                value = await cache.get(args.key)
            except CacheError as e:
                print(f"error: {e}", file=sys.stderr)
                return EXIT_ERROR
            if value is None:
                return EXIT_MISS
            print(value)
            return EXIT_OK

        # Writes are fire-and-forget; leaving the context drains them.
        if args.command == "set":
            cache.set(args.key, args.value, args.ttl)
        elif args.command == "del":
            cache.delete(args.key)
        return EXIT_OK


def start(argv: Iterable[str] | None = None) -> int:
    """Process entrypoint: load config once, configure logging, run one command."""
    if argv is None:
        argv = sys.argv[1:]

    args = _parse_args(argv)

    cli_overrides: dict[str, Any] = {}
    if args.redis_url:
        cli_overrides["redis_url"] = args.redis_url
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    config = load_config(
        config_path=Path(args.config) if args.config else None,
        dotenv_path=Path(args.dotenv) if args.dotenv else None,
        cli_overrides=cli_overrides,
    )
    configure_logging(config)

    log.debug("cli_command", command=args.command)
    return asyncio.run(_run(args, config))


if __name__ == "__main__":
    raise SystemExit(start())
