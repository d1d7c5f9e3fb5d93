"""Command-line interface for the WaaS client."""
from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import sys
from typing import Any

from .client import Waas
from .config import load_config
from .logging_setup import configure_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="waas",
        description="Query wallets, transactions and asynchronous requests of the WaaS API",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML config file (default: environment variables only)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    sub = parser.add_subparsers(dest="command")

    request_parser = sub.add_parser("request", help="Show the status of an asynchronous request")
    request_parser.add_argument("id", help="Asynchronous request id")
    request_parser.add_argument(
        "--wait", action="store_true", help="Poll until the request is completed"
    )
    request_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for completion (overrides config)",
    )

    tx_parser = sub.add_parser("transactions", help="Search Ethereum transactions")
    tx_parser.add_argument(
        "--limit", type=int, default=10, help="Maximum number of transactions (default: 10)"
    )
    tx_parser.add_argument("--from", dest="sender", default=None, help="Sender address")
    tx_parser.add_argument("--to", dest="recipient", default=None, help="Recipient address")

    monitor_parser = sub.add_parser("monitors", help="List Ethereum monitors")
    monitor_parser.add_argument(
        "--wallet", default=None, help="Only monitors of this wallet (default: all wallets)"
    )

    return parser


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, default=str))


async def _show_request(waas: Waas, args: argparse.Namespace) -> None:
    request = waas.request(args.id)
    if args.wait:
        status = await request.wait(timeout=args.timeout)
    else:
        status = await request.get_status()
    _print_json(dataclasses.asdict(status))


async def _list_transactions(waas: Waas, args: argparse.Namespace) -> None:
    if args.limit <= 0:
        raise ValueError("--limit must be positive")
    params: dict[str, Any] = {"limit": args.limit}
    if args.sender:
        params["from"] = args.sender
    if args.recipient:
        params["to"] = args.recipient

    iterator = waas.eth().list_transactions(params)
    hashes = []
    async for tx in iterator:
        hashes.append(tx.hash)
        if len(hashes) >= args.limit:
            break
    hits = await iterator.hits()
    _print_json({"hits": hits, "list": hashes})


async def _list_monitors(waas: Waas, args: argparse.Namespace) -> None:
    if args.wallet:
        iterator = waas.wallet(args.wallet).eth().monitor().list_items()
    else:
        iterator = waas.eth().monitor().list_items()
    monitors = [{"monitor": m.monitor_id, "wallet": m.wallet} async for m in iterator]
    _print_json(monitors)


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    waas = Waas(config)

    if args.command == "request":
        await _show_request(waas, args)
    elif args.command == "transactions":
        await _list_transactions(waas, args)
    elif args.command == "monitors":
        await _list_monitors(waas, args)
    else:
        build_parser().print_help()
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    asyncio.run(_run(args))
