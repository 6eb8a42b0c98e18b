"""Command line interface for the sync retention tool."""

import argparse
import sys
from typing import List, Optional

from .handlers.command import command_handler


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sync-retention",
        description="Schedule deletion of a client's records by setting their TTL.",
    )
    subparsers = parser.add_subparsers(dest="command")

    delete = subparsers.add_parser(
        "delete", help="Set the TTL of every record stored for a client."
    )
    delete.add_argument("client_id", metavar="CLIENT_ID", help="Partition key of the client.")
    when = delete.add_mutually_exclusive_group()
    when.add_argument(
        "--ttl-seconds",
        type=int,
        default=None,
        help="Seconds from now until the records expire (default: TTL_SECONDS or 3600).",
    )
    when.add_argument(
        "--expire-at",
        type=int,
        default=None,
        help="Absolute epoch timestamp at which the records expire.",
    )
    delete.add_argument(
        "--workers",
        type=positive_int,
        default=None,
        help="Concurrent item updates (default: MAX_WORKERS or 1).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        print("unsupported commands", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 2

    event = {
        "command": args.command,
        "client_id": args.client_id,
        "ttl_seconds": args.ttl_seconds,
        "expire_at": args.expire_at,
        "workers": args.workers,
    }
    response = command_handler(event, None)

    exit_code = response.get("exitCode", 1)
    stream = sys.stdout if exit_code == 0 else sys.stderr
    print(response.get("message", ""), file=stream)
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
