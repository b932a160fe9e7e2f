from __future__ import annotations

import argparse
import json
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from bronto.adapters.soap.errors import BrontoError
from bronto.app import RESOURCE_TYPES, check_login, delete_records, find_records
from bronto.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Work with Bronto API resources")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("login", help="Verify the configured API key")

    find = subparsers.add_parser("find", help="Print one page of records as JSON")
    find.add_argument("collection", choices=sorted(RESOURCE_TYPES))
    find.add_argument(
        "--page",
        type=int,
        default=1,
        help="Page number to read (default: %(default)s)",
    )
    find.add_argument(
        "--id",
        dest="ids",
        action="append",
        help="Restrict to the given id (repeatable)",
    )

    delete = subparsers.add_parser("delete", help="Delete records by id")
    delete.add_argument("collection", choices=sorted(RESOURCE_TYPES))
    delete.add_argument("ids", nargs="+", help="Ids of the records to delete")

    return parser.parse_args(list(argv))


def _run(parsed_args: argparse.Namespace) -> int:
    if parsed_args.command == "login":
        check_login()
        print("Login OK")  # noqa: T201
        return 0
    if parsed_args.command == "find":
        if parsed_args.page < 1:
            raise ValueError("Page number must be positive")
        records = find_records(
            parsed_args.collection,
            page_number=parsed_args.page,
            ids=parsed_args.ids,
        )
        print(json.dumps(records, indent=2, default=str))  # noqa: T201
        return 0
    if parsed_args.command == "delete":
        outcomes = delete_records(parsed_args.collection, parsed_args.ids)
        failed = 0
        for outcome in outcomes:
            if outcome.deleted:
                print(f"{outcome.id}: deleted")  # noqa: T201
            else:
                failed += 1
                print(f"{outcome.id}: {'; '.join(outcome.errors) or 'not deleted'}")  # noqa: T201
        return 1 if failed else 0
    raise ValueError(f"Unsupported command: {parsed_args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        exit_code = _run(parsed_args)
    except (ConfigurationError, ValueError):
        log.exception("Invalid configuration or arguments")
        sys.exit(2)
    except BrontoError:
        log.exception("Bronto API call failed")
        sys.exit(1)
    sys.exit(exit_code)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
