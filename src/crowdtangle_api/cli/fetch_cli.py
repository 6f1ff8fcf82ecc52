"""Command-line interface for the CrowdTangle API client.

This module provides a small command-line tool that fetches lists, list
accounts, posts or a single post and prints them as JSON.
"""

import argparse
import json
import logging
import sys
from typing import Any

import requests

from crowdtangle_api.factory import create_client
from crowdtangle_api.infrastructure.api.resource_client import (
    DEFAULT_MAX_RECORDS,
    CrowdTangleResourceClient,
)
from crowdtangle_api.infrastructure.api.retry_policy import RetryPolicy
from crowdtangle_api.infrastructure.exceptions.api_exceptions import (
    BadRequestError,
    CrowdTangleApiError,
)


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration.

    Args:
        verbose: If True, set log level to DEBUG, otherwise WARNING
    """
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def parse_key_value(raw: str) -> tuple[str, str]:
    """Parse a ``KEY=VALUE`` query parameter argument."""
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got {raw!r}")
    return key, value


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Arguments to parse, defaults to sys.argv

    Returns
    -------
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Fetch data from the CrowdTangle API and print it as JSON"
    )

    parser.add_argument(
        "--token",
        type=str,
        default=None,
        help="API token (default: $CROWDTANGLE_API_TOKEN)",
    )

    parser.add_argument(
        "--max-records",
        type=int,
        default=DEFAULT_MAX_RECORDS,
        help=f"Maximum records for paginated commands (default: {DEFAULT_MAX_RECORDS})",
    )

    parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Items per page, at most 100 (default: min(100, max records))",
    )

    parser.add_argument(
        "--param",
        type=parse_key_value,
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra query parameter, may be repeated (e.g. --param searchTerm=news)",
    )

    parser.add_argument(
        "--calls-per-minute",
        type=int,
        default=None,
        help="Throttle requests client-side (the posts endpoint allows 6 per minute)",
    )

    parser.add_argument(
        "--max-attempts",
        type=int,
        default=3,
        help="Attempts per request for transient failures (default: 3)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("lists", help="List the dashboard's lists")
    accounts = subparsers.add_parser("accounts", help="Accounts of a list")
    accounts.add_argument("list_id", type=str, help="ID of the list")
    subparsers.add_parser("posts", help="Posts matching the given parameters")
    post = subparsers.add_parser("post", help="A single post")
    post.add_argument("post_id", type=str, help="ID of the post")

    return parser.parse_args(argv)


def build_parameters(args: argparse.Namespace) -> dict[str, Any]:
    """Collect query parameters from parsed arguments."""
    parameters: dict[str, Any] = dict(args.param)
    if args.count is not None:
        parameters["count"] = args.count
    return parameters


def run_command(client: CrowdTangleResourceClient, args: argparse.Namespace) -> Any:
    """Dispatch the parsed command to the client.

    Args:
        client: The client to use
        args: Parsed arguments

    Returns
    -------
        The decoded API result
    """
    parameters = build_parameters(args)

    if args.command == "lists":
        return client.get_lists()
    if args.command == "accounts":
        return client.get_accounts_for_list(args.list_id, parameters, args.max_records)
    if args.command == "posts":
        return client.get_posts(parameters, args.max_records)
    if args.command == "post":
        return client.get_post(args.post_id)

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    """Run the CrowdTangle fetch tool.

    Returns
    -------
        Process exit status
    """
    args = parse_args(argv)
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    try:
        client = create_client(
            token=args.token,
            retry_policy=RetryPolicy(max_attempts=args.max_attempts),
            calls_per_period=args.calls_per_minute,
            period_seconds=60.0,
        )
        result = run_command(client, args)
    except BadRequestError as e:
        print(f"CrowdTangle rejected the request (code {e.code}): {e.message}", file=sys.stderr)
        return 1
    except (CrowdTangleApiError, requests.RequestException) as e:
        logger.debug("Request failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
