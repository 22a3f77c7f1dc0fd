"""Command-line interface for remotecli.

Provides the main entry point for running the execution server,
generating access tokens, and sending commands to a running server.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="remotecli",
        description="Remote execution of administrative console commands",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/remotecli.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("serve", help="Start the HTTP execution server")

    keygen_parser = subparsers.add_parser("keygen", help="Generate a new access token")
    keygen_parser.add_argument(
        "--alias", type=str, required=True,
        help="Alias the token is registered under",
    )
    keygen_parser.add_argument(
        "--manager", action="store_true",
        help="Grant manager access (required for remote execution)",
    )

    exec_parser = subparsers.add_parser("exec", help="Execute a command on a remote server")
    exec_parser.add_argument(
        "words", nargs="+",
        help="Command to execute, e.g. 'help' or 'stats 10'",
    )
    exec_parser.add_argument(
        "--url", type=str, default=None,
        help="Server base URL (overrides client.base_url)",
    )

    return parser.parse_args(argv)


def _keygen(alias: str, manager: bool) -> None:
    """Print a fresh token and the config entry holding its hash."""
    from remotecli.auth.token import generate_token

    token, token_hash = generate_token()
    print(f"Generated new access token for {alias}")
    print(f"  Token: {token}")
    print("\nThe token is shown only once. Add this entry to auth.tokens:")
    print(f"  - alias: {alias}")
    print(f"    token_hash: '{token_hash}'")
    print(f"    manager: {'true' if manager else 'false'}")


async def _exec(settings, args) -> int:
    """Send one command to a remote server and print the outcome."""
    from remotecli.client.http_client import HttpRemoteExecutor, RemoteExecutionError

    cl = settings.client
    executor = HttpRemoteExecutor(
        base_url=args.url or cl.base_url,
        alias=cl.alias,
        token=cl.token.get_secret_value(),
        timeout=cl.timeout,
        execute_path=cl.execute_path,
    )
    command = " ".join(args.words)
    try:
        async with executor:
            outcome = await executor.execute(command)
    except RemoteExecutionError as e:
        status = f" (HTTP {e.status_code})" if e.status_code else ""
        print(f"Request failed{status}: {e}", file=sys.stderr)
        return 1

    if outcome.is_ok:
        print(outcome.payload)
        return 0
    print(outcome.error, file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the remotecli CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    if args.command == "keygen":
        _keygen(args.alias, args.manager)
        return

    from remotecli.config.settings import load_settings
    from remotecli.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    if args.command == "serve":
        logger.info("Starting execution server")
        from remotecli.gateway.server import serve
        serve(settings)

    elif args.command == "exec":
        sys.exit(asyncio.run(_exec(settings, args)))


if __name__ == "__main__":
    main()
