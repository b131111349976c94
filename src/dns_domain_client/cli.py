"""
Command-line interface for the DNS domain client.

This module provides the `dns-domains` entry point with commands for:
- list / get / create / delete: Domain management
- owner: Find the domain owning a record name
- zonefile: Print a domain's zonefile
- config: Configuration management
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

from . import __version__
from .api_client import APIClient
from .audit_logger import AuditLogger
from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_CONFIG_PATH,
    ClientConfig,
    load_config_from_env,
    load_config_from_file,
    save_config_to_file,
)
from .domain_client import DomainClient
from .domain_validator import DomainNameValidator
from .enums import LogLevel
from .exceptions import DomainClientError
from .models import Domain

T = TypeVar("T")


def resolve_config(config_path: Optional[str]) -> Optional[ClientConfig]:
    """
    Find the configuration for a command.

    An explicit --config path wins, then the default config file, then
    environment variables.

    Raises:
        ValidationError: If falling back to the environment and no token is set
    """
    if config_path:
        config = load_config_from_file(Path(config_path))
        if config is None:
            print(f"Error: Could not load config from {config_path}", file=sys.stderr)
        return config

    if DEFAULT_CONFIG_PATH.exists():
        config = load_config_from_file(DEFAULT_CONFIG_PATH)
        if config is not None:
            return config

    return load_config_from_env()


def create_logger(config: ClientConfig, verbose: bool) -> AuditLogger:
    """Create the request logger; --verbose forces debug level."""
    level = LogLevel.DEBUG if verbose else config.logging.log_level
    return AuditLogger(output_format=config.logging.log_format, level=level)


def create_api_client(config: ClientConfig, logger: Optional[AuditLogger]) -> APIClient:
    return APIClient.from_config(config, logger=logger)


async def run_domain_operation(
    config: ClientConfig,
    logger: Optional[AuditLogger],
    operation: Callable[[DomainClient], Awaitable[T]],
) -> T:
    """Open an API client, run one domain operation and close the client."""
    async with create_api_client(config, logger) as api:
        return await operation(api.domain())


def print_domain(domain: Domain) -> None:
    print(json.dumps(domain.to_dict(), indent=2, ensure_ascii=False))


def _run_command(
    args: argparse.Namespace,
    operation: Callable[[DomainClient], Awaitable[T]],
    render: Callable[[T], None],
) -> int:
    try:
        config = resolve_config(args.config)
        if config is None:
            return 1
        logger = create_logger(config, args.verbose)
        result = asyncio.run(run_domain_operation(config, logger, operation))
    except DomainClientError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    render(result)
    return 0


def _normalized(raw_name: str) -> str:
    return DomainNameValidator().normalize(raw_name)


def cmd_list(args: argparse.Namespace) -> int:
    """Handle the 'list' command."""
    def render(domains: list) -> None:
        print(json.dumps([d.to_dict() for d in domains], indent=2, ensure_ascii=False))

    return _run_command(args, lambda client: client.get_domains(), render)


def cmd_get(args: argparse.Namespace) -> int:
    """Handle the 'get' command."""
    try:
        name = _normalized(args.name)
    except DomainClientError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return _run_command(args, lambda client: client.get_domain(name), print_domain)


def cmd_create(args: argparse.Namespace) -> int:
    """Handle the 'create' command."""
    try:
        name = _normalized(args.name)
    except DomainClientError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return _run_command(args, lambda client: client.create_domain(name), print_domain)


def cmd_delete(args: argparse.Namespace) -> int:
    """Handle the 'delete' command."""
    try:
        name = _normalized(args.name)
    except DomainClientError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    def render(text: str) -> None:
        print(text if text else f"Deleted: {name}")

    return _run_command(args, lambda client: client.delete_domain(name), render)


def cmd_owner(args: argparse.Namespace) -> int:
    """Handle the 'owner' command."""
    try:
        qname = _normalized(args.qname)
    except DomainClientError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return _run_command(args, lambda client: client.get_owning_domain(qname), print_domain)


def cmd_zonefile(args: argparse.Namespace) -> int:
    """Handle the 'zonefile' command."""
    try:
        name = _normalized(args.name)
    except DomainClientError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    def render(text: str) -> None:
        sys.stdout.write(text)

    return _run_command(args, lambda client: client.get_zonefile(name), render)


def cmd_config(args: argparse.Namespace) -> int:
    """Handle the 'config' command."""
    config_path = Path(args.path) if args.path else DEFAULT_CONFIG_PATH

    if args.action == "show":
        config = load_config_from_file(config_path)
        if config is None:
            print(f"No configuration found at: {config_path}")
            print("Use 'config init --token TOKEN' to create one.")
            return 1

        print(f"Configuration from: {config_path}")
        print(f"  Base URL: {config.base_url}")
        print(f"  Token: {AuditLogger.MASK_VALUE}")
        print(f"  Timeout: {config.timeout}s")
        print(f"  Log level: {config.logging.level}")
        return 0

    elif args.action == "init":
        if config_path.exists() and not args.force:
            print(f"Configuration already exists at: {config_path}")
            print("Use --force to overwrite.")
            return 1
        if not args.token:
            print("Error: --token is required for 'config init'", file=sys.stderr)
            return 1

        config = ClientConfig(token=args.token, base_url=args.base_url)
        if save_config_to_file(config, config_path):
            print(f"Configuration created at: {config_path}")
            return 0
        return 1

    elif args.action == "validate":
        config = load_config_from_file(config_path)
        if config is None:
            print(f"Error: Could not load config from {config_path}", file=sys.stderr)
            return 1
        try:
            level = config.logging.log_level
            log_format = config.logging.log_format
        except DomainClientError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1

        print(
            f"Configuration at {config_path} is valid "
            f"(log level: {level.value}, log format: {log_format})."
        )
        return 0

    return 1


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every request to stderr",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="dns-domains",
        description="Manage domains of a DNS hosting API",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_parser = subparsers.add_parser("list", help="List all domains")
    _add_common_arguments(list_parser)
    list_parser.set_defaults(func=cmd_list)

    for command, help_text, func in (
        ("get", "Show a single domain", cmd_get),
        ("create", "Create a domain", cmd_create),
        ("delete", "Delete a domain", cmd_delete),
        ("zonefile", "Print the zonefile of a domain", cmd_zonefile),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument("name", help="Domain name (e.g., example.com)")
        _add_common_arguments(sub)
        sub.set_defaults(func=func)

    owner_parser = subparsers.add_parser(
        "owner",
        help="Find the domain that owns a record name",
    )
    owner_parser.add_argument("qname", help="Record name (e.g., www.example.com)")
    _add_common_arguments(owner_parser)
    owner_parser.set_defaults(func=cmd_owner)

    config_parser = subparsers.add_parser(
        "config",
        help="Configuration management",
    )
    config_parser.add_argument(
        "action",
        choices=["show", "init", "validate"],
        help="Configuration action",
    )
    config_parser.add_argument(
        "--path", "-p",
        help="Path to configuration file",
    )
    config_parser.add_argument(
        "--token",
        help="API token for 'init'",
    )
    config_parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"API base URL for 'init' (default: {DEFAULT_BASE_URL})",
    )
    config_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force overwrite existing configuration",
    )
    config_parser.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
