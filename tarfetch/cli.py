"""
Command Line Interface for tarfetch.

Provides CLI commands for fetching and unpacking remote tarballs.
"""

import argparse
import sys
from typing import List, Optional

from .cli_commands import COMMANDS
from .common.constants import ExitCodes
from .common.logging_config import configure_logging, get_logger


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='tarfetch',
        description='Fetch a remote gzipped tarball and unpack it into a directory'
    )
    parser.add_argument('--log-level', dest='log_level', default=None,
                        help='Logging level (default: TARFETCH_LOG_LEVEL or INFO)')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    for command in COMMANDS:
        command.add_parser(subparsers)

    return parser


def main(args: Optional[List[str]] = None) -> None:
    """
    Main entry point for the CLI.

    Args:
        args: Command line arguments (uses sys.argv if None)
    """
    parser = create_parser()

    if args is None:
        args = sys.argv[1:]

    if not args:
        parser.print_help()
        sys.exit(ExitCodes.OK)

    parsed_args = parser.parse_args(args)
    configure_logging(parsed_args.log_level)
    logger = get_logger(__name__)
    logger.debug("Running command %s", parsed_args.command)

    if hasattr(parsed_args, 'func'):
        parsed_args.func(parsed_args)
    else:
        parser.print_help()
        sys.exit(ExitCodes.OK)


if __name__ == '__main__':
    main()
