"""Single-member output for the tarfetch CLI."""

import sys

from tarfetch.cli_helpers import exit_with_error, fail
from tarfetch.common.config import FetchSettings
from tarfetch.common.constants import ExitCodes
from tarfetch.core.extract import copy_member
from tarfetch.core.source import open_tarball


class CatCommand:
    """Writes one archive member to stdout."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser('cat', help='Print one member of a remote tarball')
        parser.add_argument('url', help='Tarball URL (http, https or file)')
        parser.add_argument('member', help='Exact member name as stored in the archive')
        parser.add_argument('--no-gzip', dest='compressed', action='store_false',
                            help='The tarball is not gzip-compressed')
        parser.set_defaults(func=CatCommand.execute)

    @staticmethod
    def execute(args) -> None:
        settings = getattr(args, "settings", None)
        if not isinstance(settings, FetchSettings):
            settings = FetchSettings.from_env()
        try:
            with open_tarball(args.url, timeout=settings.timeout) as stream:
                found = copy_member(
                    stream,
                    args.member,
                    sys.stdout.buffer,
                    compressed=args.compressed,
                    chunk_size=settings.chunk_size,
                )
        except Exception as exc:
            fail(exc, "Reading member failed")
            return

        sys.stdout.buffer.flush()
        if not found:
            exit_with_error(f"Member not found in archive: {args.member}", ExitCodes.MEMBER_NOT_FOUND)
