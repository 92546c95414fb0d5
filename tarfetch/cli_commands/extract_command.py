"""Extract command handling for the tarfetch CLI."""

from pathlib import Path

from tarfetch.cli_helpers import fail
from tarfetch.common.config import FetchSettings
from tarfetch.core.extract import extract_tarball


class ExtractCommand:
    """Fetches a gzipped tarball and unpacks it into a directory."""

    @staticmethod
    def add_parser(subparsers) -> None:
        """Add extract command parser to subparsers."""
        parser = subparsers.add_parser('extract', help='Fetch a .tar.gz and unpack it into a directory')
        parser.add_argument('url', help='Tarball URL (http, https or file)')
        parser.add_argument('destination', help='Directory to extract into (created if missing)')
        parser.set_defaults(func=ExtractCommand.execute)

    @staticmethod
    def execute(args) -> None:
        """Run the extraction and print a summary line."""
        settings = getattr(args, "settings", None)
        if not isinstance(settings, FetchSettings):
            settings = FetchSettings.from_env()
        destination = Path(args.destination).expanduser()
        try:
            result = extract_tarball(args.url, destination, settings)
        except Exception as exc:
            fail(exc, "Extraction failed")
            return

        print(
            f"Extracted {result.files} files and {result.directories} directories "
            f"into {result.destination} ({result.flavor.value}, {result.bytes_read} bytes fetched)"
        )
