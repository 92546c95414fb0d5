"""Fetch a gzipped tarball and unpack it into a directory.

Pipeline: fetch -> gunzip -> tar entries -> path rewrite -> filesystem.
Everything is pulled one entry at a time; only the current entry's bytes are
in flight. Any failure aborts the run and leaves whatever was already written.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from ..common.config import FetchSettings
from ..common.constants import DEFAULT_CHUNK_SIZE, PAX_GLOBAL_HEADER
from ..common.errors import TarfetchError
from ..common.logging_config import get_logger
from .decompress import open_gzip_stream
from .demux import TarDemuxer
from .materialize import Materializer
from .rewrite import ArchiveFlavor, PathRewriter
from .source import open_tarball


class ExtractionState(enum.Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    DECOMPRESSING = "decompressing"
    EXTRACTING = "extracting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ExtractionResult:
    """Summary of one completed extraction."""

    destination: Path
    flavor: ArchiveFlavor
    files: int = 0
    directories: int = 0
    skipped: int = 0
    bytes_read: int = 0


class TarballExtractor:
    """Runs a single extraction into `destination`.

    An instance is single use: once it reaches DONE or FAILED it cannot be run
    again. Concurrent extractions into the same destination must be serialized
    by the caller.
    """

    def __init__(self, destination: Path, settings: Optional[FetchSettings] = None) -> None:
        self.destination = Path(destination)
        self.settings = settings or FetchSettings()
        self.state = ExtractionState.IDLE
        self._rewriter = PathRewriter()
        self._log = get_logger(__name__)

    @property
    def flavor(self) -> ArchiveFlavor:
        return self._rewriter.flavor

    def _enter(self, state: ExtractionState) -> None:
        self._log.debug("Extraction state %s -> %s", self.state.value, state.value)
        self.state = state

    def _check_idle(self) -> None:
        if self.state is not ExtractionState.IDLE:
            raise TarfetchError(f"Extractor already used (state: {self.state.value})")

    def run(self, url: str) -> ExtractionResult:
        """Fetch `url` and extract it."""
        self._check_idle()
        self._enter(ExtractionState.FETCHING)
        try:
            with open_tarball(url, timeout=self.settings.timeout) as stream:
                result = self._extract(stream)
                result.bytes_read = stream.count
        except Exception:
            self._enter(ExtractionState.FAILED)
            raise
        self._log.info(
            "Extracted %s into %s: %d files, %d directories, %d skipped (%s, %d bytes fetched)",
            url,
            result.destination,
            result.files,
            result.directories,
            result.skipped,
            result.flavor.value,
            result.bytes_read,
        )
        return result

    def extract_stream(self, stream: BinaryIO) -> ExtractionResult:
        """Extract an already-open gzipped tar byte stream."""
        self._check_idle()
        try:
            return self._extract(stream)
        except Exception:
            self._enter(ExtractionState.FAILED)
            raise

    def _extract(self, stream: BinaryIO) -> ExtractionResult:
        self._enter(ExtractionState.DECOMPRESSING)
        with open_gzip_stream(stream) as decoded, TarDemuxer(decoded) as entries:
            # Only create the destination once the data looks like a tarball.
            materializer = Materializer(self.destination, chunk_size=self.settings.chunk_size)
            root = materializer.prepare()
            result = ExtractionResult(destination=root, flavor=self.flavor)
            self._enter(ExtractionState.EXTRACTING)

            for entry in entries:
                before = self.flavor
                final_path = self._rewriter.rewrite(entry.logical_path)
                if self.flavor is not before:
                    self._log.info("Detected source-control export archive; stripping top-level directory")
                if final_path is None:
                    if entry.logical_path != PAX_GLOBAL_HEADER:
                        result.skipped += 1
                        self._log.debug("Skipping wrapper directory entry %r", entry.logical_path)
                    continue
                if not (entry.is_directory or entry.is_file):
                    result.skipped += 1
                    self._log.warning(
                        "Skipping unsupported %s entry %r", entry.kind, entry.logical_path
                    )
                    continue

                self._log.debug("Extracting %r -> %r", entry.logical_path, final_path)
                materializer.materialize(final_path, entry)
                if entry.is_directory:
                    result.directories += 1
                else:
                    result.files += 1

        result.flavor = self.flavor
        self._enter(ExtractionState.DONE)
        return result


def extract_tarball(url: str, destination: Path, settings: Optional[FetchSettings] = None) -> ExtractionResult:
    """Fetch the gzipped tarball at `url` and unpack it under `destination`."""
    return TarballExtractor(destination, settings).run(url)


def untargzip(stream: BinaryIO, destination: Path, settings: Optional[FetchSettings] = None) -> ExtractionResult:
    """Unpack a gzipped tar byte stream under `destination`."""
    return TarballExtractor(destination, settings).extract_stream(stream)


def copy_member(stream: BinaryIO, name: str, dst: BinaryIO, *, compressed: bool = True,
                chunk_size: int = DEFAULT_CHUNK_SIZE) -> bool:
    """Copy the content of the entry named exactly `name` into `dst`.

    Entry names are matched as stored in the archive, with no rewriting.
    Scanning stops at the first match. Returns False when no entry matched.
    """
    if compressed:
        with open_gzip_stream(stream) as decoded:
            return _copy_member(decoded, name, dst, chunk_size)
    return _copy_member(stream, name, dst, chunk_size)


def _copy_member(stream: BinaryIO, name: str, dst: BinaryIO, chunk_size: int) -> bool:
    with TarDemuxer(stream) as entries:
        for entry in entries:
            if entry.logical_path != name:
                continue
            while True:
                chunk = entry.content.read(chunk_size)
                if not chunk:
                    break
                dst.write(chunk)
            return True
    return False
