"""Sequential tar entry reader.

Entries are produced in stream order from a non-seekable byte stream
(`tarfile` stream mode). Each entry's content must be consumed, or abandoned,
before the next one is requested; abandoned content is skipped by `tarfile`.
"""

from __future__ import annotations

import io
import tarfile
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, Optional

from ..common.constants import PAX_GLOBAL_HEADER, ROOT_MARKERS
from ..common.errors import FormatError
from .decompress import GZIP_DECODE_ERRORS

READ_ERRORS = (tarfile.TarError,) + GZIP_DECODE_ERRORS


class CorruptHeaderError(tarfile.TarError):
    """A header block that is neither a valid header nor an end-of-archive marker."""


class StrictTarInfo(tarfile.TarInfo):
    """TarInfo that refuses to read a damaged header as the end of the archive.

    `tarfile` only reports bad or short headers at offset 0; anywhere later it
    quietly stops. Raising a non-header error here makes `TarFile.next()`
    propagate it. Zero blocks and a clean EOF still end the archive.
    """

    @classmethod
    def frombuf(cls, buf, encoding, errors):
        try:
            return super().frombuf(buf, encoding, errors)
        except (tarfile.TruncatedHeaderError, tarfile.InvalidHeaderError) as exc:
            raise CorruptHeaderError(str(exc)) from exc


class EntryStream:
    """Read-once view of one entry's content that reports decode failures as `FormatError`."""

    def __init__(self, name: str, stream: Optional[BinaryIO]) -> None:
        self._name = name
        self._stream = stream if stream is not None else io.BytesIO()

    def read(self, size: int = -1) -> bytes:
        try:
            return self._stream.read(size)
        except READ_ERRORS as exc:
            raise FormatError(f"Corrupt data in entry {self._name!r}: {exc}") from exc


@dataclass
class ArchiveEntry:
    """One record of a tar stream."""

    logical_path: str
    is_directory: bool
    size_bytes: int
    permission_bits: int
    kind: str = "file"
    content: Optional[EntryStream] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.content is None:
            self.content = EntryStream(self.logical_path, None)

    @property
    def is_file(self) -> bool:
        return self.kind == "file"


def _entry_kind(member: tarfile.TarInfo) -> str:
    if member.isdir():
        return "directory"
    if member.isreg():
        return "file"
    if member.issym():
        return "symlink"
    if member.islnk():
        return "hardlink"
    return "special"


class TarDemuxer:
    """Iterate a decoded tar stream as `ArchiveEntry` objects.

    The root marker entry (``./``) is dropped here. A PAX global header, which
    `tarfile` folds into ``TarFile.pax_headers`` rather than returning as a
    member, is surfaced once as a content-less ``pax_global_header`` entry at
    the point it was read, so later stages can see it in order.
    """

    def __init__(self, stream: BinaryIO) -> None:
        try:
            # Stream mode reads the first header immediately.
            self._tar = tarfile.open(fileobj=stream, mode="r|", tarinfo=StrictTarInfo)
        except READ_ERRORS as exc:
            raise FormatError(f"Invalid tar stream: {exc}") from exc
        self._global_header_seen = False

    def close(self) -> None:
        self._tar.close()

    def __enter__(self) -> "TarDemuxer":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _next_member(self) -> Optional[tarfile.TarInfo]:
        try:
            return self._tar.next()
        except READ_ERRORS as exc:
            raise FormatError(f"Malformed tar entry header: {exc}") from exc

    def __iter__(self) -> Iterator[ArchiveEntry]:
        # tarfile.open() already parsed the first member; next() hands it back.
        while True:
            member = self._next_member()
            if not self._global_header_seen and self._tar.pax_headers:
                self._global_header_seen = True
                yield ArchiveEntry(
                    logical_path=PAX_GLOBAL_HEADER,
                    is_directory=False,
                    size_bytes=0,
                    permission_bits=0,
                    kind="pax_global_header",
                )
            if member is None:
                return
            if member.name in ROOT_MARKERS:
                continue
            yield self._to_entry(member)

    def _to_entry(self, member: tarfile.TarInfo) -> ArchiveEntry:
        kind = _entry_kind(member)
        content = None
        if kind == "file":
            try:
                content = self._tar.extractfile(member)
            except READ_ERRORS as exc:
                raise FormatError(f"Unreadable tar entry {member.name!r}: {exc}") from exc
        return ArchiveEntry(
            logical_path=member.name,
            is_directory=kind == "directory",
            size_bytes=member.size,
            permission_bits=member.mode,
            kind=kind,
            content=EntryStream(member.name, content),
        )
