"""Gzip decoding stage."""

from __future__ import annotations

import gzip
import zlib
from typing import BinaryIO

from ..common.errors import FormatError

# Errors the gzip decoder raises for data that is not (or no longer) valid gzip.
GZIP_DECODE_ERRORS = (gzip.BadGzipFile, EOFError, zlib.error)


def open_gzip_stream(stream: BinaryIO) -> gzip.GzipFile:
    """Wrap `stream` in a streaming gzip decoder.

    The gzip header is checked up front so that a stream with the wrong magic
    number fails here, before anything downstream touches the filesystem.
    Closing the returned object leaves `stream` open.
    """
    decoded = gzip.GzipFile(fileobj=stream, mode="rb")
    try:
        head = decoded.peek(1)
    except GZIP_DECODE_ERRORS as exc:
        raise FormatError(f"Not a gzip stream: {exc}") from exc
    if not head:
        raise FormatError("Not a gzip stream: no data")
    return decoded
