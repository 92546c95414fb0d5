"""Remote tarball retrieval."""

from __future__ import annotations

import contextlib
import urllib.error
import urllib.request
from typing import BinaryIO, Iterator

from ..common.constants import DEFAULT_TIMEOUT
from ..common.errors import RetrievalError
from ..common.logging_config import get_logger

_log = get_logger(__name__)

_SUCCESS_STATUS = 200


class CountingReader:
    """File-like wrapper that counts the bytes read through it."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self.count = 0

    def read(self, size: int = -1) -> bytes:
        try:
            data = self._stream.read(size)
        except (urllib.error.URLError, OSError, TimeoutError) as exc:
            raise RetrievalError(f"Connection failed while reading tarball: {exc}") from exc
        self.count += len(data)
        return data


@contextlib.contextmanager
def open_tarball(url: str, timeout: float = DEFAULT_TIMEOUT) -> Iterator[CountingReader]:
    """Open `url` and yield its body as a counting byte stream.

    The response is closed on every exit path. Only a 200 status is accepted;
    non-HTTP locators (file://) carry no status and are accepted once opened.
    """
    _log.info("Fetching tarball: %s", url)
    try:
        response = urllib.request.urlopen(url, timeout=timeout)  # noqa: S310
    except urllib.error.HTTPError as exc:
        raise RetrievalError(
            f"Bad status code fetching tarball: {url} ({exc.code})", url=url, status=exc.code
        ) from exc
    except (urllib.error.URLError, OSError, TimeoutError, ValueError) as exc:
        raise RetrievalError(f"Could not fetch tarball: {url} ({exc})", url=url) from exc

    with response:
        status = getattr(response, "status", None)
        if status is not None and status != _SUCCESS_STATUS:
            raise RetrievalError(
                f"Bad status code fetching tarball: {url} ({status})", url=url, status=status
            )
        yield CountingReader(response)
