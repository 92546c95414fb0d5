"""
Custom exception classes for tarfetch.
"""

from typing import Optional


class TarfetchError(Exception):
    """Base exception class for tarfetch errors."""
    pass


class RetrievalError(TarfetchError):
    """Raised when a remote tarball cannot be fetched or returns a non-success status."""

    def __init__(self, message: str, url: Optional[str] = None, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class FormatError(TarfetchError):
    """Raised when the bytes are not valid gzip-compressed tar data."""
    pass


class PathSafetyError(TarfetchError):
    """Raised when an entry path would land outside the destination directory."""

    def __init__(self, message: str, entry_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.entry_name = entry_name


class WriteError(TarfetchError):
    """Raised when a local file or directory cannot be created or written."""
    pass
