"""Shared CLI helpers for tarfetch commands."""

import sys
from typing import Optional

from tarfetch.common.constants import ExitCodes
from tarfetch.common.errors import (
    FormatError,
    PathSafetyError,
    RetrievalError,
    WriteError,
)


def exit_with_error(message: str, exit_code: int) -> None:
    """Print an error message and exit with the specified code."""
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(exit_code)


def map_exception_to_exit_code(exc: Exception) -> Optional[int]:
    """Translate known exceptions to tarfetch exit codes."""
    if isinstance(exc, RetrievalError):
        return ExitCodes.RETRIEVAL_FAILED
    if isinstance(exc, FormatError):
        return ExitCodes.INVALID_ARCHIVE
    if isinstance(exc, PathSafetyError):
        return ExitCodes.UNSAFE_PATH
    if isinstance(exc, WriteError):
        return ExitCodes.WRITE_FAILED
    return None


def fail(exc: Exception, prefix: str) -> None:
    """Exit with the code mapped from `exc`, or UNEXPECTED_ERROR."""
    exit_code = map_exception_to_exit_code(exc)
    if exit_code is None:
        exit_with_error(f"{prefix}: {exc}", ExitCodes.UNEXPECTED_ERROR)
    exit_with_error(str(exc), exit_code)
