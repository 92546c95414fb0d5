"""Settings helpers for tarfetch.

Values come from the environment when the CLI builds them; library callers can
construct `FetchSettings` directly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import DEFAULT_CHUNK_SIZE, DEFAULT_TIMEOUT


def env_int(key: str, default: int, environ: Optional[Mapping[str, str]] = None) -> int:
    value = (environ if environ is not None else os.environ).get(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class FetchSettings:
    """Typed fetch/extract settings."""

    timeout: float = DEFAULT_TIMEOUT
    chunk_size: int = DEFAULT_CHUNK_SIZE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "FetchSettings":
        timeout = env_int("TARFETCH_TIMEOUT", DEFAULT_TIMEOUT, environ)
        chunk_size = env_int("TARFETCH_CHUNK_SIZE", DEFAULT_CHUNK_SIZE, environ)
        return cls(
            timeout=timeout if timeout > 0 else DEFAULT_TIMEOUT,
            chunk_size=chunk_size if chunk_size > 0 else DEFAULT_CHUNK_SIZE,
        )
