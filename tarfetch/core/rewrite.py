"""Archive flavor detection and entry path rewriting.

Source-control export tools (``git archive`` and friends) emit a PAX global
header before any real content and wrap every path in one synthetic top-level
directory. Seeing the header switches the archive to export flavor for the
rest of the stream, after which the first path segment of every entry is
dropped. Plain archives keep their names unchanged.
"""

from __future__ import annotations

import enum
from typing import NamedTuple, Optional

from ..common.constants import PAX_GLOBAL_HEADER


class ArchiveFlavor(enum.Enum):
    PLAIN = "plain"
    SOURCE_CONTROL_EXPORT = "source-control-export"


class RewriteResult(NamedTuple):
    flavor: ArchiveFlavor
    # None when the entry must not be materialized.
    path: Optional[str]


def strip_first_segment(name: str) -> str:
    """Drop the leading path segment: ``top/a/b`` -> ``a/b``, ``top`` -> ``""``."""
    return "/".join(name.split("/")[1:])


def rewrite_entry_path(flavor: ArchiveFlavor, raw_name: str) -> RewriteResult:
    """Return the flavor after `raw_name` and the path it should be written to."""
    if raw_name == PAX_GLOBAL_HEADER:
        return RewriteResult(ArchiveFlavor.SOURCE_CONTROL_EXPORT, None)

    if flavor is ArchiveFlavor.SOURCE_CONTROL_EXPORT:
        stripped = strip_first_segment(raw_name)
        # The wrapper directory itself maps to the destination root; skip it.
        return RewriteResult(flavor, stripped or None)

    return RewriteResult(flavor, raw_name)


class PathRewriter:
    """Holds the flavor for one extraction and applies `rewrite_entry_path`."""

    def __init__(self) -> None:
        self.flavor = ArchiveFlavor.PLAIN

    def rewrite(self, raw_name: str) -> Optional[str]:
        result = rewrite_entry_path(self.flavor, raw_name)
        self.flavor = result.flavor
        return result.path
