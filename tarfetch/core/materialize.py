"""Write archive entries to the local filesystem."""

from __future__ import annotations

import os
from pathlib import Path

from ..common.constants import DEFAULT_CHUNK_SIZE, DIRECTORY_MODE, FILE_PERMISSION_MASK
from ..common.errors import PathSafetyError, WriteError
from ..common.logging_config import get_logger
from .demux import ArchiveEntry

_log = get_logger(__name__)


class Materializer:
    """Creates directories and files below a single destination root.

    Every target is resolved (following any symlinks already on disk) and must
    stay inside the root, otherwise `PathSafetyError` is raised before anything
    is created. A failed copy leaves the partial file in place.
    """

    def __init__(self, destination: Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self.destination = Path(destination)
        self.chunk_size = chunk_size
        self._root = None

    def prepare(self) -> Path:
        """Create the destination root and any missing parents."""
        try:
            self.destination.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise WriteError(f"Cannot create destination {self.destination}: {exc}") from exc
        self._root = self.destination.resolve()
        return self._root

    @property
    def root(self) -> Path:
        if self._root is None:
            return self.prepare()
        return self._root

    def resolve_target(self, final_path: str) -> Path:
        """Map an entry path to an absolute location inside the root."""
        root = self.root
        target = (root / final_path).resolve()
        if target != root and root not in target.parents:
            raise PathSafetyError(
                f"Unsafe tar member path detected: {final_path!r}", entry_name=final_path
            )
        return target

    def materialize(self, final_path: str, entry: ArchiveEntry) -> Path:
        target = self.resolve_target(final_path)
        if entry.is_directory:
            self._make_directory(target)
        else:
            if target == self.root:
                raise PathSafetyError(
                    f"File entry would replace the destination root: {final_path!r}",
                    entry_name=final_path,
                )
            self._write_file(target, entry)
        return target

    def _make_directory(self, target: Path) -> None:
        if target == self.root:
            return
        try:
            target.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
            os.chmod(target, DIRECTORY_MODE)
        except OSError as exc:
            raise WriteError(f"Cannot create directory {target}: {exc}") from exc

    def _write_file(self, target: Path, entry: ArchiveEntry) -> None:
        mode = entry.permission_bits & FILE_PERMISSION_MASK
        try:
            target.parent.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
            # Replace what a previous run left here; its mode may forbid writing.
            if target.exists() and not target.is_dir():
                target.unlink()
            fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        except OSError as exc:
            raise WriteError(f"Cannot create file {target}: {exc}") from exc

        try:
            with os.fdopen(fd, "wb") as out_file:
                while True:
                    chunk = entry.content.read(self.chunk_size)
                    if not chunk:
                        break
                    out_file.write(chunk)
            os.chmod(target, mode)
        except OSError as exc:
            raise WriteError(f"Failed writing {target}: {exc}") from exc
        _log.debug("Wrote %s (%d bytes, mode %o)", target, entry.size_bytes, mode)
